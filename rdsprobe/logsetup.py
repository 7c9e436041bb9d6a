# logsetup.py
#
# (c) 2023 rdsprobe authors
#


"""
Module logsetup

This is a wrapper for logging setup.

For details see: https://stackoverflow.com/a/7622029
"""

import logging
import sys

from . import libconstants as const

NOTSET = logging.NOTSET
DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL


def setup_root_logger(format=const.LOG_FORMAT):
    root = logging.getLogger()

    handler = logging.StreamHandler(sys.stdout)
    handler.flush = sys.stdout.flush
    formatter = logging.Formatter(format)
    handler.setFormatter(formatter)

    root.addHandler(handler)

    return root


def get_root_logger():
    return logging.getLogger()


def level_for_verbosity(verbosity: int) -> int:
    if verbosity <= -2:
        return CRITICAL
    elif verbosity <= -1:
        return ERROR
    elif verbosity == 0:  # the default
        return WARNING
    elif verbosity == 1:
        return INFO
    else:
        return DEBUG
