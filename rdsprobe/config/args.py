import argparse
import sys
import textwrap

from .. import __version__
from .. import libconstants as const
from ..libtools.numparse import parse_long


def _number(text: str) -> int:
    try:
        return parse_long(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid number <{text}>')


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        # any usage error is a configuration error, exit code 1
        self.print_usage(sys.stderr)
        self.exit(1, f'{self.prog}: error: {message}\n')


def _prepare_parser():
    created_parser = _Parser(
        prog='rdsprobe',
        description=textwrap.dedent(
            'Test reachability of a remote RDS node by sending zero-length packets to port 0 '
            'over a group of RDS sockets.'
        )
    )
    created_parser.add_argument('--version', action='version', version=f'%(prog)s version {__version__}')
    created_parser.add_argument('destination', metavar='dst_addr', help='Destination address or host name')

    probe_grp = created_parser.add_argument_group(title='PROBING', description=None)
    probe_grp.add_argument(
        '-c', '--count', type=_number, default=0,
        help='Limit packet count per socket (default one packet per socket). '
             'Accepts k/m/g suffixes.'
    )
    probe_grp.add_argument(
        '-n', '--sockets', type=_number, default=None,
        help=f'Number of RDS sockets used, {const.NSOCKETS_MIN}-{const.NSOCKETS_MAX} '
             f'(default {const.NSOCKETS_DEFAULT}, or the packet count if lower)'
    )
    probe_grp.add_argument(
        '-I', '--source', metavar='interface', default=None,
        help='Source IP address (default guessed from the route to the destination)'
    )
    probe_grp.add_argument(
        '-Q', '--tos', type=_number, default=0,
        help='Type of service applied to each socket (default none)'
    )
    probe_grp.add_argument(
        '-s', '--spin', action='store_true', default=False,
        help='Spin on the outbound queue (SIOCOUTQ) of each socket until it drained'
    )

    log_grp = created_parser.add_argument_group(title='LOGGING', description=None)
    logmutualgrp = log_grp.add_mutually_exclusive_group()
    logmutualgrp.add_argument('-v', '--verbose', action='count', help='Increase verbosity once per call', default=0)
    logmutualgrp.add_argument('-q', '--quiet', action='count', help='Decrease verbosity once per call', default=0)

    return created_parser


parser = _prepare_parser()
