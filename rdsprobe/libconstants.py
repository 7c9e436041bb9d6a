# libconstants.py
#
# (c) 2023 rdsprobe authors
#


"""
Holds project wide constants.
"""

import socket
import termios

# RDS socket family, available as socket.AF_RDS on Linux builds of CPython
AF_RDS = getattr(socket, 'AF_RDS', 21)

# ioctl numbers, see linux/sockios.h and linux/rds.h
SIOCPROTOPRIVATE = 0x89E0
SIOCRDSSETTOS = SIOCPROTOPRIVATE
# bytes queued for output, same request number as SIOCOUTQ
TIOCOUTQ = termios.TIOCOUTQ

# socket group bounds
NSOCKETS_DEFAULT = 8
NSOCKETS_MIN = 1
NSOCKETS_MAX = 32

TOS_MIN = 0
TOS_MAX = 255

# busy-poll ceiling for the outbound queue drain spin
SPIN_CEILING = 100000

# placeholder port used while asking the kernel for a route
ROUTE_PROBE_PORT = 1

LOG_FORMAT = '%(asctime)s - %(module)s - %(funcName)s - %(levelname)s: %(message)s'
