"""
RDS reachability probe: sends zero-length messages over a group of RDS sockets
and reports how long sending (and optionally draining) took.
"""

__version__ = '0.1.0'
