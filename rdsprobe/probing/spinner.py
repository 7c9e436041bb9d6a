# spinner.py
#
# (c) 2023 rdsprobe authors
#

import fcntl
import struct

from rdsprobe import libconstants as const
from rdsprobe.model import ProbeSocket, QueueQueryError, SpinResult


class DrainSpinner:
    """
    Busy-polls the outbound queue of a socket until it is empty or the ceiling is hit.

    The result is a diagnostic signal only: the queue may refill or drain right after
    the last query, and hitting the ceiling is reported, not treated as an error.
    """

    def __init__(self, ceiling: int = const.SPIN_CEILING, ioctl=fcntl.ioctl):
        self.ceiling = ceiling
        self._ioctl = ioctl

    def pending_bytes(self, probe_socket: ProbeSocket) -> int:
        buf = self._ioctl(probe_socket.fd, const.TIOCOUTQ, struct.pack('i', 0))
        return struct.unpack('i', buf)[0]

    def spin(self, probe_socket: ProbeSocket) -> SpinResult:
        spins = 0
        while True:
            try:
                pending = self.pending_bytes(probe_socket)
            except OSError as e:
                return SpinResult.query_failed(spins, QueueQueryError(e))
            spins += 1
            if not pending:
                return SpinResult.drained(spins)
            if spins >= self.ceiling:
                return SpinResult.ceiling_reached(spins)
