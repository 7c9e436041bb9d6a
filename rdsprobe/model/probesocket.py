import socket
from typing import Optional

from .spinresult import SpinResult


class ProbeSocket:
    """
    A single RDS socket of a probe group. The slot doubles as the sequence identifier,
    since probes carry no payload that could be matched against replies.
    """

    def __init__(self, sock: socket.socket, slot: int):
        self.sock = sock
        self.slot = slot
        self.sent = 0
        self.last_sent_ts: Optional[float] = None
        # replies are not tracked, the counter stays at zero
        self.nreplies = 0
        self.spin: Optional[SpinResult] = None

    @property
    def fd(self) -> int:
        return self.sock.fileno()

    def close(self):
        self.sock.close()

    def __str__(self):
        return f'ProbeSocket(slot={self.slot}, sent={self.sent})'
