from typing import List, Optional

from .exception import SendError
from .probesocket import ProbeSocket
from .spinresult import SpinResult


class SocketSample:
    """Per-socket outcome of a run, detached from the (closed) socket."""

    def __init__(self, slot: int, sent: int, spin: Optional[SpinResult] = None):
        self.slot = slot
        self.sent = sent
        self.spin = spin

    @classmethod
    def of(cls, probe_socket: ProbeSocket) -> 'SocketSample':
        return cls(probe_socket.slot, probe_socket.sent, probe_socket.spin)


class RunResult:
    def __init__(self, per_socket_count: int, samples: List[SocketSample], failure: Optional[SendError] = None):
        self.per_socket_count = per_socket_count
        self.samples = samples
        self.failure = failure
        self.elapsed_ms: float = 0.0

    @property
    def nsockets(self) -> int:
        return len(self.samples)

    @property
    def completed_sockets(self) -> int:
        return sum(1 for it in self.samples if it.sent == self.per_socket_count)

    @property
    def packets_sent(self) -> int:
        return sum(it.sent for it in self.samples)

    @property
    def total_attempted(self) -> int:
        return self.completed_sockets * self.per_socket_count

    @property
    def aborted(self) -> bool:
        return self.failure is not None

    @property
    def spin_samples(self) -> List[SpinResult]:
        return [it.spin for it in self.samples if it.spin is not None]
