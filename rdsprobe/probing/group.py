from typing import Iterator, List

from rdsprobe import logsetup
from rdsprobe.model import ProbeSocket
from .factory import SocketFactory

log = logsetup.get_root_logger()


class ProbeGroup:
    """
    Owns the sockets of one run, in slot order.

    with ProbeGroup(factory, 8) as group:
        for probe_socket in group:
            ...

    All sockets are closed when the block is left, also if opening the group failed half-way.
    """

    def __init__(self, factory: SocketFactory, size: int):
        self.factory = factory
        self.size = size
        self.sockets: List[ProbeSocket] = []

    def open(self):
        for slot in range(self.size):
            self.sockets.append(self.factory.create(slot))
        log.info(f'Opened {len(self.sockets)} RDS sockets')

    def close(self):
        for probe_socket in self.sockets:
            try:
                probe_socket.close()
            except OSError:
                log.exception(f'Failed to close socket {probe_socket.slot}')
        self.sockets = []

    def __enter__(self):
        try:
            self.open()
        except BaseException:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __iter__(self) -> Iterator[ProbeSocket]:
        return iter(self.sockets)

    def __len__(self):
        return len(self.sockets)
