# scheduler.py
#
# (c) 2023 rdsprobe authors
#

import time
from typing import Optional, Tuple

from rdsprobe import logsetup
from rdsprobe.config import RunConfig
from rdsprobe.model import ProbeSocket, RunResult, SendError, SocketSample
from .group import ProbeGroup
from .spinner import DrainSpinner

log = logsetup.get_root_logger()

_EMPTY = b''


class ProbeScheduler:
    """
    Sends the probes of a run, one socket after the other in slot order.

    Sockets are never serviced concurrently, so that the drain spin of one socket is not
    skewed by traffic of the others. The first failing send stops the run; what was sent
    until then is kept in the result.
    """

    def __init__(self, conf: RunConfig, spinner: Optional[DrainSpinner] = None, clock=time.time):
        self.conf = conf
        self.spinner = spinner
        self.clock = clock

    def run(self, group: ProbeGroup) -> RunResult:
        dst = self.conf.destination.sockaddr()
        failure = None
        for probe_socket in group:
            try:
                self._send_on_socket(probe_socket, dst)
            except SendError as e:
                log.error(str(e))
                failure = e
                break
            if self.spinner is not None:
                probe_socket.spin = self.spinner.spin(probe_socket)
                log.debug(f'Spun for {probe_socket.spin.legacy_count} counts on socket {probe_socket.slot}')
        samples = [SocketSample.of(it) for it in group]
        return RunResult(self.conf.per_socket_count, samples, failure)

    def _send_on_socket(self, probe_socket: ProbeSocket, dst: Tuple):
        for _ in range(self.conf.per_socket_count):
            try:
                probe_socket.sock.sendto(_EMPTY, dst)
            except (OSError, TypeError) as e:
                raise SendError(probe_socket.slot, probe_socket.sent, e)
            probe_socket.sent += 1
            probe_socket.last_sent_ts = self.clock()
