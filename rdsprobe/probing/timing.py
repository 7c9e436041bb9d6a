# timing.py
#
# (c) 2023 rdsprobe authors
#

import sys
import time
from typing import List

from prettytable import PrettyTable

from rdsprobe import logsetup
from rdsprobe.model import RunResult
from .group import ProbeGroup
from .scheduler import ProbeScheduler

log = logsetup.get_root_logger()


def elapsed_ms(start: float, end: float) -> float:
    """Milliseconds between two timestamps in seconds, with microsecond precision."""
    usecs = round((end - start) * 1000000)
    return usecs / 1000


class TimingReporter:
    def __init__(self, clock=time.monotonic, out=None):
        self.clock = clock
        self.out = out if out is not None else sys.stdout

    def run(self, scheduler: ProbeScheduler, group: ProbeGroup) -> RunResult:
        start = self.clock()
        result = scheduler.run(group)
        end = self.clock()
        result.elapsed_ms = elapsed_ms(start, end)
        log.debug(f'Scheduling phase took {result.elapsed_ms} msec')
        return result

    @staticmethod
    def summary_line(result: RunResult) -> str:
        return (f'{result.nsockets} sockets took {result.elapsed_ms:f} msec '
                f'to send and spin for {result.total_attempted} packets')

    @staticmethod
    def socket_table(result: RunResult) -> PrettyTable:
        table = PrettyTable(['Socket', 'Sent', 'Spin'])
        for sample in result.samples:
            spin = str(sample.spin) if sample.spin is not None else '--'
            table.add_row((sample.slot, sample.sent, spin))
        return table

    @staticmethod
    def spin_lines(result: RunResult) -> List[str]:
        return [f'Spun for {sample.spin.legacy_count} counts on socket {sample.slot}'
                for sample in result.samples if sample.spin is not None]

    def report(self, result: RunResult, details: bool = False):
        lines = self.spin_lines(result)
        if details:
            lines.append(str(self.socket_table(result)))
        lines.append(self.summary_line(result))
        if result.aborted:
            lines.append(f'Run aborted on socket {result.failure.slot}: '
                         f'{result.packets_sent} of {result.nsockets * result.per_socket_count} packets sent')
        print('\n'.join(lines), file=self.out)
