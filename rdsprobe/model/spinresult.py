from enum import Enum
from typing import Optional

from .exception import QueueQueryError


class SpinOutcome(Enum):
    DRAINED = 'drained'
    CEILING_REACHED = 'ceiling-reached'
    QUERY_FAILED = 'query-failed'


class SpinResult:
    def __init__(self, outcome: SpinOutcome, spins: int, error: Optional[QueueQueryError] = None):
        self.outcome = outcome
        self.spins = spins
        self.error = error

    @classmethod
    def drained(cls, spins: int) -> 'SpinResult':
        return cls(SpinOutcome.DRAINED, spins)

    @classmethod
    def ceiling_reached(cls, spins: int) -> 'SpinResult':
        return cls(SpinOutcome.CEILING_REACHED, spins)

    @classmethod
    def query_failed(cls, spins: int, error: QueueQueryError) -> 'SpinResult':
        return cls(SpinOutcome.QUERY_FAILED, spins, error)

    @property
    def succeeded(self) -> bool:
        return self.outcome is not SpinOutcome.QUERY_FAILED

    @property
    def legacy_count(self) -> int:
        """Spin count, or the negated errno (at least -1) if the queue query failed."""
        if self.outcome is SpinOutcome.QUERY_FAILED:
            # a failed query without errno must still read as a failure
            return -(self.error.errno or 1)
        return self.spins

    def __str__(self):
        if self.outcome is SpinOutcome.QUERY_FAILED:
            return f'{self.outcome.value} ({self.error.strerror})'
        return f'{self.spins} ({self.outcome.value})'
