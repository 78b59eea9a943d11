from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class AllocationSuccess:
    raw: int
    display: int

    @property
    def is_zero(self) -> bool:
        return self.display == 0


@dataclass(frozen=True)
class AllocationFailure:
    reason: str


AllocationResult = Union[AllocationSuccess, AllocationFailure]


@dataclass(frozen=True)
class BatchEntry:
    """One submitted address in a batch; duplicates carry no result"""
    position: int
    address: str
    duplicate: bool = False
    result: Optional[AllocationResult] = None

    @property
    def found(self) -> bool:
        return isinstance(self.result, AllocationSuccess) and not self.result.is_zero


@dataclass(frozen=True)
class BatchReport:
    entries: Tuple[BatchEntry, ...]
    total: int
    unique: int
    duplicates: int
    found: int
    total_allocation: int

    @property
    def successes(self) -> Tuple[BatchEntry, ...]:
        return tuple(e for e in self.entries if isinstance(e.result, AllocationSuccess))

    @property
    def nonzero(self) -> Tuple[BatchEntry, ...]:
        return tuple(e for e in self.entries if e.found)

    @property
    def zero(self) -> Tuple[BatchEntry, ...]:
        return tuple(e for e in self.successes if e.result.is_zero)

    @property
    def failures(self) -> Tuple[BatchEntry, ...]:
        return tuple(e for e in self.entries if isinstance(e.result, AllocationFailure))

    @property
    def duplicate_entries(self) -> Tuple[BatchEntry, ...]:
        return tuple(e for e in self.entries if e.duplicate)
