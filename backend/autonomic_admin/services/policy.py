"""Administration policies supplied by the optimization algorithms."""
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class AdministrationPolicy(Protocol):
    """Anything that knows how long to wait between two passes on a cluster."""

    @property
    def minimum_interval_seconds(self) -> int:
        ...


@dataclass(frozen=True)
class FixedIntervalPolicy:
    """Policy with a constant interval, e.g. one consolidation per hour."""

    minimum_interval_seconds: int
    name: str = "fixed-interval"
