from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class SampleResult(Generic[T]):
    """Best-effort sample: ``values`` may hold fewer than ``requested`` items."""

    values: list[T]
    requested: int

    @property
    def satisfied(self) -> bool:
        return len(self.values) >= self.requested

    @property
    def shortfall(self) -> int:
        return max(0, self.requested - len(self.values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)


def sort_values(values: list, sort: str | None, key=None) -> None:
    if sort == "asc":
        values.sort(key=key)
    elif sort == "desc":
        values.sort(key=key, reverse=True)
