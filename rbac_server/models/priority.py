"""Ordered role priority.

A smaller number carries more authority: priority 1 is the top tier.
Comparisons go through the named helpers so callers never compare raw
integers and flip the direction by accident.
"""

from dataclasses import dataclass

TOP_PRIORITY = 1


@dataclass(frozen=True)
class Priority:
    """Authority rank of a role."""

    value: int

    def __post_init__(self):
        if self.value < TOP_PRIORITY:
            raise ValueError(f"Priority must be >= {TOP_PRIORITY}, got {self.value}")

    def is_at_least_as_strong_as(self, other: "Priority") -> bool:
        return self.value <= other.value

    def is_stronger_than(self, other: "Priority") -> bool:
        return self.value < other.value

    def is_weaker_than(self, other: "Priority") -> bool:
        return self.value > other.value

    @property
    def is_top(self) -> bool:
        return self.value == TOP_PRIORITY

    def __str__(self) -> str:
        return str(self.value)
