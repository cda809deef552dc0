from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Unexcused:
    """Absence that accrues a penalty."""

    penalty: int

    @property
    def is_excused(self) -> bool:
        return False

    @property
    def excuse_reason(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class Excused:
    """Absence waived by the teacher; never carries a penalty."""

    reason: str

    @property
    def penalty(self) -> int:
        return 0

    @property
    def is_excused(self) -> bool:
        return True

    @property
    def excuse_reason(self) -> Optional[str]:
        return self.reason


# Present records have no standing (None).
Standing = Union[Unexcused, Excused]


@dataclass(frozen=True)
class PenaltyPolicy:
    """Amount charged for one unexcused absence."""

    amount: int = 100

    def __post_init__(self) -> None:
        if int(self.amount) < 0:
            raise ValueError("Penalty amount must be non-negative")
