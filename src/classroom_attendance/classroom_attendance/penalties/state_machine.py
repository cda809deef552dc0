"""Excuse / reinstate transitions for a single absence.

Only absent records have a standing. Each transition returns a whole new
standing, so ``penalty``, ``is_excused`` and ``excuse_reason`` always move
together.
"""

from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidTransitionError
from .model import Excused, PenaltyPolicy, Standing, Unexcused


def initial_standing(status: AttendanceStatus, policy: PenaltyPolicy) -> Optional[Standing]:
    """Standing of a freshly submitted record."""

    if status == AttendanceStatus.ABSENT:
        return Unexcused(penalty=int(policy.amount))
    return None


def excuse(standing: Optional[Standing], reason: str) -> Excused:
    # Reason is validated by the caller.
    if not isinstance(standing, Unexcused):
        raise InvalidTransitionError("Only an unexcused absence can be excused")
    return Excused(reason=reason)


def reinstate(standing: Optional[Standing], policy: PenaltyPolicy) -> Unexcused:
    if not isinstance(standing, Excused):
        raise InvalidTransitionError("Only an excused absence can have its penalty reinstated")
    return Unexcused(penalty=int(policy.amount))
