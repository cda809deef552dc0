from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily status stored in the attendance table."""

    PRESENT = "present"
    ABSENT = "absent"
