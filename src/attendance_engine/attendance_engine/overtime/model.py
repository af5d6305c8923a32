from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OvertimeResult:
    """Both presentations of a day's work.

    `capped_minutes` is net time cut at the standard day; `net_minutes` is
    the uncapped figure. Callers pick one and stick to it.
    """

    is_overtime: bool
    overtime_minutes: int
    standard_minutes: int
    capped_minutes: int
    net_minutes: int
