from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from riskrate_cli.models.risks import AssessmentCycle, Period

logger = logging.getLogger(__name__)


def calendar_period(on: date) -> Period:
    return Period(year=on.year, quarter=(on.month - 1) // 3 + 1)


def current_period(cycles: Sequence[AssessmentCycle], on: date) -> Optional[Period]:
    """Period whose assessment window contains *on*, if any cycle defines one."""
    for cycle in cycles:
        for window in cycle.quarters:
            if window.start <= on <= window.end:
                return Period(year=cycle.year, quarter=window.quarter)
    return None


def resolve_period(cycles: Sequence[AssessmentCycle], on: date) -> Period:
    period = current_period(cycles, on)
    if period is None:
        period = calendar_period(on)
        logger.debug("No assessment cycle covers %s, using calendar quarter %s", on, period)
    return period
