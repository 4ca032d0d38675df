from __future__ import annotations

from typing import Dict, Sequence

from riskrate_cli.models.reports import ResidualPoint
from riskrate_cli.models.risks import (
    QUARTERS,
    EffectivenessOption,
    Period,
    Risk,
    RiskRatingBand,
    RiskTreatment,
)
from riskrate_cli.scoring.calculator import inherent_rating, rate
from riskrate_cli.scoring.residual import compute_residual


def trend(
    risk: Risk,
    treatments: Sequence[RiskTreatment],
    year: int,
    quarters: Sequence[str] = QUARTERS,
    *,
    bands: Sequence[RiskRatingBand],
    options: Sequence[EffectivenessOption] = (),
) -> Dict[str, ResidualPoint]:
    """Inherent and residual rating of *risk* for each quarter of *year*.

    Each quarter is computed from the full effectiveness history up to it.
    """
    inherent = inherent_rating(risk, bands)
    points: Dict[str, ResidualPoint] = {}
    for quarter in quarters:
        period = Period.parse(year, quarter)
        residual = compute_residual(risk, treatments, period, options)
        points[period.label] = ResidualPoint(
            period=period,
            inherent=inherent,
            residual=rate(residual.impact, residual.likelihood, bands),
            residual_impact=residual.impact,
            residual_likelihood=residual.likelihood,
        )
    return points
