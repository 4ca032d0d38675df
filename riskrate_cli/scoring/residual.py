from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Sequence

from riskrate_cli.exceptions import ValidationError
from riskrate_cli.models.reports import ResidualScore
from riskrate_cli.models.risks import (
    EffectivenessEntry,
    EffectivenessOption,
    Period,
    Risk,
    RiskTreatment,
)
from riskrate_cli.scoring.effectiveness import reduction_factor, resolve_factor

logger = logging.getLogger(__name__)


def enacted_controls(treatments: Iterable[RiskTreatment]) -> List[RiskTreatment]:
    return [t for t in treatments if t.converted_to_control]


def entries_until(treatment: RiskTreatment, target: Period) -> List[EffectivenessEntry]:
    """Entries assessed on or before *target*, oldest first.

    The treatment's own list is left untouched.
    """
    selected = [entry for entry in treatment.effectiveness if entry.period <= target]
    return sorted(selected, key=lambda entry: entry.period)


def compute_residual(
    risk: Risk,
    treatments: Sequence[RiskTreatment],
    target: Period,
    options: Sequence[EffectivenessOption] = (),
) -> ResidualScore:
    """Compound enacted controls into the residual impact and likelihood of *risk*.

    Every effectiveness entry up to *target* multiplies its axis by
    ``1 - factor/100``: Preventive and Detective controls act on likelihood,
    Corrective and Mitigating controls on impact. Each axis is rounded half up
    after all reductions, and never drops below 1 unless its inherent score
    is 0.
    """
    impact = Decimal(risk.inherent_impact)
    likelihood = Decimal(risk.inherent_likelihood)

    for treatment in enacted_controls(treatments):
        if treatment.control_type is None:
            raise ValidationError(
                f"Control '{treatment.treatment}' of risk {risk.label} has no control type."
            )
        for entry in entries_until(treatment, target):
            percent = resolve_factor(entry.ref, options)
            if percent is None:
                logger.debug(
                    "Skipping unresolvable effectiveness %r of control %s (%s)",
                    entry.ref, treatment.id, entry.period,
                )
                continue
            if treatment.control_type.reduces_likelihood:
                likelihood *= reduction_factor(percent)
            else:
                impact *= reduction_factor(percent)

    return ResidualScore(
        impact=_round_axis(impact, risk.inherent_impact),
        likelihood=_round_axis(likelihood, risk.inherent_likelihood),
    )


def _round_axis(value: Decimal, inherent: int) -> int:
    rounded = int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    if inherent > 0 and rounded < 1:
        return 1
    return rounded
