from __future__ import annotations

from typing import Sequence

from riskrate_cli.exceptions import ValidationError
from riskrate_cli.models.reports import ScoreResult
from riskrate_cli.models.risks import (
    EffectivenessOption,
    Period,
    Risk,
    RiskRatingBand,
    RiskTreatment,
)
from riskrate_cli.scoring.classifier import classify
from riskrate_cli.scoring.residual import compute_residual


def score(impact: int, likelihood: int) -> int:
    if impact < 0 or likelihood < 0:
        raise ValidationError(
            f"Impact and likelihood cannot be negative (impact={impact}, likelihood={likelihood})."
        )
    return impact * likelihood


def rate(impact: int, likelihood: int, bands: Sequence[RiskRatingBand]) -> ScoreResult:
    raw = score(impact, likelihood)
    return ScoreResult(score=raw, band=classify(raw, bands))


def inherent_rating(risk: Risk, bands: Sequence[RiskRatingBand]) -> ScoreResult:
    return rate(risk.inherent_impact, risk.inherent_likelihood, bands)


def residual_rating(
    risk: Risk,
    treatments: Sequence[RiskTreatment],
    target: Period,
    bands: Sequence[RiskRatingBand],
    options: Sequence[EffectivenessOption] = (),
) -> ScoreResult:
    residual = compute_residual(risk, treatments, target, options)
    return rate(residual.impact, residual.likelihood, bands)
