from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from riskrate_cli.models.reports import HeatmapCell
from riskrate_cli.models.risks import (
    EffectivenessOption,
    Period,
    Risk,
    RiskRatingBand,
    RiskTreatment,
    ScaleSetting,
)
from riskrate_cli.scoring.classifier import classify
from riskrate_cli.scoring.residual import compute_residual

Coordinates = Callable[[Risk], Tuple[int, int]]


def axis_labels(settings: Sequence[ScaleSetting]) -> List[int]:
    """Axis values ``1..max`` for the configured impact or likelihood scale."""
    if not settings:
        return []
    return list(range(1, max(s.score for s in settings) + 1))


def inherent_coordinates(risk: Risk) -> Tuple[int, int]:
    return risk.inherent_impact, risk.inherent_likelihood


def build_grid(
    risks: Sequence[Risk],
    bands: Sequence[RiskRatingBand],
    x_labels: Sequence[int],
    y_labels: Sequence[int],
    coordinates: Optional[Coordinates] = None,
) -> List[List[HeatmapCell]]:
    """Bucket *risks* onto an impact (x) by likelihood (y) grid.

    Rows follow *y_labels*, columns follow *x_labels*. A cell's band depends
    only on ``impact * likelihood``, not on the risks it holds.
    """
    locate = coordinates or inherent_coordinates
    positions = [(risk.label, locate(risk)) for risk in risks]

    grid: List[List[HeatmapCell]] = []
    for likelihood in y_labels:
        row: List[HeatmapCell] = []
        for impact in x_labels:
            cell_score = impact * likelihood
            row.append(HeatmapCell(
                impact=impact,
                likelihood=likelihood,
                score=cell_score,
                band=classify(cell_score, bands),
                risk_ids=[label for label, pos in positions if pos == (impact, likelihood)],
            ))
        grid.append(row)
    return grid


def residual_coordinates(
    treatments: Sequence[RiskTreatment],
    target: Period,
    options: Sequence[EffectivenessOption] = (),
) -> Coordinates:
    def locate(risk: Risk) -> Tuple[int, int]:
        own = [t for t in treatments if t.risk_id == risk.id]
        residual = compute_residual(risk, own, target, options)
        return residual.impact, residual.likelihood

    return locate


def inherent_heatmap(
    risks: Sequence[Risk],
    bands: Sequence[RiskRatingBand],
    impact_settings: Sequence[ScaleSetting],
    likelihood_settings: Sequence[ScaleSetting],
) -> List[List[HeatmapCell]]:
    active = [risk for risk in risks if risk.is_active]
    return build_grid(
        active, bands, axis_labels(impact_settings), axis_labels(likelihood_settings),
    )


def residual_heatmap(
    risks: Sequence[Risk],
    treatments: Sequence[RiskTreatment],
    bands: Sequence[RiskRatingBand],
    impact_settings: Sequence[ScaleSetting],
    likelihood_settings: Sequence[ScaleSetting],
    target: Period,
    options: Sequence[EffectivenessOption] = (),
) -> List[List[HeatmapCell]]:
    active = [risk for risk in risks if risk.is_active]
    return build_grid(
        active, bands, axis_labels(impact_settings), axis_labels(likelihood_settings),
        coordinates=residual_coordinates(treatments, target, options),
    )
