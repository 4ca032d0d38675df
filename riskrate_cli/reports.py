from __future__ import annotations

from typing import List, Sequence

from riskrate_cli.models.reports import (
    NOT_AVAILABLE,
    Heatmap,
    RegisterEntry,
    RegisterTreatment,
    TreatmentDistribution,
    TrendRow,
)
from riskrate_cli.models.risks import QUARTERS, Period, RiskTreatment, TenantSnapshot
from riskrate_cli.scoring.calculator import inherent_rating, rate
from riskrate_cli.scoring.distribution import distribution_by_owner, status_distribution
from riskrate_cli.scoring.effectiveness import describe_effectiveness
from riskrate_cli.scoring.heatmap import (
    axis_labels,
    inherent_heatmap,
    residual_heatmap,
)
from riskrate_cli.scoring.residual import compute_residual
from riskrate_cli.scoring.trend import trend


def build_register(snapshot: TenantSnapshot, period: Period) -> List[RegisterEntry]:
    """One entry per active risk; unrated scores show as N/A rather than being dropped."""
    entries: List[RegisterEntry] = []
    options = snapshot.effectiveness_options
    for risk in snapshot.active_risks():
        treatments = snapshot.treatments_for(risk)
        inherent = inherent_rating(risk, snapshot.ratings)
        residual_axes = compute_residual(risk, treatments, period, options)
        residual = rate(residual_axes.impact, residual_axes.likelihood, snapshot.ratings)
        entries.append(RegisterEntry(
            code=risk.label,
            name=risk.name,
            category=risk.category,
            owner=risk.owner,
            inherent_impact=risk.inherent_impact,
            inherent_likelihood=risk.inherent_likelihood,
            inherent_score=inherent.score,
            inherent_rating=inherent.label,
            residual_impact=residual_axes.impact,
            residual_likelihood=residual_axes.likelihood,
            residual_score=residual.score,
            residual_rating=residual.label,
            treatments=[_register_treatment(t, snapshot, period) for t in treatments],
        ))
    return entries


def _register_treatment(
    treatment: RiskTreatment,
    snapshot: TenantSnapshot,
    period: Period,
) -> RegisterTreatment:
    effectiveness = ""
    for entry in treatment.effectiveness:
        if entry.period == period:
            effectiveness = describe_effectiveness(entry.ref, snapshot.effectiveness_options)
    return RegisterTreatment(
        treatment=treatment.treatment,
        kind="Control" if treatment.converted_to_control else "Treatment",
        control_type=treatment.control_type.value if treatment.control_type else "",
        owner=treatment.owner,
        status=treatment.status,
        effectiveness=effectiveness or NOT_AVAILABLE,
    )


def build_heatmaps(snapshot: TenantSnapshot, period: Period) -> List[Heatmap]:
    x_labels = axis_labels(snapshot.impact_settings)
    y_labels = axis_labels(snapshot.likelihood_settings)
    return [
        Heatmap(
            title="Inherent Risk",
            x_labels=x_labels,
            y_labels=y_labels,
            rows=inherent_heatmap(
                snapshot.risks, snapshot.ratings,
                snapshot.impact_settings, snapshot.likelihood_settings,
            ),
        ),
        Heatmap(
            title=f"Residual Risk ({period})",
            x_labels=x_labels,
            y_labels=y_labels,
            rows=residual_heatmap(
                snapshot.risks, snapshot.treatments, snapshot.ratings,
                snapshot.impact_settings, snapshot.likelihood_settings,
                period, snapshot.effectiveness_options,
            ),
        ),
    ]


def build_trend(
    snapshot: TenantSnapshot,
    year: int,
    quarters: Sequence[str] = QUARTERS,
) -> List[TrendRow]:
    rows: List[TrendRow] = []
    for risk in snapshot.active_risks():
        rows.append(TrendRow(
            code=risk.label,
            name=risk.name,
            points=trend(
                risk, snapshot.treatments_for(risk), year, quarters,
                bands=snapshot.ratings, options=snapshot.effectiveness_options,
            ),
        ))
    return rows


def build_treatment_distribution(snapshot: TenantSnapshot) -> TreatmentDistribution:
    return TreatmentDistribution(
        overall=status_distribution(snapshot.treatments),
        by_owner=distribution_by_owner(snapshot.treatments),
    )
