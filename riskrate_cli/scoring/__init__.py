from riskrate_cli.scoring.calculator import inherent_rating, rate, residual_rating, score
from riskrate_cli.scoring.classifier import classify
from riskrate_cli.scoring.effectiveness import (
    parse_effectiveness_ref,
    reduction_factor,
    resolve_factor,
)
from riskrate_cli.scoring.heatmap import (
    axis_labels,
    build_grid,
    inherent_heatmap,
    residual_heatmap,
)
from riskrate_cli.scoring.residual import compute_residual
from riskrate_cli.scoring.trend import trend

__all__ = [
    "axis_labels",
    "build_grid",
    "classify",
    "compute_residual",
    "inherent_heatmap",
    "inherent_rating",
    "parse_effectiveness_ref",
    "rate",
    "reduction_factor",
    "residual_heatmap",
    "residual_rating",
    "resolve_factor",
    "score",
    "trend",
]
