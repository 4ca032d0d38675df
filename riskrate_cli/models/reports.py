from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from riskrate_cli.models.risks import Period, RiskRatingBand

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class ResidualScore:
    impact: int
    likelihood: int


@dataclass(frozen=True)
class ScoreResult:
    score: int
    band: Optional[RiskRatingBand]
    label: str = field(init=False)

    def __post_init__(self) -> None:
        label = self.band.name if self.band is not None else NOT_AVAILABLE
        object.__setattr__(self, "label", label)

    @property
    def color(self) -> Optional[str]:
        return self.band.color if self.band is not None else None


@dataclass(frozen=True)
class ResidualPoint:
    period: Period
    inherent: ScoreResult
    residual: ScoreResult
    residual_impact: int
    residual_likelihood: int


@dataclass
class HeatmapCell:
    impact: int
    likelihood: int
    score: int
    band: Optional[RiskRatingBand]
    risk_ids: List[str] = field(default_factory=list)

    @property
    def color(self) -> Optional[str]:
        return self.band.color if self.band is not None else None


@dataclass
class RegisterTreatment:
    treatment: str
    kind: str
    control_type: str
    owner: str
    status: str
    effectiveness: str


@dataclass
class RegisterEntry:
    code: str
    name: str
    category: str
    owner: str
    inherent_impact: int
    inherent_likelihood: int
    inherent_score: int
    inherent_rating: str
    residual_impact: int
    residual_likelihood: int
    residual_score: int
    residual_rating: str
    treatments: List[RegisterTreatment] = field(default_factory=list)


@dataclass
class TrendRow:
    code: str
    name: str
    points: Dict[str, ResidualPoint] = field(default_factory=dict)


@dataclass
class Heatmap:
    title: str
    x_labels: List[int]
    y_labels: List[int]
    rows: List[List[HeatmapCell]] = field(default_factory=list)


@dataclass
class TreatmentDistribution:
    overall: Dict[str, int] = field(default_factory=dict)
    by_owner: Dict[str, Dict[str, int]] = field(default_factory=dict)
