from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from riskrate_cli.exceptions import ValidationError

QUARTERS: Tuple[str, ...] = ("Q1", "Q2", "Q3", "Q4")

ACTIVE = "Active"
INACTIVE = "Inactive"

PLANNED = "Planned"
IN_PROGRESS = "In Progress"
COMPLETED = "Completed"
TREATMENT_STATUSES: Tuple[str, ...] = (PLANNED, IN_PROGRESS, COMPLETED)


def parse_quarter(value: Any) -> int:
    """Return the quarter number 1..4 for ``"Q3"``, ``"q3"``, ``"3"`` or ``3``."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid quarter: {value!r}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        text = value.strip().upper()
        if text.startswith("Q"):
            text = text[1:]
        try:
            number = int(text)
        except ValueError:
            raise ValidationError(f"Invalid quarter: {value!r}") from None
    else:
        raise ValidationError(f"Invalid quarter: {value!r}")
    if number < 1 or number > 4:
        raise ValidationError(f"Invalid quarter: {value!r}")
    return number


def parse_year(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid year: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"Invalid year: {value!r}")


@dataclass(frozen=True, order=True)
class Period:
    """A reporting quarter. Ordered by year, then quarter."""

    year: int
    quarter: int

    def __post_init__(self) -> None:
        for value in (self.year, self.quarter):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    f"Period needs integer year and quarter, got {value!r}; use Period.parse for text."
                )
        if self.quarter < 1 or self.quarter > 4:
            raise ValidationError(f"Invalid quarter: {self.quarter!r}")

    @classmethod
    def parse(cls, year: Any, quarter: Any) -> Period:
        return cls(year=parse_year(year), quarter=parse_quarter(quarter))

    @property
    def label(self) -> str:
        return f"Q{self.quarter}"

    def __str__(self) -> str:
        return f"{self.year} {self.label}"


class ControlType(Enum):
    PREVENTIVE = "Preventive"
    DETECTIVE = "Detective"
    CORRECTIVE = "Corrective"
    MITIGATING = "Mitigating"

    @property
    def reduces_likelihood(self) -> bool:
        return self in (ControlType.PREVENTIVE, ControlType.DETECTIVE)

    @classmethod
    def parse(cls, value: Any) -> Optional[ControlType]:
        """Map a raw control type to a member; empty values mean "not set"."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if isinstance(value, ControlType):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValidationError(f"Unknown control type: {value!r}")


@dataclass(frozen=True)
class PercentRef:
    """Effectiveness given inline as a percentage."""

    percent: float


@dataclass(frozen=True)
class OptionRef:
    """Effectiveness given as a reference to an EffectivenessOption."""

    option_id: str


EffectivenessRef = Union[PercentRef, OptionRef]


@dataclass(frozen=True)
class EffectivenessEntry:
    period: Period
    ref: EffectivenessRef


@dataclass
class EffectivenessOption:
    id: str
    name: str
    factor: Optional[float]
    description: str = ""


@dataclass
class RiskRatingBand:
    name: str
    min_score: float
    max_score: float
    color: str

    def contains(self, score: float) -> bool:
        return self.min_score <= score <= self.max_score


@dataclass
class ScaleSetting:
    name: str
    score: int

    def __post_init__(self) -> None:
        if isinstance(self.score, bool) or not isinstance(self.score, int) or self.score < 1:
            raise ValidationError(
                f"{type(self).__name__} '{self.name}' must have a positive integer score, "
                f"got {self.score!r}."
            )


@dataclass
class ImpactSetting(ScaleSetting):
    pass


@dataclass
class LikelihoodSetting(ScaleSetting):
    pass


@dataclass
class Risk:
    id: str
    code: str
    name: str
    status: str
    inherent_impact: int
    inherent_likelihood: int
    category: str = ""
    owner: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        for axis in ("inherent_impact", "inherent_likelihood"):
            value = getattr(self, axis)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"Risk {self.label}: {axis} must be an integer, got {value!r}.")
            if value < 0:
                raise ValidationError(f"Risk {self.label}: {axis} cannot be negative ({value}).")

    @property
    def label(self) -> str:
        return self.code or self.id

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE


@dataclass
class RiskTreatment:
    id: str
    risk_id: str
    treatment: str
    converted_to_control: bool
    control_type: Optional[ControlType] = None
    status: str = PLANNED
    owner: str = ""
    effectiveness: List[EffectivenessEntry] = field(default_factory=list)


@dataclass
class CycleQuarter:
    quarter: int
    start: date
    end: date


@dataclass
class AssessmentCycle:
    year: int
    quarters: List[CycleQuarter] = field(default_factory=list)


@dataclass
class TenantSnapshot:
    """Reference data for one tenant, loaded before any scoring runs."""

    risks: List[Risk] = field(default_factory=list)
    treatments: List[RiskTreatment] = field(default_factory=list)
    ratings: List[RiskRatingBand] = field(default_factory=list)
    impact_settings: List[ImpactSetting] = field(default_factory=list)
    likelihood_settings: List[LikelihoodSetting] = field(default_factory=list)
    effectiveness_options: List[EffectivenessOption] = field(default_factory=list)
    cycles: List[AssessmentCycle] = field(default_factory=list)

    def active_risks(self) -> List[Risk]:
        return [risk for risk in self.risks if risk.is_active]

    def treatments_for(self, risk: Risk) -> List[RiskTreatment]:
        return [t for t in self.treatments if t.risk_id == risk.id]
