from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from riskrate_cli.client import RiskConsoleClient
from riskrate_cli.exceptions import SnapshotError, ValidationError
from riskrate_cli.models.risks import (
    PLANNED,
    AssessmentCycle,
    ControlType,
    CycleQuarter,
    EffectivenessEntry,
    EffectivenessOption,
    ImpactSetting,
    LikelihoodSetting,
    Period,
    Risk,
    RiskRatingBand,
    RiskTreatment,
    ScaleSetting,
    TenantSnapshot,
    parse_quarter,
    parse_year,
)
from riskrate_cli.scoring.effectiveness import parse_effectiveness_ref

logger = logging.getLogger(__name__)

SNAPSHOT_KEYS = (
    "risks",
    "treatments",
    "ratings",
    "impactSettings",
    "likelihoodSettings",
    "effectivenessOptions",
    "cycles",
)


def fetch_raw_snapshot(client: RiskConsoleClient) -> Dict[str, List[Any]]:
    return {
        "risks": client.list_risks(),
        "treatments": client.list_treatments(),
        "ratings": client.list_ratings(),
        "impactSettings": client.list_impact_settings(),
        "likelihoodSettings": client.list_likelihood_settings(),
        "effectivenessOptions": client.list_effectiveness_options(),
        "cycles": client.list_assessment_cycles(),
    }


def fetch_snapshot(client: RiskConsoleClient) -> TenantSnapshot:
    return parse_snapshot(fetch_raw_snapshot(client))


def read_snapshot(path: Path) -> TenantSnapshot:
    """Load a snapshot previously saved as YAML or JSON."""
    if not path.is_file():
        raise SnapshotError(f"Snapshot file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except UnicodeDecodeError as exc:
        raise SnapshotError(f"Snapshot file {path.name} is not valid UTF-8 text.") from exc
    except yaml.YAMLError as exc:
        raise SnapshotError(f"Snapshot file {path.name} is not valid YAML or JSON.") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise SnapshotError(f"Snapshot file {path.name} must contain a mapping at the top level.")
    return parse_snapshot(raw)


def parse_snapshot(raw: Mapping[str, Any]) -> TenantSnapshot:
    impact_settings = [
        _parse_setting(item, ImpactSetting, "impactName") for item in _items(raw, "impactSettings")
    ]
    likelihood_settings = [
        _parse_setting(item, LikelihoodSetting, "likelihoodName")
        for item in _items(raw, "likelihoodSettings")
    ]
    impact_scores = {_as_id(item): _as_int(item.get("score", 0)) for item in _items(raw, "impactSettings")}
    likelihood_scores = {
        _as_id(item): _as_int(item.get("score", 0)) for item in _items(raw, "likelihoodSettings")
    }

    return TenantSnapshot(
        risks=[
            _parse_risk(item, impact_scores, likelihood_scores) for item in _items(raw, "risks")
        ],
        treatments=[_parse_treatment(item) for item in _items(raw, "treatments")],
        ratings=[_parse_band(item) for item in _items(raw, "ratings")],
        impact_settings=impact_settings,
        likelihood_settings=likelihood_settings,
        effectiveness_options=[_parse_option(item) for item in _items(raw, "effectivenessOptions")],
        cycles=[_parse_cycle(item) for item in _items(raw, "cycles")],
    )


def _items(raw: Mapping[str, Any], key: str) -> List[Dict[str, Any]]:
    value = raw.get(key) or []
    if isinstance(value, dict):
        value = value.get("data", [])
    if not isinstance(value, list):
        raise SnapshotError(f"Snapshot section '{key}' must be a list.")
    return [item for item in value if isinstance(item, dict)]


def _parse_risk(
    raw: Dict[str, Any],
    impact_scores: Dict[str, int],
    likelihood_scores: Dict[str, int],
) -> Risk:
    return Risk(
        id=_as_id(raw),
        code=str(raw.get("no", "") or raw.get("code", "") or ""),
        name=str(raw.get("riskNameElement", "") or raw.get("name", "")).strip(),
        status=str(raw.get("status", "") or ""),
        inherent_impact=_axis_score(raw.get("impact"), impact_scores),
        inherent_likelihood=_axis_score(raw.get("likelihood"), likelihood_scores),
        category=_name_of(raw.get("riskCategory"), "categoryName"),
        owner=_name_of(raw.get("riskOwner"), "name"),
        description=str(raw.get("riskDescription", "") or ""),
    )


def _axis_score(value: Any, scores: Dict[str, int]) -> int:
    """Score of a populated impact/likelihood document, or of the setting it references."""
    if value is None or value == "":
        return 0
    if isinstance(value, dict):
        if "score" in value:
            return _as_int(value.get("score"))
        value = _as_id(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    key = str(value)
    if key not in scores:
        logger.debug("Unknown impact/likelihood setting %s, scoring the axis as 0", key)
        return 0
    return scores[key]


def _parse_treatment(raw: Dict[str, Any]) -> RiskTreatment:
    entries: List[EffectivenessEntry] = []
    for item in raw.get("effectiveness", []) or []:
        if not isinstance(item, dict):
            continue
        ref = item.get("effectiveness")
        if ref is None or ref == "":
            continue
        entries.append(EffectivenessEntry(
            period=Period.parse(item.get("year"), item.get("quarter")),
            ref=parse_effectiveness_ref(ref),
        ))

    risk = raw.get("risk")
    return RiskTreatment(
        id=_as_id(raw),
        risk_id=_as_id(risk) if isinstance(risk, dict) else str(risk or ""),
        treatment=str(raw.get("treatment", "") or "").strip(),
        converted_to_control=raw.get("convertedToControl") is True,
        control_type=ControlType.parse(raw.get("controlType")),
        status=str(raw.get("status", "") or PLANNED),
        owner=_name_of(raw.get("treatmentOwner"), "name"),
        effectiveness=entries,
    )


def _parse_band(raw: Dict[str, Any]) -> RiskRatingBand:
    return RiskRatingBand(
        name=str(raw.get("rating", "") or raw.get("name", "")),
        min_score=_as_number(raw.get("minScore")),
        max_score=_as_number(raw.get("maxScore")),
        color=str(raw.get("color", "") or ""),
    )


def _parse_setting(raw: Dict[str, Any], kind: type, name_key: str) -> ScaleSetting:
    return kind(
        name=str(raw.get(name_key, "") or raw.get("name", "")),
        score=_as_int(raw.get("score")),
    )


def _parse_option(raw: Dict[str, Any]) -> EffectivenessOption:
    factor = raw.get("factor")
    return EffectivenessOption(
        id=_as_id(raw),
        name=str(raw.get("controlEffectiveness", "") or raw.get("name", "")),
        factor=None if factor is None or factor == "" else _as_number(factor),
        description=str(raw.get("description", "") or ""),
    )


def _parse_cycle(raw: Dict[str, Any]) -> AssessmentCycle:
    quarters: List[CycleQuarter] = []
    for item in raw.get("quarters", []) or []:
        if not isinstance(item, dict):
            continue
        quarters.append(CycleQuarter(
            quarter=parse_quarter(item.get("quarter")),
            start=_as_date(item.get("start")),
            end=_as_date(item.get("end")),
        ))
    return AssessmentCycle(year=parse_year(raw.get("year")), quarters=quarters)


def _name_of(value: Any, key: str) -> str:
    if isinstance(value, dict):
        return str(value.get(key, "") or "")
    return str(value or "")


def _as_id(raw: Dict[str, Any]) -> str:
    return str(raw.get("_id", raw.get("id", "")) or "")


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Expected an integer score, got {value!r}.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"Expected an integer score, got {value!r}.")


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"Expected a number, got {value!r}.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"Expected a number, got {value!r}.")


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value) >= 10:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            pass
    raise ValidationError(f"Invalid date in assessment cycle: {value!r}")


def snapshot_to_raw(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only the sections a snapshot file stores, in a stable order."""
    return {key: list(raw.get(key) or []) for key in SNAPSHOT_KEYS}
