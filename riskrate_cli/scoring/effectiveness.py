from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence, Union

from riskrate_cli.exceptions import ValidationError
from riskrate_cli.models.risks import (
    EffectivenessOption,
    EffectivenessRef,
    OptionRef,
    PercentRef,
)


def parse_effectiveness_ref(raw: Any) -> EffectivenessRef:
    """Normalize a raw effectiveness value into a tagged reference.

    The console stores either an inline percentage, the id of an
    effectiveness option, or the populated option document itself.
    """
    if isinstance(raw, (PercentRef, OptionRef)):
        return raw
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(f"Invalid effectiveness reference: {raw!r}")
    if isinstance(raw, (int, float)):
        return PercentRef(percent=float(raw))
    if isinstance(raw, str):
        if not raw.strip():
            raise ValidationError("Effectiveness reference cannot be empty.")
        return OptionRef(option_id=raw.strip())
    if isinstance(raw, Mapping):
        option_id = raw.get("_id", raw.get("id"))
        if option_id is None or option_id == "":
            raise ValidationError(f"Effectiveness reference has no id: {dict(raw)!r}")
        return OptionRef(option_id=str(option_id))
    raise ValidationError(f"Invalid effectiveness reference: {raw!r}")


def resolve_factor(
    ref: Union[EffectivenessRef, int, float],
    options: Sequence[EffectivenessOption],
) -> Optional[float]:
    """Return the effectiveness percentage for *ref*, or ``None`` if unresolvable."""
    if isinstance(ref, bool):
        raise ValidationError(f"Invalid effectiveness reference: {ref!r}")
    if isinstance(ref, (int, float)):
        ref = PercentRef(percent=float(ref))

    if isinstance(ref, PercentRef):
        return _checked_percent(ref.percent, "inline effectiveness")

    for option in options:
        if option.id == ref.option_id:
            if option.factor is None:
                return None
            return _checked_percent(option.factor, f"effectiveness option '{option.name}'")
    return None


def reduction_factor(percent: float) -> Decimal:
    """Multiplier applied to a risk axis by a control of the given effectiveness."""
    return Decimal(1) - Decimal(str(percent)) / Decimal(100)


def describe_effectiveness(ref: EffectivenessRef, options: Sequence[EffectivenessOption]) -> str:
    percent = resolve_factor(ref, options)
    if percent is None:
        return ""
    if isinstance(ref, OptionRef):
        for option in options:
            if option.id == ref.option_id:
                return f"{option.name} ({_format_percent(percent)}%)"
    return f"{_format_percent(percent)}%"


def _checked_percent(value: float, what: str) -> float:
    if not 0 <= value <= 100:
        raise ValidationError(f"The {what} must be between 0 and 100, got {value}.")
    return float(value)


def _format_percent(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
