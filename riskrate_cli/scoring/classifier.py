from __future__ import annotations

from typing import Optional, Sequence

from riskrate_cli.exceptions import ValidationError
from riskrate_cli.models.risks import RiskRatingBand


def classify(score: float, bands: Sequence[RiskRatingBand]) -> Optional[RiskRatingBand]:
    """Return the first band containing *score*, in the order supplied.

    A score no band covers is not an error; callers render ``None`` as "N/A".
    """
    if score < 0:
        raise ValidationError(f"Risk score cannot be negative ({score}).")
    for band in bands:
        if band.contains(score):
            return band
    return None
