from __future__ import annotations

from typing import List

import pytest

from riskrate_cli.exceptions import ValidationError
from riskrate_cli.models.risks import RiskRatingBand
from riskrate_cli.scoring.classifier import classify


def _bands() -> List[RiskRatingBand]:
    return [
        RiskRatingBand(name="Low", min_score=1, max_score=4, color="green"),
        RiskRatingBand(name="Medium", min_score=5, max_score=14, color="amber"),
        RiskRatingBand(name="High", min_score=15, max_score=25, color="red"),
    ]


class TestClassify:
    @pytest.mark.parametrize("score,expected", [
        (1, "Low"),
        (4, "Low"),
        (5, "Medium"),
        (14, "Medium"),
        (15, "High"),
        (25, "High"),
    ])
    def test_bounds_are_inclusive(self, score: int, expected: str) -> None:
        band = classify(score, _bands())
        assert band is not None
        assert band.name == expected

    def test_exactly_one_band_matches_covered_scores(self) -> None:
        bands = _bands()
        for score in range(1, 26):
            assert sum(1 for b in bands if b.contains(score)) == 1
            assert classify(score, bands) is classify(score, bands)

    def test_miss_returns_none(self) -> None:
        assert classify(0, _bands()) is None
        assert classify(30, _bands()) is None

    def test_fractional_score_between_bands_misses(self) -> None:
        assert classify(4.5, _bands()) is None

    def test_no_bands(self) -> None:
        assert classify(10, []) is None

    def test_overlapping_bands_first_in_supplied_order_wins(self) -> None:
        bands = [
            RiskRatingBand(name="Wide", min_score=1, max_score=25, color="grey"),
            RiskRatingBand(name="Narrow", min_score=10, max_score=12, color="blue"),
        ]
        band = classify(11, bands)
        assert band is not None
        assert band.name == "Wide"

        band = classify(11, list(reversed(bands)))
        assert band is not None
        assert band.name == "Narrow"

    def test_negative_score_raises(self) -> None:
        with pytest.raises(ValidationError, match="cannot be negative"):
            classify(-1, _bands())
