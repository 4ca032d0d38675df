from __future__ import annotations

from typing import Dict, Iterable, List

from riskrate_cli.models.risks import (
    COMPLETED,
    IN_PROGRESS,
    TREATMENT_STATUSES,
    RiskTreatment,
)


def evaluate_status(treatment: RiskTreatment) -> str:
    """A completed treatment only counts as completed once it became a control."""
    if treatment.status == COMPLETED and not treatment.converted_to_control:
        return IN_PROGRESS
    return treatment.status


def status_distribution(treatments: Iterable[RiskTreatment]) -> Dict[str, int]:
    counts = {status: 0 for status in TREATMENT_STATUSES}
    for treatment in treatments:
        status = evaluate_status(treatment)
        counts[status] = counts.get(status, 0) + 1
    return counts


def distribution_by_owner(treatments: Iterable[RiskTreatment]) -> Dict[str, Dict[str, int]]:
    grouped: Dict[str, List[RiskTreatment]] = {}
    for treatment in treatments:
        grouped.setdefault(treatment.owner or "Unassigned", []).append(treatment)
    return {owner: status_distribution(items) for owner, items in sorted(grouped.items())}
