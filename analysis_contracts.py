import math
from typing import Any, Dict, List

from pillars import Pillar, get_spec

PROVENANCE_VALUES = {"strict", "loose", "none"}


def _lint_pillar(pillar: Pillar, node: Any) -> List[str]:
    errors: List[str] = []
    path = pillar.value
    spec = get_spec(pillar)

    if not isinstance(node, dict):
        return [f"{path} must be an object."]

    found = node.get("found")
    if not isinstance(found, bool):
        errors.append(f"{path}.found must be a boolean.")

    provenance = node.get("provenance")
    if provenance not in PROVENANCE_VALUES:
        errors.append(f"{path}.provenance must be one of strict/loose/none (got {provenance}).")

    resolved = node.get("resolved")
    if not isinstance(resolved, dict):
        errors.append(f"{path}.resolved must be an object.")
        resolved = {}
    missing = [field for field in spec.fields if field not in resolved]
    if missing:
        errors.append(f"{path}.resolved is missing fields {missing}.")

    scores = node.get("scores")
    if found is True:
        if provenance == "none":
            errors.append(f"{path} is found but has provenance 'none'.")
        resolved_count = sum(1 for field in spec.fields if resolved.get(field) is True)
        if resolved_count < spec.min_resolved:
            errors.append(
                f"{path} is found with {resolved_count} resolved fields (needs ≥{spec.min_resolved})."
            )
        if not isinstance(scores, dict):
            errors.append(f"{path}.scores must be an object when found.")
            scores = {}
    elif found is False:
        if scores is not None:
            errors.append(f"{path}.scores must be null when not found.")
        if provenance not in (None, "none"):
            errors.append(f"{path} is not found but has provenance '{provenance}'.")
        scores = {}

    for field, value in (scores or {}).items():
        field_path = f"{path}.scores.{field}"
        if field not in spec.fields:
            errors.append(f"{field_path} is not a {path} field.")
            continue
        if resolved.get(field) is not True:
            errors.append(f"{field_path} is present but the field is not resolved.")
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            errors.append(f"{field_path} must be numeric.")
            continue
        if not math.isfinite(value) or not spec.domain.contains(value):
            errors.append(
                f"{field_path} must be between {spec.domain.minimum} and {spec.domain.maximum} (got {value})."
            )

    return errors


def lint_profile_draft(payload: Dict[str, Any]) -> List[str]:
    """Return a list of contract violations for a serialized ProfileDraft."""

    if not isinstance(payload, dict):
        return ["Profile draft payload must be a dictionary."]

    errors: List[str] = []
    for pillar in Pillar:
        if pillar.value not in payload:
            errors.append(f"Missing top-level key: {pillar.value}")
            continue
        errors.extend(_lint_pillar(pillar, payload[pillar.value]))

    matched = payload.get("pillars_matched")
    expected = sum(
        1
        for pillar in Pillar
        if isinstance(payload.get(pillar.value), dict) and payload[pillar.value].get("found") is True
    )
    if matched is not None and matched != expected:
        errors.append(f"pillars_matched={matched} but {expected} pillars are found.")

    return errors
