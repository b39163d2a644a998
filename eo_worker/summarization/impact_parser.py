"""Two-tier parsing of the impact-assessment response.

Tier one decodes the response as JSON. Tier two scans it line by line for
``key: value`` pairs, which recovers answers that are almost-JSON (trailing
commas, single quotes, prose around the object). When both tiers find
nothing, the raw text is kept under "average" so validation fails and the
document is retried instead of being stored with a blank assessment.
"""

import json

from eo_worker.processor.models import BENEFICIARY_GROUPS, ImpactMapping

UNPARSED_PREFIX = "Unparsed impact response: "

_KEY_TRIM = " \t\"'{},"
_VALUE_TRIM = " \t\"'{},"


def parse_impact_response(raw: str) -> ImpactMapping:
    """Parse a generation response into a group -> sentence mapping."""
    impact = parse_strict(raw)
    if impact is None:
        impact = parse_lenient(raw)
    if impact is None:
        return {"average": f"{UNPARSED_PREFIX}{raw}", "poorest": "", "richest": ""}
    return impact


def parse_strict(raw: str) -> ImpactMapping | None:
    """Decode the response as a JSON object. None if it is not one."""
    try:
        parsed = json.loads(_strip_code_fence(raw))
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, dict):
        return None
    impact = {
        str(key).strip().lower(): value.strip()
        for key, value in parsed.items()
        if isinstance(value, str)
    }
    return _known_groups(impact)


def parse_lenient(raw: str) -> ImpactMapping | None:
    """Scan 'key: value' lines, splitting each on its first colon."""
    impact: ImpactMapping = {}
    for line in raw.splitlines():
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        impact[key.strip(_KEY_TRIM).lower()] = value.strip(_VALUE_TRIM)
    return _known_groups(impact)


def _known_groups(impact: ImpactMapping) -> ImpactMapping | None:
    known = {group: impact[group] for group in BENEFICIARY_GROUPS if group in impact}
    return known or None


def _strip_code_fence(raw: str) -> str:
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)
    return cleaned
