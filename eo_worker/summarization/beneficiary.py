from eo_worker.processor.models import BENEFICIARY_GROUPS, ImpactMapping

CAPITAL_KEYWORDS = ("corporate", "investment", "capital")
DIRECT_AID_KEYWORDS = ("job training", "food", "housing")


def infer_primary_beneficiary(summary: str, impact: ImpactMapping) -> str:
    """Pick the group that gains most from an order. First matching rule wins.

    1. capital/corporate wording in the summary -> "richest"
    2. direct-aid wording in the summary -> "poorest"
    3. all three groups assessed -> the group with the longest sentence;
       ties go to the earlier group in BENEFICIARY_GROUPS
    4. otherwise "average"
    """
    lowered = summary.lower()
    if any(keyword in lowered for keyword in CAPITAL_KEYWORDS):
        return "richest"
    if any(keyword in lowered for keyword in DIRECT_AID_KEYWORDS):
        return "poorest"
    if len(impact) == len(BENEFICIARY_GROUPS) and all(g in impact for g in BENEFICIARY_GROUPS):
        longest = BENEFICIARY_GROUPS[0]
        for group in BENEFICIARY_GROUPS[1:]:
            if len(impact[group]) > len(impact[longest]):
                longest = group
        return longest
    return "average"
