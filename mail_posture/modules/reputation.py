from __future__ import annotations

from ..models.results import DkimResult, DmarcResult, Reputation, SpfResult

ENFORCING_SPF_POLICIES = ("fail", "softfail")
GOOD_THRESHOLD = 80
MEDIUM_THRESHOLD = 50


def _score_from_rules(max_score: int, rules: list[dict]) -> tuple[int, list[str], list[dict]]:
    score = max_score
    notes: list[str] = []
    applied: list[dict] = []
    for rule in rules:
        if rule["triggered"]:
            score -= int(rule["deduction"])
            notes.append(rule["label"])
            applied.append(
                {
                    "id": rule["id"],
                    "label": rule["label"],
                    "deduction": rule["deduction"],
                }
            )
    return max(score, 0), notes, applied


def reputation_level(score: int) -> str:
    if score >= GOOD_THRESHOLD:
        return "Good"
    if score >= MEDIUM_THRESHOLD:
        return "Medium"
    return "High Risk"


def score_reputation(spf: SpfResult, dkim: DkimResult, dmarc: DmarcResult) -> Reputation:
    rules = [
        {
            "id": "spf.not_enforcing",
            "label": "SPF policy is not enforcing (fail/softfail)",
            "deduction": 20,
            "triggered": spf.policy not in ENFORCING_SPF_POLICIES,
        },
        {
            "id": "dkim.missing",
            "label": "No DKIM selectors found",
            "deduction": 30,
            # revoked keys (empty p=) still count as published selectors
            "triggered": not dkim.selectors,
        },
        {
            "id": "dkim.weak_key",
            "label": "DKIM uses a 1024-bit key",
            "deduction": 10,
            "triggered": bool(dkim.selectors) and any(s.key_size == "1024-bit" for s in dkim.selectors),
        },
        {
            "id": "dmarc.policy_none",
            "label": "DMARC policy is none",
            "deduction": 20,
            "triggered": dmarc.policy == "none",
        },
    ]
    score, notes, applied = _score_from_rules(100, rules)
    return Reputation(score=score, level=reputation_level(score), notes=notes, applied_rules=applied)
