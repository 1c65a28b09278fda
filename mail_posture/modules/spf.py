from __future__ import annotations

from ..models.config import AnalysisConfig
from ..models.results import CheckStatus, SpfResult
from ..utils.dns import ResolutionError
from ..utils.records import count_spf_lookups, extract_spf, join_txt, parse_spf_policy, spf_all_qualifier, spf_redirect

ISSUE_NO_SPF = "No SPF record found"
ISSUE_MULTIPLE = "Multiple SPF records detected"
ISSUE_TOO_MANY_LOOKUPS = "SPF lookup count ({count}) exceeds {limit}"
ISSUE_PERMISSIVE = "SPF policy is too permissive ({mechanism})"

PERMISSIVE_POLICIES = ("neutral", "pass")


def parse_spf(txt_records: list[str], max_lookups: int = 10) -> SpfResult:
    record, multiple = extract_spf(txt_records)
    if record is None:
        return SpfResult(status=CheckStatus.FAIL, policy="unknown", issues=[ISSUE_NO_SPF])

    lookup_count = count_spf_lookups(record)
    policy = parse_spf_policy(record)
    issues = []
    if multiple:
        issues.append(ISSUE_MULTIPLE)
    if lookup_count > max_lookups:
        issues.append(ISSUE_TOO_MANY_LOOKUPS.format(count=lookup_count, limit=max_lookups))
    if policy in PERMISSIVE_POLICIES:
        qualifier = spf_all_qualifier(record)
        mechanism = f"{qualifier}all" if qualifier else "no all mechanism"
        issues.append(ISSUE_PERMISSIVE.format(mechanism=mechanism))

    return SpfResult(
        status=CheckStatus.WARN if issues else CheckStatus.PASS,
        record=record,
        multiple=multiple,
        lookup_count=lookup_count,
        policy=policy,
        redirect=spf_redirect(record),
        issues=issues,
    )


async def run(domain: str, dns_client, config: AnalysisConfig) -> SpfResult:
    try:
        answers = await dns_client.resolve_txt(domain)
    except ResolutionError as exc:
        if exc.kind != "no_answer":
            return SpfResult(status=CheckStatus.FAIL, policy="unknown", issues=[exc.message])
        answers = []
    return parse_spf([join_txt(segments) for segments in answers], config.max_spf_lookups)
