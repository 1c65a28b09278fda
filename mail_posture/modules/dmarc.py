from __future__ import annotations

from ..models.config import AnalysisConfig
from ..models.results import CheckStatus, DmarcResult
from ..utils.dns import ResolutionError
from ..utils.records import extract_dmarc, join_txt, parse_tags

ISSUE_NO_DMARC = "No DMARC record found"
ISSUE_POLICY_NONE = "DMARC policy is none"
ISSUE_NO_RUA = "No DMARC rua configured"

POLICIES = ("none", "quarantine", "reject")
ALIGNMENTS = ("r", "s")


def dmarc_host(domain: str) -> str:
    return f"_dmarc.{domain}"


def _parse_pct(value: str | None) -> int | None:
    if value is None:
        return 100
    try:
        pct = int(value)
    except ValueError:
        return None
    if pct < 0 or pct > 100:
        return None
    return pct


def parse_dmarc(txt_records: list[str]) -> DmarcResult:
    record = extract_dmarc(txt_records)
    if record is None:
        return DmarcResult(status=CheckStatus.FAIL, issues=[ISSUE_NO_DMARC])

    tags = parse_tags(record)
    invalid_tags = []

    policy = tags.get("p", "none").lower()
    if policy not in POLICIES:
        invalid_tags.append("p")
        policy = "none"

    subdomain_policy = tags.get("sp")
    if subdomain_policy is not None:
        subdomain_policy = subdomain_policy.lower()
        if subdomain_policy not in POLICIES:
            invalid_tags.append("sp")
            subdomain_policy = None

    pct = _parse_pct(tags.get("pct"))
    if pct is None:
        invalid_tags.append("pct")
        pct = 100

    alignment = {}
    for key in ("adkim", "aspf"):
        value = tags.get(key, "r").lower()
        if value not in ALIGNMENTS:
            invalid_tags.append(key)
            value = "r"
        alignment[key] = value

    rua = tags.get("rua") or None
    issues = []
    if policy == "none":
        issues.append(ISSUE_POLICY_NONE)
    if not rua:
        issues.append(ISSUE_NO_RUA)

    return DmarcResult(
        status=CheckStatus.WARN if issues else CheckStatus.PASS,
        record=record,
        policy=policy,
        subdomain_policy=subdomain_policy,
        pct=pct,
        rua=rua,
        ruf=tags.get("ruf") or None,
        adkim=alignment["adkim"],
        aspf=alignment["aspf"],
        invalid_tags=invalid_tags,
        issues=issues,
    )


async def run(domain: str, dns_client, config: AnalysisConfig) -> DmarcResult:
    try:
        answers = await dns_client.resolve_txt(dmarc_host(domain))
    except ResolutionError:
        return DmarcResult(status=CheckStatus.FAIL, issues=[ISSUE_NO_DMARC])
    return parse_dmarc([join_txt(segments) for segments in answers])
