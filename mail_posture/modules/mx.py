from __future__ import annotations

from ..models.config import AnalysisConfig
from ..models.results import CheckStatus, MxRecord, MxResult
from ..utils.dns import ResolutionError
from .providers import detect_provider, distinct_providers

ISSUE_NO_MX = "No MX records found"
ISSUE_MULTIPLE_PROVIDERS = "Multiple email providers detected: {providers}"


def evaluate_mx(records: list[MxRecord], config: AnalysisConfig) -> MxResult:
    ordered = sorted(records, key=lambda r: r.priority)
    if not ordered:
        return MxResult(status=CheckStatus.WARN, issues=[ISSUE_NO_MX])

    exchanges = [r.exchange for r in ordered]
    provider = detect_provider(exchanges, config.providers)
    providers = distinct_providers(exchanges, config.providers)
    issues = []
    if len(providers) > 1:
        issues.append(ISSUE_MULTIPLE_PROVIDERS.format(providers=", ".join(providers)))

    return MxResult(
        status=CheckStatus.WARN if issues else CheckStatus.PASS,
        records=ordered,
        provider=provider,
        providers=providers,
        issues=issues,
    )


async def run(domain: str, dns_client, config: AnalysisConfig) -> MxResult:
    try:
        answers = await dns_client.resolve_mx(domain)
    except ResolutionError as exc:
        return MxResult(status=CheckStatus.FAIL, issues=[exc.message])
    records = [MxRecord(exchange=exchange, priority=priority) for exchange, priority in answers]
    return evaluate_mx(records, config)
