from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ..models.config import AnalysisConfig
from ..models.results import CheckStatus, DkimResult, DkimSelector
from ..utils.dns import ResolutionError
from ..utils.records import dkim_key_size, dkim_key_type, join_txt, parse_tags

logger = logging.getLogger(__name__)

ISSUE_NOT_FOUND = "No DKIM found on common selectors."
ISSUE_REVOKED = "DKIM key for selector {selector} is revoked"


@dataclass(frozen=True)
class ProbeMiss:
    selector: str
    reason: str


def selector_host(selector: str, domain: str) -> str:
    return f"{selector}._domainkey.{domain}"


def parse_dkim(selector: str, host: str, txt_records: list[str]) -> DkimSelector | ProbeMiss:
    for record in txt_records:
        tags = parse_tags(record)
        if "p" not in tags:
            continue
        public_key = tags["p"]
        return DkimSelector(
            selector=selector,
            host=host,
            key_type=dkim_key_type(tags),
            key_size=dkim_key_size(public_key),
            revoked=not public_key.strip(),
        )
    return ProbeMiss(selector=selector, reason="no p= tag")


async def probe_selector(selector: str, domain: str, dns_client) -> DkimSelector | ProbeMiss:
    host = selector_host(selector, domain)
    try:
        answers = await dns_client.resolve_txt(host)
    except ResolutionError as exc:
        logger.debug("dkim selector miss", extra={"selector": selector, "host": host, "error": exc.message})
        return ProbeMiss(selector=selector, reason=exc.message)
    return parse_dkim(selector, host, [join_txt(segments) for segments in answers])


def evaluate_dkim(probes: list[DkimSelector | ProbeMiss]) -> DkimResult:
    found = [p for p in probes if isinstance(p, DkimSelector)]
    if not found:
        return DkimResult(status=CheckStatus.WARN, issues=[ISSUE_NOT_FOUND])
    issues = [ISSUE_REVOKED.format(selector=s.selector) for s in found if s.revoked]
    return DkimResult(status=CheckStatus.PASS, selectors=found, issues=issues)


async def run(domain: str, dns_client, config: AnalysisConfig) -> DkimResult:
    probes = await asyncio.gather(*(probe_selector(s, domain, dns_client) for s in config.dkim_selectors))
    return evaluate_dkim(list(probes))
