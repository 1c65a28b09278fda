from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..models.config import AnalysisConfig
from ..models.results import (
    AnalysisReport,
    CheckResult,
    CheckStatus,
    DkimResult,
    DmarcResult,
    MxResult,
    PtrResult,
    SpfResult,
)
from ..modules import dkim, dmarc, mx, ptr, reputation, spf
from ..pipeline.context import AnalysisContext
from ..utils.network import QueryLedger
from ..utils.normalize import normalize_domain

logger = logging.getLogger(__name__)


async def _wrap_check_async(result_type: type[CheckResult], coro) -> CheckResult:
    try:
        return await coro
    except Exception as exc:
        logger.warning("checker failed", extra={"check": result_type.__name__, "error": str(exc)})
        return result_type(status=CheckStatus.FAIL, issues=[str(exc) or exc.__class__.__name__])


async def run_analysis(domain: str, ip: Optional[str], context: AnalysisContext) -> AnalysisReport:
    config = context.config
    client = context.dns_client
    mx_result, spf_result, dkim_result, dmarc_result, ptr_result = await asyncio.gather(
        _wrap_check_async(MxResult, mx.run(domain, client, config)),
        _wrap_check_async(SpfResult, spf.run(domain, client, config)),
        _wrap_check_async(DkimResult, dkim.run(domain, client, config)),
        _wrap_check_async(DmarcResult, dmarc.run(domain, client, config)),
        _wrap_check_async(PtrResult, ptr.run(ip, client, config)),
    )
    score = reputation.score_reputation(spf_result, dkim_result, dmarc_result)
    logger.info(
        "analysis complete",
        extra={"domain": domain, "score": score.score, "level": score.level},
    )
    return AnalysisReport(
        domain=domain,
        mx=mx_result,
        spf=spf_result,
        dkim=dkim_result,
        dmarc=dmarc_result,
        ptr=ptr_result,
        reputation=score,
    )


async def analyze(
    domain: str,
    ip: Optional[str] = None,
    config: AnalysisConfig | None = None,
    dns_client=None,
    ledger: QueryLedger | None = None,
) -> AnalysisReport:
    """Normalize *domain* and run every check against it.

    Raises ``InvalidInputError`` before any DNS traffic when the domain is
    empty or malformed. Lookup failures never escape; they are reported in
    the matching check result.
    """
    normalized = normalize_domain(domain)
    config = config or AnalysisConfig()
    if dns_client is None:
        context = AnalysisContext.from_config(config, ledger=ledger)
    else:
        context = AnalysisContext(config=config, dns_client=dns_client, ledger=ledger)
    return await run_analysis(normalized, ip, context)


def analyze_sync(
    domain: str,
    ip: Optional[str] = None,
    config: AnalysisConfig | None = None,
    dns_client=None,
    ledger: QueryLedger | None = None,
) -> AnalysisReport:
    return asyncio.run(analyze(domain, ip=ip, config=config, dns_client=dns_client, ledger=ledger))
