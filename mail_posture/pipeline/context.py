from __future__ import annotations

from dataclasses import dataclass

from ..models.config import AnalysisConfig
from ..utils.dns import DnsClient
from ..utils.network import QueryLedger


@dataclass
class AnalysisContext:
    config: AnalysisConfig
    dns_client: DnsClient
    ledger: QueryLedger | None = None

    @classmethod
    def from_config(cls, config: AnalysisConfig, ledger: QueryLedger | None = None) -> "AnalysisContext":
        dns_client = DnsClient(nameservers=config.nameservers, timeout_seconds=config.timeout_seconds, ledger=ledger)
        return cls(config=config, dns_client=dns_client, ledger=ledger)
