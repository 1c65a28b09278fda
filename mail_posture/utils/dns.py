from __future__ import annotations

import logging
import time
from typing import Any, List

import dns.asyncresolver
import dns.exception
import dns.name
import dns.resolver
import dns.reversename

from .network import QueryLedger
from .normalize import normalize_hostname

logger = logging.getLogger(__name__)


class ResolutionError(RuntimeError):
    def __init__(self, message: str, kind: str = "error") -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind


def _translate(exc: Exception, name: str, record_type: str) -> ResolutionError:
    if isinstance(exc, dns.resolver.NXDOMAIN):
        return ResolutionError(f"{name} does not exist (NXDOMAIN)", "nxdomain")
    if isinstance(exc, dns.resolver.NoAnswer):
        return ResolutionError(f"No {record_type} records found for {name}", "no_answer")
    if isinstance(exc, dns.resolver.NoNameservers):
        return ResolutionError(f"No nameservers could answer {record_type} for {name}", "no_nameservers")
    if isinstance(exc, dns.exception.Timeout):
        return ResolutionError(f"DNS query for {name} {record_type} timed out", "timeout")
    return ResolutionError(f"DNS query for {name} {record_type} failed: {exc}", "error")


class DnsClient:
    def __init__(
        self,
        nameservers: list[str] | None = None,
        timeout_seconds: float = 5.0,
        ledger: QueryLedger | None = None,
        resolver: Any = None,
    ) -> None:
        if resolver is None:
            resolver = dns.asyncresolver.Resolver(configure=not nameservers)
            if nameservers:
                resolver.nameservers = list(nameservers)
            resolver.lifetime = timeout_seconds
        self.resolver = resolver
        self.ledger = ledger

    async def _query(self, name: str | dns.name.Name, record_type: str) -> list:
        query_name = str(name).rstrip(".")
        start = time.monotonic()
        success = False
        error: ResolutionError | None = None
        answers: list = []
        try:
            answers = list(await self.resolver.resolve(name, record_type))
            success = True
            return answers
        except dns.exception.DNSException as exc:
            error = _translate(exc, query_name, record_type)
            logger.debug(
                "dns lookup failed",
                extra={"query_name": query_name, "type": record_type, "error": error.message, "kind": error.kind},
            )
            raise error from exc
        finally:
            if self.ledger:
                self.ledger.add(
                    query_name=query_name,
                    record_type=record_type,
                    success=success,
                    error=error.message if error else None,
                    error_kind=error.kind if error else None,
                    answers=len(answers),
                    duration_ms=int((time.monotonic() - start) * 1000),
                )

    async def resolve_mx(self, name: str) -> List[tuple[str, int]]:
        answers = await self._query(name, "MX")
        return [(normalize_hostname(r.exchange.to_text()), int(r.preference)) for r in answers]

    async def resolve_txt(self, name: str) -> List[List[str]]:
        answers = await self._query(name, "TXT")
        return [[s.decode("utf-8", errors="replace") for s in r.strings] for r in answers]

    async def reverse(self, ip: str) -> List[str]:
        try:
            ptr_name = dns.reversename.from_address(ip)
        except (ValueError, dns.exception.SyntaxError) as exc:
            raise ResolutionError(f"Invalid IP address: {ip}", "error") from exc
        answers = await self._query(ptr_name, "PTR")
        return [normalize_hostname(r.target.to_text()) for r in answers]

    async def resolve_a(self, hostname: str) -> List[str]:
        answers = await self._query(hostname, "A")
        return [r.address for r in answers]

    async def resolve_aaaa(self, hostname: str) -> List[str]:
        answers = await self._query(hostname, "AAAA")
        return [r.address for r in answers]
