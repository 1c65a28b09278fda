from __future__ import annotations

import ipaddress
from typing import Optional

from ..models.config import AnalysisConfig
from ..models.results import CheckStatus, PtrResult
from ..utils.dns import ResolutionError

ISSUE_NO_IP = "No IP provided"
ISSUE_INVALID_IP = "Invalid IP address: {ip}"
ISSUE_NO_PTR = "No PTR record found for {ip}"
ISSUE_FCRDNS_FAILED = "FC-rDNS failed: {hostname} does not resolve back to {ip}"


def _same_address(candidates: list[str], address: ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
    for candidate in candidates:
        try:
            if ipaddress.ip_address(candidate) == address:
                return True
        except ValueError:
            continue
    return False


async def run(ip: Optional[str], dns_client, config: AnalysisConfig | None = None) -> PtrResult:
    if not ip or not ip.strip():
        return PtrResult(status=CheckStatus.SKIPPED, issues=[ISSUE_NO_IP])

    ip = ip.strip()
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return PtrResult(status=CheckStatus.FAIL, ip=ip, issues=[ISSUE_INVALID_IP.format(ip=ip)])

    try:
        hostnames = await dns_client.reverse(ip)
    except ResolutionError as exc:
        return PtrResult(status=CheckStatus.FAIL, ip=ip, issues=[exc.message])
    if not hostnames:
        return PtrResult(status=CheckStatus.FAIL, ip=ip, issues=[ISSUE_NO_PTR.format(ip=ip)])

    hostname = hostnames[0]
    try:
        if address.version == 6:
            forward = await dns_client.resolve_aaaa(hostname)
        else:
            forward = await dns_client.resolve_a(hostname)
    except ResolutionError as exc:
        return PtrResult(status=CheckStatus.FAIL, ip=ip, hostname=hostname, issues=[exc.message])

    fc_rdns = _same_address(forward, address)
    return PtrResult(
        status=CheckStatus.PASS if fc_rdns else CheckStatus.FAIL,
        ip=ip,
        hostname=hostname,
        fc_rdns=fc_rdns,
        issues=[] if fc_rdns else [ISSUE_FCRDNS_FAILED.format(hostname=hostname, ip=ip)],
    )
