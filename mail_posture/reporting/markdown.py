from __future__ import annotations

from datetime import datetime, timezone

from ..models.results import AnalysisReport, CheckResult


def _check_lines(title: str, result: CheckResult, details: list[str]) -> list[str]:
    lines = [f"### {title}: {result.status.value}"]
    lines.extend(f"- {d}" for d in details)
    for issue in result.issues:
        lines.append(f"- Issue: {issue}")
    lines.append("")
    return lines


def build_summary(report: AnalysisReport) -> str:
    lines = [f"# Email Posture: {report.domain}", "", f"Generated: {datetime.now(timezone.utc).isoformat()}", ""]
    lines.append("## Reputation")
    lines.append(f"- Score: {report.reputation.score} ({report.reputation.level})")
    for note in report.reputation.notes:
        lines.append(f"- {note}")
    lines.append("")

    lines.append("## Checks")
    provider = report.mx.provider.name if report.mx.provider else "n/a"
    lines.extend(
        _check_lines(
            "MX",
            report.mx,
            [f"Provider: {provider}"] + [f"{r.priority} {r.exchange}" for r in report.mx.records],
        )
    )

    spf_details = []
    if report.spf.record:
        spf_details = [
            f"Record: `{report.spf.record}`",
            f"Policy: {report.spf.policy}",
            f"Lookups: {report.spf.lookup_count}",
        ]
    lines.extend(_check_lines("SPF", report.spf, spf_details))

    lines.extend(
        _check_lines(
            "DKIM",
            report.dkim,
            [f"{s.selector}: {s.key_type} {s.key_size}" for s in report.dkim.selectors],
        )
    )

    dmarc_details = []
    if report.dmarc.record:
        dmarc_details = [
            f"Record: `{report.dmarc.record}`",
            f"Policy: {report.dmarc.policy} (pct={report.dmarc.pct})",
            f"Alignment: adkim={report.dmarc.adkim} aspf={report.dmarc.aspf}",
        ]
    lines.extend(_check_lines("DMARC", report.dmarc, dmarc_details))

    ptr_details = []
    if report.ptr.hostname:
        ptr_details = [f"{report.ptr.ip} -> {report.ptr.hostname}", f"FC-rDNS: {'yes' if report.ptr.fc_rdns else 'no'}"]
    lines.extend(_check_lines("PTR", report.ptr, ptr_details))

    return "\n".join(lines).rstrip() + "\n"
