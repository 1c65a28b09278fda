from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from .models.config import DEFAULT_DKIM_SELECTORS, AnalysisConfig
from .models.results import AnalysisReport
from .pipeline.runner import analyze_sync
from .reporting.markdown import build_summary
from .utils.network import QueryLedger
from .utils.normalize import InvalidInputError

app = typer.Typer(add_completion=False)


class OutputFormat(str, Enum):
    json = "json"
    markdown = "markdown"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "time": datetime.now(timezone.utc).isoformat(),
        }
        return json.dumps(payload)


def setup_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, handlers=[handler], force=True)


def _write_json(path: str, data: dict) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=str)


@app.command()
def analyze(
    domain: str = typer.Option(..., "--domain"),
    ip: Optional[str] = typer.Option(None, "--ip", help="Sending IP to check for forward-confirmed reverse DNS."),
    output: OutputFormat = typer.Option(OutputFormat.json, "--format"),
    selectors: Optional[List[str]] = typer.Option(None, "--selector", help="DKIM selector to probe; repeatable."),
    nameservers: Optional[List[str]] = typer.Option(None, "--nameserver", help="Resolver address; repeatable."),
    timeout: float = typer.Option(5.0, "--timeout", help="Per-query DNS lifetime in seconds."),
    max_spf_lookups: int = typer.Option(10, "--max-spf-lookups"),
    ledger_path: Optional[str] = typer.Option(None, "--ledger", help="Write the DNS query ledger to this JSON file."),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Analyze the email authentication posture of a domain."""
    setup_logging(verbose)
    config = AnalysisConfig(
        dkim_selectors=selectors or list(DEFAULT_DKIM_SELECTORS),
        nameservers=nameservers or [],
        timeout_seconds=timeout,
        max_spf_lookups=max_spf_lookups,
    )
    ledger = QueryLedger() if ledger_path else None
    try:
        report = analyze_sync(domain, ip=ip, config=config, ledger=ledger)
    except InvalidInputError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(2)

    if ledger is not None:
        _write_json(ledger_path, ledger.to_dict())

    if output == OutputFormat.markdown:
        typer.echo(build_summary(report))
    else:
        typer.echo(report.model_dump_json(indent=2))


@app.command()
def report(input: str = typer.Option(..., "--input")) -> None:
    """Render a saved JSON report as Markdown."""
    setup_logging()
    try:
        data = json.loads(Path(input).read_text(encoding="utf-8"))
        parsed = AnalysisReport.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        typer.echo(f"invalid report: {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(build_summary(parsed))


@app.command()
def providers() -> None:
    """List the mail provider detection table in match order."""
    for provider in AnalysisConfig().providers:
        typer.echo(f"{provider.name}: {', '.join(provider.patterns)}")
