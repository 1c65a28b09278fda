from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

SpfPolicy = Literal["fail", "softfail", "neutral", "pass", "unknown"]
DmarcPolicy = Literal["none", "quarantine", "reject"]
Alignment = Literal["r", "s"]


class CheckStatus(str, Enum):
    PASS = "PASS"
    WARN = "WARN"
    FAIL = "FAIL"
    SKIPPED = "SKIPPED"


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class CheckResult(FrozenModel):
    status: CheckStatus
    issues: tuple[str, ...] = ()


class MxRecord(FrozenModel):
    exchange: str
    priority: int


class ProviderMatch(FrozenModel):
    name: str
    confidence: Literal["high", "low"]
    matched_by: Optional[str] = None


class MxResult(CheckResult):
    protocol: Literal["MX"] = "MX"
    records: tuple[MxRecord, ...] = ()
    provider: Optional[ProviderMatch] = None
    providers: tuple[str, ...] = ()


class SpfResult(CheckResult):
    protocol: Literal["SPF"] = "SPF"
    record: Optional[str] = None
    multiple: bool = False
    lookup_count: int = 0
    policy: SpfPolicy = "unknown"
    redirect: Optional[str] = None


class DkimSelector(FrozenModel):
    selector: str
    host: str
    key_type: Literal["RSA", "Ed25519"] = "RSA"
    key_size: str
    revoked: bool = False


class DkimResult(CheckResult):
    protocol: Literal["DKIM"] = "DKIM"
    selectors: tuple[DkimSelector, ...] = ()


class DmarcResult(CheckResult):
    protocol: Literal["DMARC"] = "DMARC"
    record: Optional[str] = None
    policy: DmarcPolicy = "none"
    subdomain_policy: Optional[DmarcPolicy] = None
    pct: int = 100
    rua: Optional[str] = None
    ruf: Optional[str] = None
    adkim: Alignment = "r"
    aspf: Alignment = "r"
    invalid_tags: tuple[str, ...] = ()


class PtrResult(CheckResult):
    protocol: Literal["PTR"] = "PTR"
    ip: Optional[str] = None
    hostname: Optional[str] = None
    fc_rdns: bool = False


class AppliedRule(FrozenModel):
    id: str
    label: str
    deduction: int


class Reputation(FrozenModel):
    score: int
    level: Literal["Good", "Medium", "High Risk"]
    notes: tuple[str, ...] = ()
    applied_rules: tuple[AppliedRule, ...] = ()


class AnalysisReport(FrozenModel):
    domain: str
    mx: MxResult
    spf: SpfResult
    dkim: DkimResult
    dmarc: DmarcResult
    ptr: PtrResult
    reputation: Reputation
