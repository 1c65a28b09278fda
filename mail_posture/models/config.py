from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DKIM_SELECTORS = ["google", "selector1", "selector2", "default", "dkim", "s1", "s2", "k1", "k2"]


class ProviderPattern(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    patterns: tuple[str, ...]


DEFAULT_PROVIDERS = [
    ProviderPattern(name="Google Workspace", patterns=("aspmx.l.google.com", "googlemail.com", "google.com")),
    ProviderPattern(name="Microsoft 365", patterns=("mail.protection.outlook.com", "outlook.com")),
    ProviderPattern(name="Zoho Mail", patterns=("zoho.com", "zoho.eu", "zoho.in")),
    ProviderPattern(name="Proton Mail", patterns=("protonmail.ch", "protonmail", "proton.me")),
    ProviderPattern(name="Mimecast", patterns=("mimecast.com",)),
    ProviderPattern(name="Proofpoint", patterns=("pphosted.com", "ppe-hosted.com")),
    ProviderPattern(name="Barracuda", patterns=("barracudanetworks.com",)),
    ProviderPattern(name="Amazon WorkMail", patterns=("awsapps.com", "amazonaws.com")),
    ProviderPattern(name="Fastmail", patterns=("messagingengine.com",)),
    ProviderPattern(name="Yandex Mail", patterns=("yandex.net", "yandex.ru")),
    ProviderPattern(name="iCloud Mail", patterns=("mail.icloud.com", "icloud.com")),
]


class AnalysisConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    dkim_selectors: list[str] = Field(default_factory=lambda: list(DEFAULT_DKIM_SELECTORS))
    providers: list[ProviderPattern] = Field(default_factory=lambda: list(DEFAULT_PROVIDERS))
    nameservers: list[str] = Field(default_factory=list)
    timeout_seconds: float = 5.0
    max_spf_lookups: int = 10
