from __future__ import annotations

from typing import Iterable, Sequence

from ..models.config import DEFAULT_PROVIDERS, ProviderPattern
from ..models.results import ProviderMatch
from ..utils.normalize import normalize_hostname

CUSTOM_PROVIDER = "Custom / Self-hosted"


def match_exchange(exchange: str, providers: Sequence[ProviderPattern] = DEFAULT_PROVIDERS) -> str | None:
    host = normalize_hostname(exchange)
    for provider in providers:
        for pattern in provider.patterns:
            if pattern in host:
                return provider.name
    return None


def detect_provider(exchanges: Iterable[str], providers: Sequence[ProviderPattern] = DEFAULT_PROVIDERS) -> ProviderMatch:
    for exchange in exchanges:
        name = match_exchange(exchange, providers)
        if name:
            return ProviderMatch(name=name, confidence="high", matched_by=normalize_hostname(exchange))
    return ProviderMatch(name=CUSTOM_PROVIDER, confidence="low", matched_by=None)


def distinct_providers(exchanges: Iterable[str], providers: Sequence[ProviderPattern] = DEFAULT_PROVIDERS) -> list[str]:
    names: list[str] = []
    for exchange in exchanges:
        name = match_exchange(exchange, providers)
        if name and name not in names:
            names.append(name)
    return names
