from __future__ import annotations

import re

import dns.exception
import dns.name

DOMAIN_RE = re.compile(r"^(?!-)[A-Za-z0-9_.-]{1,253}(?<!-)$")
SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


class InvalidInputError(ValueError):
    pass


def normalize_domain(domain: str | None) -> str:
    """Turn user input such as ``HTTPS://Example.COM/`` into ``example.com``.

    Internationalized names are returned in their IDNA (``xn--``) form.
    """
    value = (domain or "").strip().lower()
    value = SCHEME_RE.sub("", value)
    value = value.rstrip("/").rstrip(".")
    if not value:
        raise InvalidInputError("Domain is required")
    try:
        encoded = dns.name.from_unicode(value).to_text(omit_final_dot=True)
    except (dns.exception.DNSException, UnicodeError) as exc:
        raise InvalidInputError(f"Invalid domain: {value}") from exc
    if not is_valid_domain(encoded):
        raise InvalidInputError(f"Invalid domain: {value}")
    return encoded


def is_valid_domain(name: str) -> bool:
    if not DOMAIN_RE.match(name):
        return False
    if ".." in name or name.startswith("."):
        return False
    return True


def normalize_hostname(name: str) -> str:
    return name.strip().lower().rstrip(".")
