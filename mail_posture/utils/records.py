from __future__ import annotations

import math
import re
from typing import Iterable

SPF_PREFIX_RE = re.compile(r"^v=spf1(\s|$)", re.IGNORECASE)
DMARC_PREFIX_RE = re.compile(r"^v=DMARC1\s*(;|$)", re.IGNORECASE)
SPF_QUALIFIERS = "+-~?"
SPF_LOOKUP_MECHANISMS = {"include", "a", "mx", "ptr", "exists"}
SPF_ALL_POLICIES = {
    "-": "fail",
    "~": "softfail",
    "?": "neutral",
    "+": "pass",
}


def join_txt(segments: Iterable[str] | str) -> str:
    if isinstance(segments, str):
        return segments
    return "".join(segments)


def parse_tags(record: str) -> dict[str, str]:
    """Split a ``k=v; k=v`` record into a tag map.

    Keys are lower-cased, values stripped. The first occurrence of a tag wins.
    """
    tags: dict[str, str] = {}
    for segment in record.split(";"):
        segment = segment.strip()
        if not segment or "=" not in segment:
            continue
        key, value = segment.split("=", 1)
        key = key.strip().lower()
        if key and key not in tags:
            tags[key] = value.strip()
    return tags


def extract_spf(txt_records: list[str]) -> tuple[str | None, bool]:
    candidates = [rec.strip() for rec in txt_records if SPF_PREFIX_RE.match(rec.strip())]
    if not candidates:
        return None, False
    return candidates[0], len(candidates) > 1


def spf_terms(record: str) -> list[str]:
    return record.split()[1:]


def _mechanism_name(term: str) -> str:
    if term and term[0] in SPF_QUALIFIERS:
        term = term[1:]
    return re.split(r"[:/]", term, maxsplit=1)[0].lower()


def count_spf_lookups(record: str) -> int:
    return sum(1 for term in spf_terms(record) if _mechanism_name(term) in SPF_LOOKUP_MECHANISMS)


def spf_redirect(record: str) -> str | None:
    for term in spf_terms(record):
        if term.lower().startswith("redirect="):
            return term.split("=", 1)[1]
    return None


def spf_all_qualifier(record: str) -> str | None:
    qualifier = None
    for term in spf_terms(record):
        if _mechanism_name(term) != "all":
            continue
        qualifier = term[0] if term[0] in SPF_QUALIFIERS else "+"
    return qualifier


def parse_spf_policy(record: str) -> str:
    qualifier = spf_all_qualifier(record)
    if qualifier is None:
        return "pass"
    return SPF_ALL_POLICIES[qualifier]


def dkim_key_type(tags: dict[str, str]) -> str:
    if tags.get("k", "").lower() == "ed25519":
        return "Ed25519"
    return "RSA"


def dkim_key_bits(public_key: str) -> int:
    material = re.sub(r"\s+", "", public_key)
    return math.floor(len(material) * 6 / 8 + 0.5) * 8


def dkim_key_size(public_key: str) -> str:
    bits = dkim_key_bits(public_key)
    if bits >= 2048:
        return "2048-bit"
    if bits >= 1024:
        return "1024-bit"
    return f"{bits}-bit"


def extract_dmarc(txt_records: list[str]) -> str | None:
    for rec in txt_records:
        if DMARC_PREFIX_RE.match(rec.strip()):
            return rec.strip()
    return None
