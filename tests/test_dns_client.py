import asyncio

import dns.exception
import dns.resolver
import pytest

from mail_posture.utils.dns import DnsClient, ResolutionError
from mail_posture.utils.network import QueryLedger


class FakeName:
    def __init__(self, text):
        self.text = text

    def to_text(self):
        return self.text


class FakeRdata:
    def __init__(self, **attrs):
        self.__dict__.update(attrs)


class FakeResolver:
    def __init__(self, answers=None, error=None):
        self.answers = answers or {}
        self.error = error
        self.queries = []

    async def resolve(self, name, record_type):
        self.queries.append((str(name), record_type))
        if self.error is not None:
            raise self.error
        return self.answers.get(record_type, [])


def test_resolve_mx_normalizes_exchanges():
    resolver = FakeResolver({"MX": [FakeRdata(exchange=FakeName("ASPMX.L.Google.com."), preference=1)]})
    client = DnsClient(resolver=resolver)
    assert asyncio.run(client.resolve_mx("example.com")) == [("aspmx.l.google.com", 1)]


def test_resolve_txt_returns_segments():
    resolver = FakeResolver({"TXT": [FakeRdata(strings=(b"v=spf1 ", b"-all"))]})
    client = DnsClient(resolver=resolver)
    assert asyncio.run(client.resolve_txt("example.com")) == [["v=spf1 ", "-all"]]


def test_reverse_queries_arpa_name():
    resolver = FakeResolver({"PTR": [FakeRdata(target=FakeName("mail.example.com."))]})
    client = DnsClient(resolver=resolver)
    assert asyncio.run(client.reverse("203.0.113.5")) == ["mail.example.com"]
    assert resolver.queries == [("5.113.0.203.in-addr.arpa.", "PTR")]


def test_reverse_rejects_invalid_ip():
    client = DnsClient(resolver=FakeResolver())
    with pytest.raises(ResolutionError):
        asyncio.run(client.reverse("not-an-ip"))


@pytest.mark.parametrize(
    "error, kind",
    [
        (dns.resolver.NXDOMAIN(), "nxdomain"),
        (dns.resolver.NoAnswer(), "no_answer"),
        (dns.resolver.NoNameservers(), "no_nameservers"),
        (dns.exception.Timeout(), "timeout"),
        (dns.exception.DNSException("bad"), "error"),
    ],
)
def test_dns_errors_become_resolution_errors(error, kind):
    ledger = QueryLedger()
    client = DnsClient(resolver=FakeResolver(error=error), ledger=ledger)
    with pytest.raises(ResolutionError) as info:
        asyncio.run(client.resolve_txt("_dmarc.example.com"))
    assert info.value.kind == kind
    assert "_dmarc.example.com" in info.value.message
    entry = ledger.entries[0]
    assert entry.success is False
    assert entry.error_kind == kind


def test_ledger_totals():
    ledger = QueryLedger()
    resolver = FakeResolver({"A": [FakeRdata(address="203.0.113.5")]})
    client = DnsClient(resolver=resolver, ledger=ledger)
    assert asyncio.run(client.resolve_a("mail.example.com")) == ["203.0.113.5"]
    totals = ledger.totals()
    assert totals["counts"] == {"A": 1}
    assert totals["failures"] == {}
    assert totals["total_entries"] == 1
    assert ledger.to_dict()["entries"][0]["answers"] == 1
