import asyncio

import pytest

from mail_posture.utils.dns import ResolutionError


class FakeDnsClient:
    """In-memory DNS capability keyed by (name, type).

    A value that is a ResolutionError is raised; a missing key raises NXDOMAIN.
    """

    def __init__(self, records=None):
        self.records = records or {}
        self.calls = []

    async def _lookup(self, name, record_type):
        self.calls.append((name, record_type))
        value = self.records.get((name, record_type))
        if value is None:
            raise ResolutionError(f"{name} does not exist (NXDOMAIN)", "nxdomain")
        if isinstance(value, ResolutionError):
            raise value
        return value

    async def resolve_mx(self, name):
        return await self._lookup(name, "MX")

    async def resolve_txt(self, name):
        return await self._lookup(name, "TXT")

    async def reverse(self, ip):
        return await self._lookup(ip, "PTR")

    async def resolve_a(self, hostname):
        return await self._lookup(hostname, "A")

    async def resolve_aaaa(self, hostname):
        return await self._lookup(hostname, "AAAA")


class GatedDnsClient(FakeDnsClient):
    """Holds every lookup until `expected` lookups are waiting at the same time."""

    def __init__(self, expected, records=None):
        super().__init__(records)
        self.expected = expected
        self.arrived = 0
        self.gate = None

    async def _lookup(self, name, record_type):
        if self.gate is None:
            self.gate = asyncio.Event()
        self.arrived += 1
        if self.arrived >= self.expected:
            self.gate.set()
        await self.gate.wait()
        return await super()._lookup(name, record_type)


@pytest.fixture
def fake_dns():
    return FakeDnsClient


@pytest.fixture
def gated_dns():
    return GatedDnsClient
