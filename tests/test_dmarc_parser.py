import asyncio

from mail_posture.models.config import AnalysisConfig
from mail_posture.models.results import CheckStatus
from mail_posture.modules import dmarc
from mail_posture.modules.dmarc import ISSUE_NO_DMARC, ISSUE_NO_RUA, ISSUE_POLICY_NONE, parse_dmarc


def test_dmarc_policy_none_warning():
    result = parse_dmarc(["v=DMARC1; p=none; rua=mailto:dmarc@example.com"])
    assert result.policy == "none"
    assert result.status == CheckStatus.WARN
    assert result.issues == (ISSUE_POLICY_NONE,)


def test_dmarc_missing_rua_when_enforcing():
    result = parse_dmarc(["v=DMARC1; p=reject"])
    assert result.status == CheckStatus.WARN
    assert result.issues == (ISSUE_NO_RUA,)
    assert result.pct == 100
    assert result.adkim == "r"
    assert result.aspf == "r"


def test_dmarc_full_record():
    result = parse_dmarc(
        [
            "v=spf1 -all",
            "v=DMARC1; p=quarantine; sp=reject; pct=50; rua=mailto:agg@example.com; "
            "ruf=mailto:forensic@example.com; adkim=s; aspf=r",
        ]
    )
    assert result.status == CheckStatus.PASS
    assert result.policy == "quarantine"
    assert result.subdomain_policy == "reject"
    assert result.pct == 50
    assert result.rua == "mailto:agg@example.com"
    assert result.ruf == "mailto:forensic@example.com"
    assert result.adkim == "s"
    assert result.issues == ()


def test_dmarc_missing_policy_defaults_to_none():
    result = parse_dmarc(["v=DMARC1; rua=mailto:d@example.com"])
    assert result.policy == "none"
    assert result.issues == (ISSUE_POLICY_NONE,)


def test_dmarc_invalid_tags_fall_back():
    result = parse_dmarc(["v=DMARC1; p=invalid; pct=999; adkim=x; rua=mailto:d@example.com"])
    assert result.invalid_tags == ("p", "pct", "adkim")
    assert result.policy == "none"
    assert result.pct == 100
    assert result.adkim == "r"


def test_dmarc_not_a_dmarc_record():
    result = parse_dmarc(["some text"])
    assert result.status == CheckStatus.FAIL
    assert result.issues == (ISSUE_NO_DMARC,)


def test_dmarc_run_queries_dmarc_host(fake_dns):
    client = fake_dns({("_dmarc.example.com", "TXT"): [["v=DMARC1; p=reject; ", "rua=mailto:d@example.com"]]})
    result = asyncio.run(dmarc.run("example.com", client, AnalysisConfig()))
    assert client.calls == [("_dmarc.example.com", "TXT")]
    assert result.status == CheckStatus.PASS
    assert result.policy == "reject"


def test_dmarc_run_resolution_failure(fake_dns):
    result = asyncio.run(dmarc.run("example.com", fake_dns(), AnalysisConfig()))
    assert result.status == CheckStatus.FAIL
    assert result.issues == (ISSUE_NO_DMARC,)
