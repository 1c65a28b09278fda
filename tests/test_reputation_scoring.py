import pytest

from mail_posture.models.results import CheckStatus, DkimResult, DkimSelector, DmarcResult, SpfResult
from mail_posture.modules.reputation import reputation_level, score_reputation


def _selector(size: str) -> DkimSelector:
    return DkimSelector(selector="google", host="google._domainkey.example.com", key_size=size)


def test_fully_enforced_domain_scores_100():
    rep = score_reputation(
        SpfResult(status=CheckStatus.PASS, policy="fail"),
        DkimResult(status=CheckStatus.PASS, selectors=[_selector("2048-bit")]),
        DmarcResult(status=CheckStatus.PASS, policy="reject"),
    )
    assert rep.score == 100
    assert rep.level == "Good"
    assert rep.notes == ()
    assert rep.applied_rules == ()


def test_unprotected_domain_scores_30():
    rep = score_reputation(
        SpfResult(status=CheckStatus.WARN, policy="pass"),
        DkimResult(status=CheckStatus.WARN),
        DmarcResult(status=CheckStatus.WARN, policy="none"),
    )
    assert rep.score == 30
    assert rep.level == "High Risk"
    assert rep.notes == (
        "SPF policy is not enforcing (fail/softfail)",
        "No DKIM selectors found",
        "DMARC policy is none",
    )
    assert [r.id for r in rep.applied_rules] == ["spf.not_enforcing", "dkim.missing", "dmarc.policy_none"]


def test_weak_dkim_key_deduction():
    rep = score_reputation(
        SpfResult(status=CheckStatus.PASS, policy="softfail"),
        DkimResult(status=CheckStatus.PASS, selectors=[_selector("2048-bit"), _selector("1024-bit")]),
        DmarcResult(status=CheckStatus.PASS, policy="quarantine"),
    )
    assert rep.score == 90
    assert rep.notes == ("DKIM uses a 1024-bit key",)


def test_missing_dkim_is_medium():
    rep = score_reputation(
        SpfResult(status=CheckStatus.PASS, policy="fail"),
        DkimResult(status=CheckStatus.WARN),
        DmarcResult(status=CheckStatus.PASS, policy="reject"),
    )
    assert rep.score == 70
    assert rep.level == "Medium"


@pytest.mark.parametrize("score, level", [(100, "Good"), (80, "Good"), (79, "Medium"), (50, "Medium"), (49, "High Risk")])
def test_level_boundaries(score, level):
    assert reputation_level(score) == level


def test_revoked_only_selector_counts_as_published():
    revoked = DkimSelector(selector="default", host="default._domainkey.example.com", key_size="0-bit", revoked=True)
    rep = score_reputation(
        SpfResult(status=CheckStatus.PASS, policy="fail"),
        DkimResult(status=CheckStatus.PASS, selectors=[revoked]),
        DmarcResult(status=CheckStatus.PASS, policy="reject"),
    )
    assert rep.score == 100
    assert rep.notes == ()
