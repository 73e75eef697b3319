"""Tests for QuotaDistributionPolicy."""

from teamforge.domain.entities.participant import Participant
from teamforge.domain.entities.quota_rule import QuotaRule
from teamforge.domain.entities.rule_set import RuleSet
from teamforge.domain.entities.team import Team
from teamforge.domain.policies.quota_distribution import distribute_quotas


def _p(pid: str, attribute: str) -> Participant:
    return Participant(id=pid, attribute=attribute)


def _teams(n: int) -> list[Team]:
    return [Team(number=i + 1) for i in range(n)]


def _rules(*quota_rules: QuotaRule) -> RuleSet:
    return RuleSet(ideal_team_size=4, min_team_size=1, max_team_size=6, quota_rules=quota_rules)


def test_one_per_team_round_robin():
    pool = [_p(f"a{i}", "A") for i in range(3)] + [_p("b0", "B")]
    teams, claimed = distribute_quotas(pool, _rules(QuotaRule("A")), _teams(3))
    assert [[m.id for m in t.members] for t in teams] == [["a0"], ["a1"], ["a2"]]
    assert claimed == {"a0", "a1", "a2"}


def test_every_team_gets_one_before_any_gets_two():
    pool = [_p(f"a{i}", "A") for i in range(5)]
    teams, _ = distribute_quotas(pool, _rules(QuotaRule("A", max_per_team=2)), _teams(3))
    assert [[m.id for m in t.members] for t in teams] == [["a0", "a3"], ["a1", "a4"], ["a2"]]


def test_cap_never_exceeded():
    pool = [_p(f"a{i}", "A") for i in range(7)]
    teams, claimed = distribute_quotas(pool, _rules(QuotaRule("A", max_per_team=2)), _teams(3))
    assert all(t.count_attribute("A") <= 2 for t in teams)
    assert "a6" not in claimed
    assert len(claimed) == 6


def test_fewer_matches_than_teams():
    """Two matching participants over five teams: only the first two get one."""
    pool = [_p("a0", "A"), _p("x0", "X"), _p("a1", "A"), _p("x1", "X")]
    teams, claimed = distribute_quotas(pool, _rules(QuotaRule("A")), _teams(5))
    assert [t.count_attribute("A") for t in teams] == [1, 1, 0, 0, 0]
    assert claimed == {"a0", "a1"}


def test_priority_order_decides_member_order():
    pool = [_p("a0", "A"), _p("b0", "B")]
    rules = _rules(QuotaRule("A", priority=5), QuotaRule("B", priority=1))
    teams, _ = distribute_quotas(pool, rules, _teams(1))
    assert [m.id for m in teams[0].members] == ["b0", "a0"]


def test_equal_priority_keeps_declaration_order():
    pool = [_p("b0", "B"), _p("a0", "A")]
    rules = _rules(QuotaRule("A", priority=1), QuotaRule("B", priority=1))
    teams, _ = distribute_quotas(pool, rules, _teams(1))
    assert [m.id for m in teams[0].members] == ["a0", "b0"]


def test_pool_order_is_preserved():
    pool = [_p("a9", "A"), _p("a1", "A"), _p("a5", "A")]
    teams, _ = distribute_quotas(pool, _rules(QuotaRule("A")), _teams(3))
    assert [t.members[0].id for t in teams] == ["a9", "a1", "a5"]


def test_no_rules_claims_nothing():
    pool = [_p("a0", "A")]
    teams, claimed = distribute_quotas(pool, _rules(), _teams(2))
    assert claimed == set()
    assert all(t.size == 0 for t in teams)
