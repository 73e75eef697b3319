"""Tests for TeamCountPolicy."""

import pytest

from teamforge.domain.entities.participant import Participant
from teamforge.domain.entities.quota_rule import QuotaRule
from teamforge.domain.entities.rule_set import RuleSet
from teamforge.domain.errors import InsufficientParticipants
from teamforge.domain.policies.team_count import plan_team_count


def _pool(**counts: int) -> list[Participant]:
    pool = []
    for attribute, count in counts.items():
        pool += [Participant(id=f"{attribute}{i}", attribute=attribute) for i in range(count)]
    return pool


def _rules(ideal=4, minimum=3, maximum=5, *quota_rules: QuotaRule) -> RuleSet:
    return RuleSet(
        ideal_team_size=ideal, min_team_size=minimum, max_team_size=maximum,
        quota_rules=tuple(quota_rules),
    )


def test_no_rules_uses_ideal_size():
    assert plan_team_count(_pool(dev=10), _rules(4, 3, 5)) == 3


def test_no_rules_exact_division():
    assert plan_team_count(_pool(dev=12), _rules(4, 3, 5)) == 3


def test_capped_rules_take_minimum():
    pool = _pool(designer=6, pm=4, dev=5)
    rules = _rules(4, 3, 5, QuotaRule("designer", max_per_team=2), QuotaRule("pm", max_per_team=1))
    # designer: 6 // 2 = 3, pm: 4 // 1 = 4
    assert plan_team_count(pool, rules) == 3


def test_clamped_by_min_team_size():
    pool = _pool(designer=6, dev=4)
    rules = _rules(4, 4, 5, QuotaRule("designer"))
    # Quota alone would give 6 teams, but 6 * 4 > 10
    assert plan_team_count(pool, rules) == 2


def test_ceil_candidate_clamped():
    # ceil(7 / 3) = 3 teams, but 3 * 3 > 7
    assert plan_team_count(_pool(dev=7), _rules(3, 3, 4)) == 2


def test_insufficient_participants():
    with pytest.raises(InsufficientParticipants) as exc_info:
        plan_team_count(_pool(dev=5), _rules(7, 7, 8))
    assert exc_info.value.min_team_size == 7
    assert exc_info.value.pool_size == 5


def test_quota_value_missing_from_pool():
    rules = _rules(2, 2, 3, QuotaRule("designer"))
    with pytest.raises(InsufficientParticipants):
        plan_team_count(_pool(dev=10), rules)


def test_empty_pool():
    with pytest.raises(InsufficientParticipants):
        plan_team_count([], _rules())
