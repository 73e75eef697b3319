"""Tests for domain entities."""

import pytest

from teamforge.domain.entities.assignment_result import AssignmentResult
from teamforge.domain.entities.participant import Participant
from teamforge.domain.entities.quota_rule import QuotaRule
from teamforge.domain.entities.rule_set import RuleSet
from teamforge.domain.entities.team import Team
from teamforge.domain.errors import InvalidRuleSet


def test_participant_summary_with_role():
    p = Participant(id="1", attribute="Designer", display_name="Alice")
    assert p.summary() == "Alice - Designer"


def test_participant_summary_unspecified_role():
    p = Participant(id="1", display_name="Bob")
    assert p.summary() == "Bob"


def test_participant_summary_falls_back_to_id():
    assert Participant(id="u-7").summary() == "u-7"


def test_participant_is_immutable():
    p = Participant(id="1", attribute="dev")
    with pytest.raises(AttributeError):
        p.attribute = "pm"


def test_team_counts_attribute():
    team = Team(number=1)
    team.add(Participant(id="1", attribute="dev"))
    team.add(Participant(id="2", attribute="dev"))
    team.add(Participant(id="3", attribute="pm"))
    assert team.size == 3
    assert team.count_attribute("dev") == 2
    assert team.count_attribute("designer") == 0


def test_rule_set_valid():
    RuleSet(ideal_team_size=4, min_team_size=3, max_team_size=5).validate()


@pytest.mark.parametrize(
    "ideal, minimum, maximum, message",
    [
        (0, 1, 2, "ideal team size must be positive"),
        (4, 0, 5, "minimum team size must be positive"),
        (4, 5, 6, "exceeds ideal team size"),
        (6, 3, 5, "exceeds maximum team size"),
    ],
)
def test_rule_set_invalid_sizes(ideal, minimum, maximum, message):
    rule_set = RuleSet(ideal_team_size=ideal, min_team_size=minimum, max_team_size=maximum)
    with pytest.raises(InvalidRuleSet, match=message):
        rule_set.validate()


def test_rule_set_rejects_unknown_mode():
    rule_set = RuleSet(
        ideal_team_size=4, min_team_size=3, max_team_size=5,
        quota_rules=(QuotaRule("dev", mode="balanced"),),
    )
    with pytest.raises(InvalidRuleSet, match="unknown distribution mode"):
        rule_set.validate()


def test_rule_set_rejects_zero_cap():
    rule_set = RuleSet(
        ideal_team_size=4, min_team_size=3, max_team_size=5,
        quota_rules=(QuotaRule("dev", max_per_team=0),),
    )
    with pytest.raises(InvalidRuleSet, match="at least one member"):
        rule_set.validate()


def test_rule_set_rejects_duplicate_rules():
    rule_set = RuleSet(
        ideal_team_size=4, min_team_size=3, max_team_size=5,
        quota_rules=(QuotaRule("dev"), QuotaRule("dev", max_per_team=2)),
    )
    with pytest.raises(InvalidRuleSet, match="duplicate"):
        rule_set.validate()


def test_capped_rules_sorted_by_priority_then_declaration():
    rules = (
        QuotaRule("a", priority=2),
        QuotaRule("b", priority=1),
        QuotaRule("c", priority=2),
        QuotaRule("d", priority=0),
    )
    rule_set = RuleSet(ideal_team_size=4, min_team_size=3, max_team_size=5, quota_rules=rules)
    assert [r.attribute_value for r in rule_set.capped_rules()] == ["d", "b", "a", "c"]


def test_assignment_result_always_reports_unassigned_count():
    result = AssignmentResult(teams=[Team(number=1, members=[Participant(id="1")])])
    data = result.to_dict()
    assert data["unassigned_count"] == 0
    assert data["unassigned"] == []
    assert data["teams"][0]["size"] == 1
    assert result.assigned_count == 1
