"""Pytest configuration and shared fixtures."""

import pytest

from teamforge.domain.entities.participant import Participant
from teamforge.domain.entities.rule_set import RuleSet


@pytest.fixture
def default_rule_set():
    return RuleSet(ideal_team_size=4, min_team_size=3, max_team_size=5, allow_partial_teams=True)


@pytest.fixture
def mixed_pool():
    """23 participants cycling dev, dev, designer, pm, unspecified."""
    roles = ["dev", "dev", "designer", "pm", "unspecified"]
    return [
        Participant(id=f"p{i:02d}", attribute=roles[i % 5], display_name=f"Person {i}",
                    email=f"p{i}@example.com")
        for i in range(23)
    ]
