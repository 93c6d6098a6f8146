"""Shared fixtures: engine, rule table and calculator instances."""

import pytest

from core import Calculator, Evaluator, RuleTable


@pytest.fixture
def rules():
    return RuleTable()


@pytest.fixture
def evaluator(rules):
    return Evaluator(rules)


@pytest.fixture
def calculator():
    return Calculator()
