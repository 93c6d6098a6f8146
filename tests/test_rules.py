"""
Tests for RuleTable and ExternalFunction.

Validates that:
1. The default table is ordered with conditionals and wrappers first
2. Registered functions get a rule ahead of all built-ins
3. Each RuleTable owns its own function registry
"""

import pytest

from core import (
    RuleTable, BuiltinStep, ExternalFunction, TokenCategory, RULE_DEFINITIONS, MATCHER_DEFINITIONS,
)
from core.rules import function_pattern


def _double(value):
    return value * 2


class TestDefaultTable:

    def test_length_matches_definitions(self, rules):
        assert len(rules) == len(RULE_DEFINITIONS)

    def test_first_rule_is_conditional(self, rules):
        _, evaluator_id = next(iter(rules))
        assert evaluator_id == BuiltinStep.IF

    def test_group_precedes_arithmetic(self, rules):
        ids = [evaluator_id for _, evaluator_id in rules]
        assert ids.index(BuiltinStep.EVALUATE_GROUP) < ids.index(BuiltinStep.APPLY)

    def test_pattern_lookup(self):
        assert len(RuleTable.pattern('math_add')) == 3
        assert RuleTable.pattern('start_neg')[0].is_anchored()


class TestFunctionRegistration:

    def test_function_rule_is_prepended(self, rules):
        rules.add_function('double', TokenCategory.NUMERIC, [TokenCategory.NUMERIC], _double)
        pattern, evaluator_id = next(iter(rules))
        assert evaluator_id == 'double'
        assert len(pattern) == 4
        assert len(rules) == len(RULE_DEFINITIONS) + 1

    def test_lookup_is_case_insensitive(self, rules):
        rules.add_function('Double', TokenCategory.NUMERIC, [TokenCategory.NUMERIC], _double)
        assert rules.lookup_function('DOUBLE').name == 'double'
        assert rules.lookup_function('missing') is None

    def test_reregistering_replaces_rule(self, rules):
        rules.add_function('f', TokenCategory.NUMERIC, [TokenCategory.NUMERIC], _double)
        rules.add_function('f', TokenCategory.NUMERIC,
                           [TokenCategory.NUMERIC, TokenCategory.NUMERIC], max)
        assert len(rules) == len(RULE_DEFINITIONS) + 1
        assert rules.lookup_function('f').body is max

    def test_accepts_external_function(self, rules):
        function = ExternalFunction('twice', TokenCategory.NUMERIC, [TokenCategory.NUMERIC], _double)
        assert rules.add_function(function) is function
        assert rules.function_names() == ['twice']

    def test_tables_do_not_share_functions(self):
        first, second = RuleTable(), RuleTable()
        first.add_function('double', TokenCategory.NUMERIC, [TokenCategory.NUMERIC], _double)
        assert second.lookup_function('double') is None


class TestExternalFunction:

    def test_pattern_categories_interleave_commas(self):
        function = ExternalFunction('f', TokenCategory.NUMERIC,
                                    [TokenCategory.NUMERIC, TokenCategory.STRING], max)
        assert function.pattern_categories() == [
            TokenCategory.NUMERIC, TokenCategory.COMMA, TokenCategory.STRING,
        ]

    def test_zero_argument_pattern(self):
        function = ExternalFunction('now', TokenCategory.NUMERIC, [], lambda: 0)
        assert function.pattern_categories() == []
        assert len(function_pattern(function)) == 3

    def test_name_is_normalized(self):
        assert ExternalFunction('MyFunc', TokenCategory.NUMERIC, (), max).name == 'myfunc'

    def test_signature_accepts_matcher_names(self, rules):
        rules.add_function('maximum', TokenCategory.NUMERIC, ['non_close_plus'], max)
        pattern, _ = next(iter(rules))
        assert pattern[2] == MATCHER_DEFINITIONS['non_close_plus']

    def test_unknown_signature_shape_raises(self, rules):
        with pytest.raises(ValueError, match="unknown signature shape"):
            rules.add_function('broken', TokenCategory.NUMERIC, ['no_such_matcher'], max)
        assert rules.lookup_function('broken') is None
