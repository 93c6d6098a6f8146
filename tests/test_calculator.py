"""
Tests for Calculator (tokenize + bind + reduce).

Validates that:
1. Text expressions evaluate with the default grammar's precedence
2. Variables resolve from per-call data before stored memory
3. Functions are registered per instance, never process-wide
4. Each failure mode raises its own ExpressionError subclass
"""

import numpy as np
import pytest

from core import (
    Calculator, TokenCategory, NoRuleMatched, TokenizeError, UnboundVariable,
)
from core.calculator import value_to_token


class TestArithmetic:

    @pytest.mark.parametrize("expression,expected", [
        ("2 + 3 * 4", 14),
        ("(2 + 3) * 4", 20),
        ("10 / 4", 2.5),
        ("7 % 3", 1),
        ("50% + 1", 1.5),
        ("2 ^ 3 ^ 2", 64),
        ("-5 + 3", -2),
        ("2 * -3", -6),
        ("4 / -2", -2),
        ("6 / -4", -1.5),
        ("2 ^ -1", 0.5),
        ("", 0),
    ])
    def test_expressions(self, calculator, expression, expected):
        assert calculator.evaluate(expression) == expected

    def test_exact_division_is_int(self, calculator):
        result = calculator.evaluate("10 / 5")
        assert result == 2
        assert isinstance(result, int)


class TestLogicAndStrings:

    @pytest.mark.parametrize("expression,expected", [
        ("1 < 2 < 3", True),
        ("3 > 2 > 5", False),
        ("not(true) or true", True),
        ("'abc' = 'abc'", True),
        ("'abc' != 'abd'", True),
        ("1 = 1 and 2 > 3", False),
    ])
    def test_expressions(self, calculator, expression, expected):
        assert calculator.evaluate(expression) is expected

    def test_if_returns_branch(self, calculator):
        assert calculator.evaluate("if(x > 5, 'big', 'small')", {'x': 7}) == 'big'
        assert calculator.evaluate("if(x > 5, 'big', 'small')", {'x': 3}) == 'small'


class TestRoundingFunctions:

    def test_round_with_places(self, calculator):
        assert calculator.evaluate("round(12.345, 2)") == 12.35

    def test_round_mixed_with_roundup(self, calculator):
        assert calculator.evaluate("round(1.5) + roundup(1.1)") == 4

    def test_round_of_expression(self, calculator):
        assert calculator.evaluate("round(price * (1 + tax / 100), 2)", {'price': 10, 'tax': 7.5}) == 10.75

    def test_rounddown(self, calculator):
        assert calculator.evaluate("rounddown(x / 3)", {'x': 10}) == 3


class TestVariables:

    def test_data_binding(self, calculator):
        assert calculator.evaluate("x * 2", {'x': 4}) == 8

    def test_binding_is_case_insensitive(self, calculator):
        assert calculator.evaluate("x * 2", {'X': 4}) == 8

    def test_store_and_clear(self, calculator):
        calculator.store(x=2)
        assert calculator.evaluate("x + 1") == 3
        calculator.clear()
        with pytest.raises(UnboundVariable):
            calculator.evaluate("x + 1")

    def test_data_overrides_memory(self, calculator):
        calculator.store('x', 1)
        assert calculator.evaluate("x", {'x': 5}) == 5

    def test_unbound_variable_lists_names(self, calculator):
        with pytest.raises(UnboundVariable) as excinfo:
            calculator.evaluate("x + y + y", {'x': 1})
        assert excinfo.value.names == ['y']

    def test_dependencies(self, calculator):
        assert calculator.dependencies("x + y * z", {'x': 1}) == ['y', 'z']

    def test_numpy_values_bind(self, calculator):
        assert calculator.evaluate("a + b", {'a': np.int64(2), 'b': np.float64(0.5)}) == 2.5

    def test_logical_binding(self, calculator):
        assert calculator.evaluate("flag and true", {'flag': True}) is True


class TestUserFunctions:

    def test_add_function(self, calculator):
        calculator.add_function('double', TokenCategory.NUMERIC, [TokenCategory.NUMERIC],
                                lambda v: v * 2)
        assert calculator.evaluate("double(21)") == 42

    def test_function_arguments_reduced_first(self, calculator):
        calculator.add_function('max', TokenCategory.NUMERIC,
                                [TokenCategory.NUMERIC, TokenCategory.NUMERIC], max)
        assert calculator.evaluate("max(1 + 2, 5 - 4) * 2") == 6

    def test_variadic_function(self, calculator):
        calculator.add_function('maximum', TokenCategory.NUMERIC, ['non_close_plus'],
                                lambda *values: max(values))
        assert calculator.evaluate("maximum(1, 5, 3)") == 5

    def test_functions_are_per_instance(self, calculator):
        calculator.add_function('double', TokenCategory.NUMERIC, [TokenCategory.NUMERIC],
                                lambda v: v * 2)
        with pytest.raises(UnboundVariable):
            Calculator().evaluate("double(2)")


class TestErrors:

    def test_no_rule_matched(self, calculator):
        with pytest.raises(NoRuleMatched):
            calculator.evaluate("1 2")

    def test_tokenize_error(self, calculator):
        with pytest.raises(TokenizeError):
            calculator.evaluate("2 $ 3")

    def test_unsupported_binding_type(self):
        with pytest.raises(TypeError):
            value_to_token([1, 2])
