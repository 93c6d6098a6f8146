"""核心模块 - Token系统、规则表、规约求值器和操作符"""
from .token_system import Token, TokenCategory, inspect_tokens
from .token_matcher import TokenMatcher, MATCHER_DEFINITIONS
from .operators import BinaryOperation
from .functions import ExternalFunction, FunctionRegistry
from .rules import BuiltinStep, RuleTable, PATTERN_DEFINITIONS, RULE_DEFINITIONS
from .evaluator import Evaluator
from .tokenizer import Tokenizer
from .calculator import Calculator
from .errors import (
    ExpressionError, NoRuleMatched, UnknownOperator, UnknownFunction,
    ExpressionTooDeeplyNested, TokenizeError, UnboundVariable
)

__all__ = [
    'Token', 'TokenCategory', 'inspect_tokens',
    'TokenMatcher', 'MATCHER_DEFINITIONS',
    'BinaryOperation',
    'ExternalFunction', 'FunctionRegistry',
    'BuiltinStep', 'RuleTable', 'PATTERN_DEFINITIONS', 'RULE_DEFINITIONS',
    'Evaluator', 'Tokenizer', 'Calculator',
    'ExpressionError', 'NoRuleMatched', 'UnknownOperator', 'UnknownFunction',
    'ExpressionTooDeeplyNested', 'TokenizeError', 'UnboundVariable',
]
