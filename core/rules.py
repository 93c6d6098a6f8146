"""core/rules.py"""
import logging
from enum import Enum

from core.functions import ExternalFunction, FunctionRegistry
from core.token_matcher import TokenMatcher, MATCHER_DEFINITIONS
from core.token_system import TokenCategory

logger = logging.getLogger(__name__)


class BuiltinStep(Enum):
    """引擎内置的规约步骤"""
    APPLY = "apply"
    NEGATE = "negate"
    POW_NEGATE = "pow_negate"
    MUL_NEGATE = "mul_negate"
    PERCENTAGE = "percentage"
    EXPAND_RANGE = "expand_range"
    IF = "if"
    ROUND = "round"
    ROUND_INT = "round_int"
    NOT = "not"
    EVALUATE_GROUP = "evaluate_group"


def token_seq(*names):
    return tuple(MATCHER_DEFINITIONS[name] for name in names)


def func_token_seq(function_name, *names):
    """函数调用：函数名 ( ... )"""
    return (TokenMatcher.function(function_name),) + token_seq('open', *names, 'close')


# 模式定义
PATTERN_DEFINITIONS = {
    'group': token_seq('open', 'non_group_star', 'close'),
    'math_add': token_seq('numeric', 'addsub', 'numeric'),
    'math_mul': token_seq('numeric', 'muldiv', 'numeric'),
    'math_neg_mul': token_seq('numeric', 'multiply', 'subtract', 'numeric'),
    'math_pow': token_seq('numeric', 'pow', 'numeric'),
    'math_neg_pow': token_seq('numeric', 'pow', 'subtract', 'numeric'),
    'math_mod': token_seq('numeric', 'mod', 'numeric'),
    'negation': token_seq('subtract', 'numeric'),
    'start_neg': token_seq('anchored_minus', 'numeric'),
    'percentage': token_seq('numeric', 'mod'),
    'range_asc': token_seq('numeric', 'comp_lt', 'numeric', 'comp_lt', 'numeric'),
    'range_desc': token_seq('numeric', 'comp_gt', 'numeric', 'comp_gt', 'numeric'),
    'num_comp': token_seq('numeric', 'comparator', 'numeric'),
    'str_comp': token_seq('string', 'comparator', 'string'),
    'combine': token_seq('logical', 'combinator', 'logical'),

    'if': func_token_seq('if', 'non_group', 'comma', 'non_group', 'comma', 'non_group'),
    'round_one': func_token_seq('round', 'non_group_star'),
    'round_two': func_token_seq('round', 'non_group_star', 'comma', 'non_group_star'),
    'roundup': func_token_seq('roundup', 'non_group_star'),
    'rounddown': func_token_seq('rounddown', 'non_group_star'),
    'not': func_token_seq('not', 'non_group_star'),
}

# 规则顺序即优先级：越靠前越先规约
RULE_DEFINITIONS = [
    ('if', BuiltinStep.IF),
    ('round_one', BuiltinStep.ROUND),
    ('round_two', BuiltinStep.ROUND),
    ('roundup', BuiltinStep.ROUND_INT),
    ('rounddown', BuiltinStep.ROUND_INT),
    ('not', BuiltinStep.NOT),

    ('group', BuiltinStep.EVALUATE_GROUP),
    ('start_neg', BuiltinStep.NEGATE),
    ('math_pow', BuiltinStep.APPLY),
    ('math_neg_pow', BuiltinStep.POW_NEGATE),
    ('math_mod', BuiltinStep.APPLY),
    ('math_mul', BuiltinStep.APPLY),
    ('math_neg_mul', BuiltinStep.MUL_NEGATE),
    ('math_add', BuiltinStep.APPLY),
    ('percentage', BuiltinStep.PERCENTAGE),
    ('negation', BuiltinStep.NEGATE),
    ('range_asc', BuiltinStep.EXPAND_RANGE),
    ('range_desc', BuiltinStep.EXPAND_RANGE),
    ('num_comp', BuiltinStep.APPLY),
    ('str_comp', BuiltinStep.APPLY),
    ('combine', BuiltinStep.APPLY),
]


def signature_matcher(shape):
    """参数形状 -> 匹配器：TokenCategory 按类别匹配，字符串按 MATCHER_DEFINITIONS 查找"""
    if isinstance(shape, TokenCategory):
        return TokenMatcher.category(shape)
    if shape in MATCHER_DEFINITIONS:
        return MATCHER_DEFINITIONS[shape]
    raise ValueError(f"unknown signature shape: {shape!r}")


def function_pattern(function):
    """用户函数的模式：函数名 ( 参数, 参数, ... )"""
    arguments = tuple(signature_matcher(shape) for shape in function.pattern_categories())
    return ((TokenMatcher.function(function.name), MATCHER_DEFINITIONS['open'])
            + arguments + (MATCHER_DEFINITIONS['close'],))


class RuleTable:
    """
    有序规则表 (pattern, evaluator_id)。
    用户函数规则排在内置规则之前，后注册的在前。
    """

    def __init__(self, rules=None):
        self._rules = list(rules) if rules is not None else [
            (PATTERN_DEFINITIONS[name], step) for name, step in RULE_DEFINITIONS
        ]
        self._functions = FunctionRegistry()
        self._function_rules = []

    @staticmethod
    def pattern(name):
        return PATTERN_DEFINITIONS[name]

    def add_function(self, name, return_category=None, signature=(), body=None):
        """注册用户函数并加入对应规则；name 也可直接传 ExternalFunction"""
        if isinstance(name, ExternalFunction):
            function = name
        else:
            function = ExternalFunction(name, return_category, signature, body)

        pattern = function_pattern(function)
        self._functions.register(function)
        self._function_rules = [
            rule for rule in self._function_rules if rule[1] != function.name
        ]
        self._function_rules.insert(0, (pattern, function.name))
        logger.debug(f"Registered function '{function.name}' with signature "
                     f"{[str(shape) for shape in function.signature]}")
        return function

    def lookup_function(self, name):
        return self._functions.lookup(name)

    def function_names(self):
        return self._functions.names()

    def __iter__(self):
        yield from self._function_rules
        yield from self._rules

    def __len__(self):
        return len(self._function_rules) + len(self._rules)
