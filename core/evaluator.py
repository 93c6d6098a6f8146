"""规则驱动的Token流规约求值器

反复在规则表中按优先级查找第一个能匹配的规则，取最左匹配，
用计算结果替换匹配片段，然后从最高优先级规则重新扫描，直到只剩一个Token。
"""
import logging

from config.config import ENGINE_CONFIG, ROUNDING_CONFIG
from core.errors import NoRuleMatched, UnknownFunction, ExpressionTooDeeplyNested
from core.operators import BinaryOperation
from core.rules import BuiltinStep, RuleTable
from core.token_system import Token, TokenCategory, AND, inspect_tokens
from utils.numeric import round_half_up, round_up, round_down

logger = logging.getLogger(__name__)

# 需要对子Token流递归规约的步骤
RECURSIVE_STEPS = frozenset({
    BuiltinStep.ROUND,
    BuiltinStep.ROUND_INT,
    BuiltinStep.NOT,
    BuiltinStep.EVALUATE_GROUP,
})


class Evaluator:
    """评估Token序列的值"""

    def __init__(self, rules=None, max_nesting_depth=None):
        self.rules = rules if rules is not None else RuleTable()
        if max_nesting_depth is None:
            max_nesting_depth = ENGINE_CONFIG['max_nesting_depth']
        self.max_nesting_depth = max_nesting_depth

        self._handlers = {
            BuiltinStep.APPLY: self.apply,
            BuiltinStep.NEGATE: self.negate,
            BuiltinStep.POW_NEGATE: self.pow_negate,
            BuiltinStep.MUL_NEGATE: self.mul_negate,
            BuiltinStep.PERCENTAGE: self.percentage,
            BuiltinStep.EXPAND_RANGE: self.expand_range,
            BuiltinStep.IF: self.if_,
            BuiltinStep.ROUND: self.round,
            BuiltinStep.ROUND_INT: self.round_int,
            BuiltinStep.NOT: self.not_,
            BuiltinStep.EVALUATE_GROUP: self.evaluate_group,
        }

    def evaluate(self, tokens):
        return self.evaluate_token_stream(tokens).value

    def evaluate_token_stream(self, tokens, depth=0):
        """
        规约到单个Token
        Args:
            tokens: Token序列（不会被修改）
            depth: 当前嵌套深度
        Returns:
            剩余的唯一Token
        """
        if depth > self.max_nesting_depth:
            raise ExpressionTooDeeplyNested(depth, self.max_nesting_depth)

        tokens = list(tokens)
        if not tokens:
            tokens.append(Token(TokenCategory.NUMERIC, ENGINE_CONFIG['empty_expression_value']))

        while len(tokens) > 1:
            if not self.match_rule_pattern(tokens, depth):
                raise NoRuleMatched(tokens)

        return tokens[0]

    def match_rule_pattern(self, tokens, depth=0):
        """应用优先级最高且能匹配的规则，原地改写 tokens；没有规则匹配时返回 False"""
        for pattern, evaluator_id in self.rules:
            match = self.find_rule_match(pattern, tokens)
            if match is not None:
                position, consumed = match
                self.evaluate_step(tokens, position, len(consumed), evaluator_id, depth)
                return True
        return False

    @staticmethod
    def find_rule_match(pattern, token_stream):
        """
        返回 (起始位置, 匹配的Token列表)，无匹配返回 None。
        首个匹配器为 anchored 时只尝试位置 0。
        """
        if not pattern:
            return None

        position = 0
        while position <= len(token_stream):
            matches = []
            matched = True

            for matcher in pattern:
                ok, consumed = matcher.try_match(token_stream, position + len(matches))
                if not ok:
                    matched = False
                    break
                matches.extend(consumed)

            if matched:
                return position, matches
            if pattern[0].is_anchored():
                return None
            position += 1

        return None

    def evaluate_step(self, token_stream, start, length, evaluator_id, depth=0):
        """用 evaluator_id 的计算结果替换 token_stream[start:start + length]"""
        substream = token_stream[start:start + length]
        del token_stream[start:start + length]

        if isinstance(evaluator_id, BuiltinStep):
            handler = self._handlers[evaluator_id]
            if evaluator_id in RECURSIVE_STEPS:
                result = handler(*substream, depth=depth + 1)
            else:
                result = handler(*substream)
            name = evaluator_id.value
        else:
            result = self.user_defined_function(evaluator_id, substream)
            name = evaluator_id

        replacement = list(result) if isinstance(result, (list, tuple)) else [result]
        token_stream[start:start] = replacement
        logger.debug(f"{name}: {{{inspect_tokens(substream)}}} -> {{{inspect_tokens(replacement)}}}")
        return token_stream

    # ================== 用户函数 ==================
    def user_defined_function(self, name, tokens):
        function = self.rules.lookup_function(name)
        if function is None:
            raise UnknownFunction(name)

        arguments = [t.value for t in self.extract_arguments_from_function_call(tokens)]
        return_value = function.body(*arguments)
        return Token(function.return_category, return_value)

    @staticmethod
    def extract_arguments_from_function_call(tokens):
        # 去掉函数名、左右括号和逗号
        return [t for t in tokens[2:-1] if not t.is_delimiter()]

    # ================== 内置步骤 ==================
    def evaluate_group(self, *args, depth=0):
        return self.evaluate_token_stream(args[1:-1], depth)

    def apply(self, lvalue, operator, rvalue):
        value, category = BinaryOperation(lvalue.value, rvalue.value).perform(operator.value)
        return Token(category, value)

    def negate(self, _, token):
        return Token(token.category, token.value * -1)

    def pow_negate(self, base, _, __, exponent):
        return Token(base.category, base.value ** (exponent.value * -1))

    def mul_negate(self, val1, _, __, val2):
        return Token(val1.category, val1.value * val2.value * -1)

    def percentage(self, token, _):
        return Token(token.category, token.value / 100.0)

    def expand_range(self, left, oper1, middle, oper2, right):
        # a < b < c  ->  a < b and b < c
        return [left, oper1, middle, AND, middle, oper2, right]

    def if_(self, *args):
        """两个分支在此之前已被更高优先级的规则规约，这里不做短路"""
        _if, _open, condition, _, true_value, _, false_value, _close = args
        if condition.value:
            return true_value
        return false_value

    def round(self, *args, depth=0):
        _function, _open, *tokens, _close = args

        chunks = [[]]
        for token in tokens:
            if token.is_delimiter():
                chunks.append([])
            else:
                chunks[-1].append(token)
        chunks = [chunk for chunk in chunks if chunk]

        input_tokens = chunks[0] if chunks else []
        places_tokens = chunks[1] if len(chunks) > 1 else None

        input_value = self.evaluate_token_stream(input_tokens, depth).value
        if places_tokens:
            places = self.evaluate_token_stream(places_tokens, depth).value
        else:
            places = ROUNDING_CONFIG['default_places']

        value = round_half_up(input_value, places, ROUNDING_CONFIG['half_threshold'])
        return Token(TokenCategory.NUMERIC, value)

    def round_int(self, *args, depth=0):
        function, _open, *tokens, _close = args

        value = self.evaluate_token_stream(tokens, depth).value
        if function.value == 'roundup':
            rounded = round_up(value)
        else:
            rounded = round_down(value)
        return Token(TokenCategory.NUMERIC, rounded)

    def not_(self, *args, depth=0):
        return Token(TokenCategory.LOGICAL, not self.evaluate_token_stream(args[2:-1], depth).value)
