"""core/calculator.py"""
import logging
from typing import Any, Dict, Optional

from core.errors import UnboundVariable
from core.evaluator import Evaluator
from core.rules import RuleTable
from core.token_system import Token, TokenCategory
from core.tokenizer import Tokenizer
from utils.numeric import is_number, to_python_scalar

logger = logging.getLogger(__name__)


def value_to_token(value):
    """Python 值 -> Token；bool 判断要在数值之前"""
    value = to_python_scalar(value)
    if isinstance(value, bool):
        return Token(TokenCategory.LOGICAL, value)
    if is_number(value):
        return Token(TokenCategory.NUMERIC, value)
    if isinstance(value, str):
        return Token(TokenCategory.STRING, value)
    raise TypeError(f"Unsupported value type for binding: {type(value).__name__}")


class Calculator:
    """
    词法分析 + 变量绑定 + 规约求值。
    每个实例持有自己的规则表和变量存储，由调用方显式创建。
    """

    def __init__(self, rules=None, max_nesting_depth=None, case_sensitive=None):
        self.rules = rules if rules is not None else RuleTable()
        self.evaluator = Evaluator(self.rules, max_nesting_depth=max_nesting_depth)
        self.case_sensitive = case_sensitive
        self.memory = {}
        self._tokenizer = None

    @property
    def tokenizer(self):
        # 注册新函数后需要重建
        if self._tokenizer is None:
            self._tokenizer = Tokenizer(self.rules.function_names(), case_sensitive=self.case_sensitive)
        return self._tokenizer

    def _key(self, name):
        return name if self.tokenizer.case_sensitive else str(name).lower()

    def add_function(self, name, return_category, signature, body):
        function = self.rules.add_function(name, return_category, signature, body)
        self._tokenizer = None
        return function

    def store(self, name=None, value=None, **bindings):
        """存储变量：store('x', 1) 或 store(x=1, y=2)"""
        if name is not None:
            bindings[name] = value
        for key, val in bindings.items():
            self.memory[self._key(key)] = val
            logger.debug(f"Stored {key} = {val!r}")
        return self

    def clear(self):
        self.memory = {}
        return self

    def tokenize(self, expression):
        return self.tokenizer.tokenize(expression)

    def dependencies(self, expression, data=None):
        """表达式中未绑定的变量名"""
        bound = self._bindings(data)
        names = []
        for token in self.tokenize(expression):
            if token.is_(TokenCategory.IDENTIFIER) and token.value not in bound and token.value not in names:
                names.append(token.value)
        return names

    def _bindings(self, data):
        bindings = dict(self.memory)
        for key, val in (data or {}).items():
            bindings[self._key(key)] = val
        return bindings

    def bind(self, tokens, data: Optional[Dict[str, Any]] = None):
        """把 IDENTIFIER Token 替换为绑定值"""
        bindings = self._bindings(data)
        missing = [t.value for t in tokens
                   if t.is_(TokenCategory.IDENTIFIER) and t.value not in bindings]
        if missing:
            raise UnboundVariable(dict.fromkeys(missing))

        return [value_to_token(bindings[t.value]) if t.is_(TokenCategory.IDENTIFIER) else t
                for t in tokens]

    def evaluate(self, expression, data=None):
        """
        Args:
            expression: 表达式文本
            data: 本次求值的变量绑定，优先于 store 的值
        Returns:
            表达式的值
        """
        tokens = self.bind(self.tokenize(expression), data)
        return self.evaluator.evaluate(tokens)
