"""core/token_system.py"""
from dataclasses import dataclass
from enum import Enum
from typing import Any


class TokenCategory(Enum):
    NUMERIC = "numeric"
    STRING = "string"
    LOGICAL = "logical"
    IDENTIFIER = "identifier"  # 变量名，求值前由 Calculator 替换
    OPERATOR = "operator"  # + - * / ^ %
    COMPARATOR = "comparator"  # < <= > >= = !=
    COMBINATOR = "combinator"  # and / or
    GROUPING = "grouping"  # ( )
    COMMA = "comma"  # 参数分隔符
    FUNCTION = "function"  # 内置函数或用户函数名


@dataclass(frozen=True)
class Token:
    category: TokenCategory
    value: Any = None

    def is_(self, category):
        return self.category == category

    def is_delimiter(self):
        """括号和逗号都视为分隔符"""
        return self.category in DELIMITER_CATEGORIES

    def __str__(self):
        return str(self.value)


DELIMITER_CATEGORIES = (TokenCategory.GROUPING, TokenCategory.COMMA)

# 各类别下的合法取值
OPERATOR_VALUES = ('add', 'subtract', 'multiply', 'divide', 'pow', 'mod')
COMPARATOR_VALUES = ('lt', 'le', 'gt', 'ge', 'eq', 'ne')
COMBINATOR_VALUES = ('and', 'or')
GROUPING_VALUES = ('open', 'close')
BUILTIN_FUNCTIONS = ('if', 'round', 'roundup', 'rounddown', 'not')

# 常用Token
ZERO = Token(TokenCategory.NUMERIC, 0)
OPEN = Token(TokenCategory.GROUPING, 'open')
CLOSE = Token(TokenCategory.GROUPING, 'close')
COMMA = Token(TokenCategory.COMMA, 'comma')
AND = Token(TokenCategory.COMBINATOR, 'and')


def inspect_tokens(tokens):
    """诊断用：Token序列的可读形式"""
    return ' '.join(str(t) for t in tokens)
