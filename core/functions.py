"""core/functions.py"""
import logging
from dataclasses import dataclass
from typing import Callable

from core.token_system import TokenCategory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalFunction:
    """
    用户注册的函数
    Args:
        name: 函数名（统一为小写字符串）
        return_category: 返回值的Token类别
        signature: 参数形状序列，每项是 TokenCategory 或匹配器名（如 'non_close_plus'）
        body: 可调用对象，按位置接收参数值
    """
    name: str
    return_category: TokenCategory
    signature: tuple
    body: Callable

    def __post_init__(self):
        object.__setattr__(self, 'name', str(self.name).lower())
        object.__setattr__(self, 'signature', tuple(self.signature))

    def pattern_categories(self):
        """签名参数之间插入逗号：[a, b] -> [a, COMMA, b]"""
        categories = []
        for category in self.signature:
            categories.extend([category, TokenCategory.COMMA])
        return categories[:-1]


class FunctionRegistry:
    """函数名 -> ExternalFunction；求值期间只读"""

    def __init__(self):
        self._functions = {}

    def register(self, function):
        if function.name in self._functions:
            logger.warning(f"Function '{function.name}' re-registered, previous definition replaced")
        self._functions[function.name] = function
        return function

    def lookup(self, name):
        return self._functions.get(str(name).lower())

    def names(self):
        return list(self._functions)

    def __contains__(self, name):
        return self.lookup(name) is not None

    def __len__(self):
        return len(self._functions)
