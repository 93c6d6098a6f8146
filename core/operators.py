"""core/operators.py"""
from core.errors import UnknownOperator
from core.token_system import TokenCategory

# 操作符名 -> 方法名（and/or 是 Python 关键字）
OPERATION_METHODS = {
    # 算术
    'add': 'add',
    'subtract': 'subtract',
    'multiply': 'multiply',
    'divide': 'divide',
    'mod': 'mod',
    'pow': 'pow',
    # 比较
    'lt': 'lt',
    'le': 'le',
    'gt': 'gt',
    'ge': 'ge',
    'eq': 'eq',
    'ne': 'ne',
    # 逻辑
    'and': 'and_',
    'or': 'or_',
}


class BinaryOperation:
    """两个操作数上的二元运算，每个方法返回 (结果值, 结果类别)"""

    def __init__(self, left, right):
        self.left = left
        self.right = right

    @staticmethod
    def supports(name):
        return name in OPERATION_METHODS

    def perform(self, name):
        """按操作符名调用对应方法"""
        if not self.supports(name):
            raise UnknownOperator(name)
        return getattr(self, OPERATION_METHODS[name])()

    # 算术操作符====================
    def add(self):
        return self.left + self.right, TokenCategory.NUMERIC

    def subtract(self):
        return self.left - self.right, TokenCategory.NUMERIC

    def multiply(self):
        return self.left * self.right, TokenCategory.NUMERIC

    def divide(self):
        """整数整除时保持 int，否则返回 float"""
        if isinstance(self.left, int) and isinstance(self.right, int) and self.right != 0:
            quotient, remainder = divmod(self.left, self.right)
            if remainder == 0:
                return quotient, TokenCategory.NUMERIC
        return self.left / self.right, TokenCategory.NUMERIC

    def mod(self):
        return self.left % self.right, TokenCategory.NUMERIC

    def pow(self):
        return self.left ** self.right, TokenCategory.NUMERIC

    # 比较操作符====================
    def lt(self):
        return self.left < self.right, TokenCategory.LOGICAL

    def le(self):
        return self.left <= self.right, TokenCategory.LOGICAL

    def gt(self):
        return self.left > self.right, TokenCategory.LOGICAL

    def ge(self):
        return self.left >= self.right, TokenCategory.LOGICAL

    def eq(self):
        return self.left == self.right, TokenCategory.LOGICAL

    def ne(self):
        return self.left != self.right, TokenCategory.LOGICAL

    # 逻辑操作符====================
    def and_(self):
        return bool(self.left and self.right), TokenCategory.LOGICAL

    def or_(self):
        return bool(self.left or self.right), TokenCategory.LOGICAL
