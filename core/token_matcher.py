"""core/token_matcher.py"""
from dataclasses import dataclass, replace

from core.token_system import TokenCategory, DELIMITER_CATEGORIES
from utils.numeric import INFINITY


@dataclass(frozen=True)
class TokenMatcher:
    """
    单个模式元素：按类别/取值判断Token，可重复匹配 min_count..max_count 个。
    anchored=True 表示只在剩余Token流的开头尝试。
    """
    categories: tuple = ()
    values: tuple = ()
    inverted: bool = False
    min_count: int = 1
    max_count: float = 1
    anchored: bool = False

    # ---------- 构造修饰 ----------
    def invert(self):
        return replace(self, inverted=not self.inverted)

    def star(self):
        return replace(self, min_count=0, max_count=INFINITY)

    def plus(self):
        return replace(self, min_count=1, max_count=INFINITY)

    def anchor(self):
        return replace(self, anchored=True)

    def is_anchored(self):
        return self.anchored

    # ---------- 匹配 ----------
    def matches_token(self, token):
        # 越界永不匹配，取反也一样
        if token is None:
            return False
        hit = ((not self.categories or token.category in self.categories)
               and (not self.values or token.value in self.values))
        return hit != self.inverted

    def try_match(self, stream, position=0):
        """
        从 position 开始贪婪匹配。
        Returns:
            (是否匹配, 消耗的Token列表)
        """
        consumed = []
        while len(consumed) < self.max_count:
            index = position + len(consumed)
            token = stream[index] if 0 <= index < len(stream) else None
            if not self.matches_token(token):
                break
            consumed.append(token)

        matched = self.min_count <= len(consumed) <= self.max_count
        return matched, consumed

    # ---------- 常用匹配器 ----------
    @classmethod
    def of(cls, category, *values):
        return cls(categories=(category,), values=tuple(values))

    @classmethod
    def numeric(cls):
        return cls.of(TokenCategory.NUMERIC)

    @classmethod
    def string(cls):
        return cls.of(TokenCategory.STRING)

    @classmethod
    def logical(cls):
        return cls.of(TokenCategory.LOGICAL)

    @classmethod
    def addsub(cls):
        return cls.of(TokenCategory.OPERATOR, 'add', 'subtract')

    @classmethod
    def subtract(cls):
        return cls.of(TokenCategory.OPERATOR, 'subtract')

    @classmethod
    def anchored_minus(cls):
        return cls.subtract().anchor()

    @classmethod
    def muldiv(cls):
        return cls.of(TokenCategory.OPERATOR, 'multiply', 'divide')

    @classmethod
    def multiply(cls):
        return cls.of(TokenCategory.OPERATOR, 'multiply')

    @classmethod
    def pow(cls):
        return cls.of(TokenCategory.OPERATOR, 'pow')

    @classmethod
    def mod(cls):
        return cls.of(TokenCategory.OPERATOR, 'mod')

    @classmethod
    def comparator(cls):
        return cls.of(TokenCategory.COMPARATOR)

    @classmethod
    def comp_lt(cls):
        return cls.of(TokenCategory.COMPARATOR, 'lt', 'le')

    @classmethod
    def comp_gt(cls):
        return cls.of(TokenCategory.COMPARATOR, 'gt', 'ge')

    @classmethod
    def combinator(cls):
        return cls.of(TokenCategory.COMBINATOR)

    @classmethod
    def open(cls):
        return cls.of(TokenCategory.GROUPING, 'open')

    @classmethod
    def close(cls):
        return cls.of(TokenCategory.GROUPING, 'close')

    @classmethod
    def comma(cls):
        return cls.of(TokenCategory.COMMA)

    @classmethod
    def non_group(cls):
        return cls(categories=DELIMITER_CATEGORIES).invert()

    @classmethod
    def non_group_star(cls):
        return cls.non_group().star()

    @classmethod
    def non_close_plus(cls):
        """可变参数：直到右括号前的所有Token"""
        return cls.of(TokenCategory.GROUPING, 'close').invert().plus()

    @classmethod
    def function(cls, name):
        return cls.of(TokenCategory.FUNCTION, name)

    @classmethod
    def category(cls, category):
        """用户函数签名里的参数形状"""
        return cls.of(category)


# 按名称索引的匹配器，供规则表组装模式
MATCHER_DEFINITIONS = {
    'numeric': TokenMatcher.numeric(),
    'string': TokenMatcher.string(),
    'logical': TokenMatcher.logical(),
    'addsub': TokenMatcher.addsub(),
    'subtract': TokenMatcher.subtract(),
    'anchored_minus': TokenMatcher.anchored_minus(),
    'muldiv': TokenMatcher.muldiv(),
    'multiply': TokenMatcher.multiply(),
    'pow': TokenMatcher.pow(),
    'mod': TokenMatcher.mod(),
    'comparator': TokenMatcher.comparator(),
    'comp_lt': TokenMatcher.comp_lt(),
    'comp_gt': TokenMatcher.comp_gt(),
    'combinator': TokenMatcher.combinator(),
    'open': TokenMatcher.open(),
    'close': TokenMatcher.close(),
    'comma': TokenMatcher.comma(),
    'non_group': TokenMatcher.non_group(),
    'non_group_star': TokenMatcher.non_group_star(),
    'non_close_plus': TokenMatcher.non_close_plus(),
}
