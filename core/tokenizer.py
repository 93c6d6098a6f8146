"""core/tokenizer.py"""
import logging
import re

from config.config import LEXER_CONFIG
from core.errors import TokenizeError
from core.token_system import Token, TokenCategory, BUILTIN_FUNCTIONS

logger = logging.getLogger(__name__)

OPERATOR_SYMBOLS = {
    '^': 'pow', '+': 'add', '-': 'subtract',
    '*': 'multiply', '/': 'divide', '%': 'mod',
}
COMPARATOR_SYMBOLS = {
    '<=': 'le', '>=': 'ge', '!=': 'ne', '<>': 'ne', '==': 'eq',
    '<': 'lt', '>': 'gt', '=': 'eq',
}
GROUPING_SYMBOLS = {'(': 'open', ')': 'close'}


def _to_number(text):
    return float(text) if '.' in text else int(text)


class TokenScanner:
    """单个正则扫描器；converter 返回 None 表示跳过（空白）"""

    def __init__(self, category, pattern, converter=None, flags=0):
        self.category = category
        self.regex = re.compile(pattern, flags)
        self.converter = converter

    def scan(self, text, position):
        """
        Returns:
            (Token或None, 结束位置)；不匹配返回 None
        """
        match = self.regex.match(text, position)
        if not match or match.end() == position:
            return None
        raw = match.group(match.lastindex or 0)
        if self.category is None:
            return None, match.end()
        value = self.converter(raw) if self.converter else raw
        return Token(self.category, value), match.end()


class Tokenizer:
    """把表达式文本切分成Token列表"""

    def __init__(self, function_names=(), case_sensitive=None):
        if case_sensitive is None:
            case_sensitive = LEXER_CONFIG['case_sensitive']
        self.case_sensitive = case_sensitive
        self.function_names = tuple(BUILTIN_FUNCTIONS) + tuple(
            str(name).lower() for name in function_names if str(name).lower() not in BUILTIN_FUNCTIONS
        )
        self.scanners = self._build_scanners()

    def _build_scanners(self):
        keyword_flags = 0 if self.case_sensitive else re.IGNORECASE
        # 长名字优先，避免 round 抢先匹配 roundup
        names = sorted(self.function_names, key=len, reverse=True)
        function_pattern = r'(' + '|'.join(re.escape(n) for n in names) + r')\b(?=\s*\()'

        return [
            TokenScanner(None, r'\s+'),
            TokenScanner(TokenCategory.NUMERIC, r'(\d+\.\d+|\d+|\.\d+)\b', _to_number),
            TokenScanner(TokenCategory.STRING, r'"([^"]*)"'),
            TokenScanner(TokenCategory.STRING, r"'([^']*)'"),
            TokenScanner(TokenCategory.OPERATOR, r'(\^|\+|-|\*|/|%)', OPERATOR_SYMBOLS.get),
            TokenScanner(TokenCategory.GROUPING, r'(\(|\))', GROUPING_SYMBOLS.get),
            TokenScanner(TokenCategory.COMMA, r'(,)', lambda _: 'comma'),
            TokenScanner(TokenCategory.COMPARATOR, r'(<=|>=|!=|<>|==|<|>|=)', COMPARATOR_SYMBOLS.get),
            TokenScanner(TokenCategory.COMBINATOR, r'(and|or)\b', str.lower, keyword_flags),
            TokenScanner(TokenCategory.LOGICAL, r'(true|false)\b', lambda s: s.lower() == 'true', keyword_flags),
            TokenScanner(TokenCategory.FUNCTION, function_pattern, str.lower, keyword_flags),
            TokenScanner(TokenCategory.IDENTIFIER, r'([A-Za-z_]\w*)', self._identifier),
        ]

    def _identifier(self, name):
        return name if self.case_sensitive else name.lower()

    def tokenize(self, text):
        tokens = []
        position = 0
        text = text or ''

        while position < len(text):
            for scanner in self.scanners:
                scanned = scanner.scan(text, position)
                if scanned is None:
                    continue
                token, position = scanned
                if token is not None:
                    tokens.append(token)
                break
            else:
                raise TokenizeError(text, position)

        logger.debug(f"Tokenized {text!r} into {len(tokens)} tokens")
        return tokens
