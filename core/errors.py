"""core/errors.py

表达式求值的异常体系。所有异常继承 ExpressionError，带稳定的 code，
调用方可按 code 区分处理；引擎本身不做恢复。
"""
from core.token_system import inspect_tokens


class ExpressionError(Exception):
    """表达式求值失败的基类"""
    code = "expression_error"

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'code': self.code, 'message': self.message}


class NoRuleMatched(ExpressionError):
    """剩余Token多于一个，且没有任何规则匹配"""
    code = "no_rule_matched"

    def __init__(self, tokens):
        self.tokens = list(tokens)
        super().__init__(f"no rule matched {{{{{inspect_tokens(self.tokens)}}}}}")


class UnknownOperator(ExpressionError):
    code = "unknown_operator"

    def __init__(self, operator):
        self.operator = operator
        super().__init__(f"unknown operation {operator}")


class UnknownFunction(ExpressionError):
    code = "unknown_function"

    def __init__(self, name):
        self.name = name
        super().__init__(f"unknown function '{name}'")


class ExpressionTooDeeplyNested(ExpressionError):
    code = "too_deeply_nested"

    def __init__(self, depth, limit):
        self.depth = depth
        self.limit = limit
        super().__init__(f"expression too deeply nested (depth {depth} exceeds limit {limit})")


class TokenizeError(ExpressionError):
    code = "tokenize_error"

    def __init__(self, text, position):
        self.text = text
        self.position = position
        super().__init__(f"cannot tokenize at {position}: {text[position:position + 10]!r}")


class UnboundVariable(ExpressionError):
    code = "unbound_variable"

    def __init__(self, names):
        self.names = list(names)
        super().__init__(f"no value provided for variables: {', '.join(self.names)}")
