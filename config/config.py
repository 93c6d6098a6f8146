"""配置文件"""

# 规约引擎参数
ENGINE_CONFIG = {
    "max_nesting_depth": 64,  # 递归规约的最大嵌套深度
    "empty_expression_value": 0,  # 空表达式的值
}

# 舍入参数
ROUNDING_CONFIG = {
    "default_places": 0,  # round() 未给位数时
    "half_threshold": 0.5,  # 小数部分 >= 0.5 向上取整
}

# 词法分析参数
LEXER_CONFIG = {
    "case_sensitive": False,  # 关键字、函数名、变量名是否区分大小写
}

# 命令行参数
CLI_CONFIG = {
    "result_column": "result",
    "log_level": "INFO",
    "log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    assert ENGINE_CONFIG["max_nesting_depth"] > 0, "max_nesting_depth 必须为正数"
    assert 0 < ROUNDING_CONFIG["half_threshold"] < 1, "half_threshold 必须在 (0, 1) 之间"
    assert ROUNDING_CONFIG["default_places"] >= 0, "default_places 不能为负"
    assert CLI_CONFIG["log_level"] in ("DEBUG", "INFO", "WARNING", "ERROR"), "未知日志级别"
    print("Configuration validated successfully!")
