"""主程序入口 - 单个表达式求值或对CSV逐行求值"""
import argparse
import logging
import sys

import numpy as np
import pandas as pd

from config.config import ENGINE_CONFIG, CLI_CONFIG
from core import Calculator, ExpressionError

logger = logging.getLogger(__name__)


def parse_value(text):
    """命令行绑定值：true/false、整数、浮点数，否则按字符串处理"""
    lowered = text.strip().lower()
    if lowered in ('true', 'false'):
        return lowered == 'true'
    for cast in (int, float):
        try:
            return cast(text)
        except ValueError:
            continue
    return text


def parse_bindings(pairs):
    bindings = {}
    for pair in pairs or []:
        if '=' not in pair:
            raise ValueError(f"Invalid binding '{pair}', expected name=value")
        name, value = pair.split('=', 1)
        bindings[name.strip()] = parse_value(value.strip())
    return bindings


def evaluate_dataset(calculator, expression, data, result_column=None):
    """
    对每一行求值，行内各列作为变量绑定
    Args:
        calculator: Calculator 实例
        expression: 表达式文本
        data: DataFrame
        result_column: 结果列名
    Returns:
        新增结果列的 DataFrame，失败的行为 NaN
    """
    result_column = result_column or CLI_CONFIG['result_column']
    results = []
    failures = 0

    for index, row in data.iterrows():
        try:
            results.append(calculator.evaluate(expression, row.to_dict()))
        except (ExpressionError, ArithmeticError, TypeError) as e:
            logger.error(f"Row {index}: failed to evaluate '{expression[:50]}': {e}")
            results.append(np.nan)
            failures += 1

    transformed = data.copy()
    transformed[result_column] = results
    logger.info(f"Evaluated {len(data)} rows, {failures} failed")
    return transformed


def main(args):
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format=CLI_CONFIG['log_format']
    )

    calculator = Calculator(max_nesting_depth=args.max_depth)
    try:
        bindings = parse_bindings(args.var)
    except ValueError as e:
        logger.error(str(e))
        return 2
    calculator.store(**bindings)

    if args.data_path:
        logger.info(f"Loading data from {args.data_path}")
        data = pd.read_csv(args.data_path)
        logger.info(f"Data shape: {data.shape}")

        transformed = evaluate_dataset(calculator, args.expression, data, args.result_column)
        if args.output_path:
            logger.info(f"Saving results to {args.output_path}")
            transformed.to_csv(args.output_path, index=False)
        else:
            print(transformed.to_string(index=False))
        return 0

    try:
        result = calculator.evaluate(args.expression)
    except (ExpressionError, ArithmeticError) as e:
        logger.error(f"Failed to evaluate '{args.expression}': {e}")
        return 1

    print(result)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="Rule-driven expression calculator")

    parser.add_argument(
        "expression",
        type=str,
        help="Expression to evaluate, e.g. \"round(price * qty, 2)\""
    )
    parser.add_argument(
        "--var",
        action="append",
        default=[],
        help="Variable binding name=value (repeatable)"
    )
    parser.add_argument(
        "--data_path",
        type=str,
        default=None,
        help="CSV file; the expression is evaluated once per row with columns bound as variables"
    )
    parser.add_argument(
        "--output_path",
        type=str,
        default=None,
        help="Path to save the evaluated dataset (CSV)"
    )
    parser.add_argument(
        "--result_column",
        type=str,
        default=CLI_CONFIG['result_column'],
        help="Name of the result column in batch mode"
    )
    parser.add_argument(
        "--max_depth",
        type=int,
        default=ENGINE_CONFIG['max_nesting_depth'],
        help="Maximum nesting depth of sub-expressions"
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default=CLI_CONFIG['log_level'],
        help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    return parser


def cli():
    sys.exit(main(build_parser().parse_args()))


if __name__ == "__main__":
    cli()
