"""utils/numeric.py"""
import numbers

import numpy as np

INFINITY = np.inf  # 匹配器无上限重复次数
HALF = 0.5  # 四舍五入阈值


def is_number(value):
    """bool 不算数值"""
    return isinstance(value, (numbers.Number, np.number)) and not isinstance(value, (bool, np.bool_))


def to_python_scalar(value):
    """numpy 标量转为 Python 原生类型，其他值原样返回"""
    if isinstance(value, np.generic):
        return value.item()
    return value


def round_half_up(value, places=0, threshold=HALF):
    """
    按位数舍入：放大 10**places，小数部分 >= threshold 则向上取整，否则截断，再缩回。
    负数的小数部分为负，总是截断。
    """
    places = int(places)
    scale = 10.0 ** places
    scaled = value * (10 ** places)
    truncated = np.trunc(scaled)
    if scaled - truncated >= threshold:
        return float(np.ceil(scaled) / scale)
    return float(truncated / scale)


def round_up(value):
    """向上取整，返回 int"""
    return int(np.ceil(value))


def round_down(value):
    """向下取整，返回 int"""
    return int(np.floor(value))
