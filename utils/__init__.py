"""工具模块"""
from .numeric import INFINITY, is_number, to_python_scalar, round_half_up, round_up, round_down

__all__ = ['INFINITY', 'is_number', 'to_python_scalar', 'round_half_up', 'round_up', 'round_down']
