from __future__ import annotations

from ..runtime import EsBool, EsError, EsNumber, EsValue, Frame
from ..tree import (
    ARITHMETIC_OPS,
    BinaryExpression,
    ConditionalExpression,
    LogicalExpression,
    UnaryExpression,
)
from ..types import (
    DIVIDE_BY_ZERO,
    INVALID_BINARY_TYPES,
    INVALID_CONDITIONAL_TYPES,
    INVALID_LOGICAL_TYPES,
    INVALID_UNARY_TYPE,
)
from .common import EvalFunc, as_bool, as_number, is_error

def eval_binary(n: BinaryExpression, frame: Frame, eval_func: EvalFunc) -> EsValue:
    left = eval_func(n.left, frame)
    if is_error(left):
        return left

    right = eval_func(n.right, frame)
    if is_error(right):
        return right

    lhs = as_number(left)
    rhs = as_number(right)

    if lhs is None or rhs is None:
        return EsError(INVALID_BINARY_TYPES)

    if n.operator in ARITHMETIC_OPS:
        return apply_arithmetic(n.operator, lhs, rhs)

    return apply_comparison(n.operator, lhs, rhs)

def apply_arithmetic(op: str, lhs: int, rhs: int) -> EsValue:
    match op:
        case '+':
            return EsNumber(lhs + rhs)
        case '-':
            return EsNumber(lhs - rhs)
        case '*':
            return EsNumber(lhs * rhs)
        case '/':
            if rhs == 0:
                return EsError(DIVIDE_BY_ZERO)
            # floor division: -7 / 2 is -4, not -3
            return EsNumber(lhs // rhs)
        case _:
            raise ValueError(f"Unknown arithmetic operator {op!r}")

def apply_comparison(op: str, lhs: int, rhs: int) -> EsBool:
    match op:
        case '==':
            return EsBool(lhs == rhs)
        case '<':
            return EsBool(lhs < rhs)
        case '>':
            return EsBool(lhs > rhs)
        case '<=':
            return EsBool(lhs <= rhs)
        case '>=':
            return EsBool(lhs >= rhs)
        case _:
            raise ValueError(f"Unknown comparison operator {op!r}")

def eval_unary(n: UnaryExpression, frame: Frame, eval_func: EvalFunc) -> EsValue:
    arg = eval_func(n.argument, frame)
    if is_error(arg):
        return arg

    flag = as_bool(arg)

    # only logical negation exists; any other operator is a type failure
    if flag is None or n.operator != '!':
        return EsError(INVALID_UNARY_TYPE)

    return EsBool(not flag)

def eval_logical(n: LogicalExpression, frame: Frame, eval_func: EvalFunc) -> EsValue:
    # both sides always run; only an error value stops evaluation early
    left = eval_func(n.left, frame)
    if is_error(left):
        return left

    right = eval_func(n.right, frame)
    if is_error(right):
        return right

    lhs = as_bool(left)
    rhs = as_bool(right)

    if lhs is None or rhs is None:
        return EsError(INVALID_LOGICAL_TYPES)

    if n.operator == '&&':
        return EsBool(lhs and rhs)

    return EsBool(lhs or rhs)

def eval_conditional(n: ConditionalExpression, frame: Frame, eval_func: EvalFunc) -> EsValue:
    test = eval_func(n.test, frame)
    if is_error(test):
        return test

    flag = as_bool(test)
    if flag is None:
        return EsError(INVALID_CONDITIONAL_TYPES)

    return eval_func(n.consequent if flag else n.alternate, frame)
