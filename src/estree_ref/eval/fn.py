from __future__ import annotations

from typing import List, Union

from ..runtime import EsError, EsFn, EsValue, Frame, call_esfn
from ..tree import CallExpression, Expr, FunctionExpression, Identifier
from ..types import NOT_A_FUNCTION, UNBOUND_IDENTIFIER
from .common import EvalFunc, is_error

def eval_function_expr(n: FunctionExpression, frame: Frame) -> EsFn:
    """Capture the current frame; the body is not evaluated here."""
    return EsFn(params=n.params, body=n.body, frame=frame)

def eval_call(n: CallExpression, frame: Frame, eval_func: EvalFunc) -> EsValue:
    args: List[EsValue] = []

    for arg_node in n.arguments:
        val = eval_func(arg_node, frame)
        if is_error(val):
            return val
        args.append(val)

    callee = resolve_callee(n.callee, frame, eval_func)
    if is_error(callee):
        return callee

    return call_esfn(callee, args)

def resolve_callee(node: Expr, frame: Frame, eval_func: EvalFunc) -> Union[EsFn, EsError]:
    if isinstance(node, Identifier):
        val = frame.lookup(node.name)

        if val is None:
            return EsError(UNBOUND_IDENTIFIER)
    else:
        # immediately-invoked or computed callee
        val = eval_func(node, frame)

        if is_error(val):
            return val

    if not isinstance(val, EsFn):
        return EsError(NOT_A_FUNCTION)

    return val
