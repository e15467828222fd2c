from __future__ import annotations

import logging
from typing import List

from .types import (
    EsBool, EsError, EsFn, EsNumber, EsValue, EsVoid,
    Frame, DepthGuard, Parameter,
    EstreeRuntimeError, EstreeInputError, EstreeDepthError,
    ARITY_MISMATCH, MISSING_RETURN,
)

logger = logging.getLogger(__name__)

__all__ = [
    "EsBool", "EsError", "EsFn", "EsNumber", "EsValue", "EsVoid",
    "Frame", "DepthGuard", "Parameter",
    "EstreeRuntimeError", "EstreeInputError", "EstreeDepthError",
    "bind_parameters", "call_esfn",
]

def bind_parameters(fn: EsFn, args: List[EsValue]) -> List[Parameter]:
    return [Parameter(name=name, value=val) for name, val in zip(fn.params, args)]

def call_esfn(fn: EsFn, args: List[EsValue]) -> EsValue:
    """
    Call semantics:
    - arity must match len(fn.params) exactly, else an `arity mismatch` error value.
    - frame P (parent = defining frame) holds the parameters; frame B
      (parent = P) runs the body.
    - a body that ends without `return` is a `missing return` error value.
    """
    if len(args) != len(fn.params):
        logger.debug("Arity mismatch calling %r with %d args", fn, len(args))
        return EsError(ARITY_MISMATCH)

    from .evaluator import eval_node  # local import to avoid cycle
    from .eval.blocks import exec_body

    param_frame = Frame(parent=fn.frame)

    for param in bind_parameters(fn, args):
        param_frame.declare(param.name, param.value)

    body_frame = Frame(parent=param_frame)
    result = exec_body(fn.body, body_frame, eval_node)

    if result is None:
        return EsError(MISSING_RETURN)

    return result
