from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

from .runtime import (
    DepthGuard,
    EsValue,
    EstreeDepthError,
    EstreeInputError,
    Frame,
)
from .tree import (
    AssignmentExpression,
    BinaryExpression,
    CallExpression,
    ConditionalExpression,
    Expr,
    FunctionExpression,
    Identifier,
    Literal,
    LogicalExpression,
    Program,
    UnaryExpression,
)
from .types import MAX_DEPTH_CEILING
from .utils import max_depth_from_env

from .eval.bind import eval_assignment
from .eval.blocks import exec_body
from .eval.expr import eval_binary, eval_conditional, eval_logical, eval_unary
from .eval.fn import eval_call, eval_function_expr
from .eval.literals import eval_identifier, eval_literal

logger = logging.getLogger(__name__)

# Worst-case Python frames consumed per evaluation level (call -> body -> return).
_PY_FRAMES_PER_LEVEL = 8
_RECURSION_SLACK = 1000

# ---------------- Public API ----------------

def resolve_max_depth(max_depth: Optional[int]=None) -> int:
    """Explicit limit, else ESTREE_MAX_DEPTH, clamped to MAX_DEPTH_CEILING."""
    limit = max_depth if max_depth is not None else max_depth_from_env()

    if limit > MAX_DEPTH_CEILING:
        logger.debug("Depth limit %d clamped to %d", limit, MAX_DEPTH_CEILING)
        return MAX_DEPTH_CEILING

    return limit

def new_top_frame(max_depth: Optional[int]=None) -> Frame:
    """Fresh parentless frame with its own depth budget."""
    return Frame(guard=DepthGuard(resolve_max_depth(max_depth)))

def eval_program(program: Program, frame: Optional[Frame]=None, max_depth: Optional[int]=None) -> Optional[EsValue]:
    """Run the top-level body; None means it fell through."""
    if frame is None:
        frame = new_top_frame(max_depth)

    guard = frame.guard

    with recursion_headroom(guard.limit):
        try:
            result = exec_body(program.body, frame, eval_node)
        except RecursionError:
            logger.debug("Python recursion limit hit, peak depth %d", guard.peak)
            raise EstreeDepthError(guard.limit) from None

    logger.debug("Program finished, peak depth %d/%d", guard.peak, guard.limit)

    return result

def eval_expr(ast: Expr, frame: Optional[Frame]=None, max_depth: Optional[int]=None) -> EsValue:
    if frame is None:
        frame = new_top_frame(max_depth)

    with recursion_headroom(frame.guard.limit):
        try:
            return eval_node(ast, frame)
        except RecursionError:
            raise EstreeDepthError(frame.guard.limit) from None

@contextmanager
def recursion_headroom(depth_limit: int) -> Iterator[None]:
    """Raise the interpreter recursion limit far enough for `depth_limit` levels."""
    previous = sys.getrecursionlimit()
    wanted = min(depth_limit, MAX_DEPTH_CEILING) * _PY_FRAMES_PER_LEVEL + _RECURSION_SLACK

    if wanted > previous:
        sys.setrecursionlimit(wanted)

    try:
        yield
    finally:
        if wanted > previous:
            sys.setrecursionlimit(previous)

# ---------------- Core evaluator ----------------

def eval_node(n: Expr, frame: Frame) -> EsValue:
    guard = frame.guard
    guard.enter()

    try:
        return _eval_node_inner(n, frame)
    finally:
        guard.leave()

def _eval_node_inner(n: Expr, frame: Frame) -> EsValue:
    match n:
        case Identifier():
            return eval_identifier(n, frame)
        case Literal():
            return eval_literal(n)
        case BinaryExpression():
            return eval_binary(n, frame, eval_node)
        case UnaryExpression():
            return eval_unary(n, frame, eval_node)
        case LogicalExpression():
            return eval_logical(n, frame, eval_node)
        case ConditionalExpression():
            return eval_conditional(n, frame, eval_node)
        case FunctionExpression():
            return eval_function_expr(n, frame)
        case CallExpression():
            return eval_call(n, frame, eval_node)
        case AssignmentExpression():
            return eval_assignment(n, frame, eval_node)
        case _:
            raise EstreeInputError(f"Unknown node: {type(n).__name__}")
