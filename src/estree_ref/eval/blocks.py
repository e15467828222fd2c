from __future__ import annotations

from typing import Optional, Sequence

from ..runtime import EsValue, Frame
from ..tree import ExpressionStatement, ReturnStatement, Stmt, VariableDeclaration
from .bind import eval_var_declaration
from .common import EvalFunc, is_error

def exec_body(statements: Sequence[Stmt], frame: Frame, eval_func: EvalFunc) -> Optional[EsValue]:
    """Run a statement list in `frame`.

    Returns the value of a `return`, the first error value, or (only in the
    parentless top-level frame) the value of a trailing expression statement.
    None means the body fell through; callers decide what that means.
    """
    last = len(statements) - 1

    for idx, stmt in enumerate(statements):
        match stmt:
            case VariableDeclaration():
                err = eval_var_declaration(stmt, frame, eval_func)
                if err is not None:
                    return err
            case ReturnStatement():
                return eval_return_stmt(stmt, frame, eval_func)
            case ExpressionStatement(expression=expr):
                value = eval_func(expr, frame)

                if is_error(value):
                    return value
                if idx == last and frame.is_top_level():
                    return value
            case _:
                raise TypeError(f"Unexpected statement {type(stmt).__name__}")

    return None

def eval_return_stmt(n: ReturnStatement, frame: Frame, eval_func: EvalFunc) -> EsValue:
    return eval_func(n.argument, frame)
