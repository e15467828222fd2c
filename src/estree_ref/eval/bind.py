from __future__ import annotations

from typing import Optional

from ..runtime import EsError, EsValue, EsVoid, Frame
from ..tree import AssignmentExpression, FunctionExpression, VariableDeclaration
from ..types import UNBOUND_IDENTIFIER
from .common import EvalFunc, is_error
from .fn import eval_function_expr

def eval_assignment(n: AssignmentExpression, frame: Frame, eval_func: EvalFunc) -> EsValue:
    """Rebind an existing name somewhere in the chain; never creates one."""
    name = n.left.name

    if frame.lookup(name) is None:
        return EsError(UNBOUND_IDENTIFIER)

    value = eval_func(n.right, frame)
    if is_error(value):
        return value

    if not frame.assign(name, value):
        return EsError(UNBOUND_IDENTIFIER)

    return EsVoid()

def eval_var_declaration(n: VariableDeclaration, frame: Frame, eval_func: EvalFunc) -> Optional[EsError]:
    """Declare each target in the current frame.

    Returns the first initializer error, leaving later declarators unrun.
    """
    for decl in n.declarations:
        init = decl.init

        if isinstance(init, FunctionExpression):
            frame.declare(decl.id.name, eval_function_expr(init, frame))
            continue

        value = eval_func(init, frame)
        if is_error(value):
            return value

        frame.declare(decl.id.name, value)

    return None
