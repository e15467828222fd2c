from __future__ import annotations

from typing import Callable, Optional
from typing_extensions import TypeGuard

from ..runtime import EsBool, EsError, EsNumber, EsValue, Frame
from ..tree import Expr

EvalFunc = Callable[[Expr, Frame], EsValue]

# Program result when the top-level body falls through.
FALLTHROUGH_RENDERING = "(value (function))"

def as_number(value: EsValue) -> Optional[int]:
    if isinstance(value, EsNumber):
        return value.value

    return None

def as_bool(value: EsValue) -> Optional[bool]:
    if isinstance(value, EsBool):
        return value.value

    return None

def is_error(value: Optional[EsValue]) -> TypeGuard[EsError]:
    return isinstance(value, EsError)

def render_result(value: Optional[EsValue]) -> str:
    """Single output line for a program result."""
    if value is None:
        return FALLTHROUGH_RENDERING

    return value.render()
