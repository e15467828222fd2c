from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional, Tuple, Union
from typing_extensions import TypeAlias

if TYPE_CHECKING:
    from .tree import Stmt

DEFAULT_MAX_DEPTH = 1000
# Highest accepted depth limit; keeps the raised recursion limit within C stack.
MAX_DEPTH_CEILING = 2500

# ---------- Error reasons ----------

UNBOUND_IDENTIFIER = "unbound identifier"
NOT_A_FUNCTION = "not a function"
ARITY_MISMATCH = "arity mismatch"
MISSING_RETURN = "missing return"
INVALID_BINARY_TYPES = "invalid binary type(s)"
INVALID_UNARY_TYPE = "invalid unary type"
INVALID_LOGICAL_TYPES = "invalid logical type(s)"
INVALID_CONDITIONAL_TYPES = "invalid conditional type(s)"
DIVIDE_BY_ZERO = "divide by zero"
NOT_A_WHOLE_NUMBER = "not a whole number"

ERROR_REASONS: Tuple[str, ...] = (
    UNBOUND_IDENTIFIER,
    NOT_A_FUNCTION,
    ARITY_MISMATCH,
    MISSING_RETURN,
    INVALID_BINARY_TYPES,
    INVALID_UNARY_TYPE,
    INVALID_LOGICAL_TYPES,
    INVALID_CONDITIONAL_TYPES,
    DIVIDE_BY_ZERO,
    NOT_A_WHOLE_NUMBER,
)

# ---------- Value Model ----------

@dataclass(frozen=True)
class EsNumber:
    value: int
    def render(self) -> str:
        return f"(value (number {self.value}))"

@dataclass(frozen=True)
class EsBool:
    value: bool
    def render(self) -> str:
        return "(value (boolean true))" if self.value else "(value (boolean false))"

@dataclass(frozen=True)
class EsVoid:
    def render(self) -> str:
        return "(value (void))"

@dataclass(frozen=True)
class EsError:
    reason: str
    def render(self) -> str:
        # the " banana" suffix is part of the output format
        return f'(error "{self.reason} banana")'

@dataclass(frozen=True, eq=False)
class EsFn:
    params: Tuple[str, ...]
    body: Tuple['Stmt', ...]        # unevaluated statements
    frame: 'Frame'                  # defining scope
    def render(self) -> str:
        return "(value (function))"
    def __repr__(self) -> str:
        param_desc = ", ".join(self.params) if self.params else "nullary"
        return f"<fn params={param_desc} stmts={len(self.body)}>"

EsValue: TypeAlias = Union[EsNumber, EsBool, EsFn, EsVoid, EsError]

@dataclass(frozen=True)
class Parameter:
    """One argument bound to one parameter name for a single call."""
    name: str
    value: EsValue

# ---------- Environment ----------

class DepthGuard:
    """Nesting counter shared by every frame of one program run."""

    def __init__(self, limit: int=DEFAULT_MAX_DEPTH):
        self.limit = limit
        self.depth = 0
        self.peak = 0

    def enter(self) -> None:
        if self.depth >= self.limit:
            raise EstreeDepthError(self.limit)

        self.depth += 1
        if self.depth > self.peak:
            self.peak = self.depth

    def leave(self) -> None:
        self.depth -= 1

class Frame:
    def __init__(self, parent: Optional['Frame']=None, guard: Optional[DepthGuard]=None):
        self.parent = parent
        self.vars: Dict[str, EsValue] = {}

        if guard is not None:
            self.guard = guard
        elif parent is not None:
            self.guard = parent.guard
        else:
            self.guard = DepthGuard()

    def declare(self, name: str, val: EsValue) -> None:
        self.vars[name] = val

    def lookup(self, name: str) -> Optional[EsValue]:
        cur: Optional[Frame] = self

        while cur is not None:
            if name in cur.vars:
                return cur.vars[name]
            cur = cur.parent

        return None

    def assign(self, name: str, val: EsValue) -> bool:
        cur: Optional[Frame] = self

        while cur is not None:
            if name in cur.vars:
                cur.vars[name] = val
                return True
            cur = cur.parent

        return False

    def is_top_level(self) -> bool:
        return self.parent is None

# ---------- Exceptions ----------

class EstreeRuntimeError(Exception):
    """Fatal failure that is not part of the program's value-level result."""

class EstreeInputError(EstreeRuntimeError):
    def __init__(self, message: str, path: str="$"):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        msg = super().__str__()
        return f"{msg} (at {self.path})"

class EstreeDepthError(EstreeRuntimeError):
    def __init__(self, limit: int):
        super().__init__(f"Maximum evaluation depth exceeded (limit {limit})")
        self.limit = limit
