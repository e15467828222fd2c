"""Typed AST nodes for the ESTree subset, plus the JSON loader that builds them.

The upstream parser hands us plain JSON objects keyed by a ``type`` field.
Everything is converted into frozen node classes up front so the evaluator
can match on node kind exhaustively and never touches raw dicts.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple, Union
from typing_extensions import TypeAlias

from .types import EstreeInputError

logger = logging.getLogger(__name__)

ARITHMETIC_OPS = frozenset({'+', '-', '*', '/'})
COMPARISON_OPS = frozenset({'==', '<', '>', '<=', '>='})
BINARY_OPS = ARITHMETIC_OPS | COMPARISON_OPS
LOGICAL_OPS = frozenset({'&&', '||'})
ASSIGNMENT_OPS = frozenset({'='})

# ---------- Expressions ----------

@dataclass(frozen=True)
class Identifier:
    name: str

@dataclass(frozen=True)
class Literal:
    raw: str

@dataclass(frozen=True)
class BinaryExpression:
    operator: str
    left: 'Expr'
    right: 'Expr'

@dataclass(frozen=True)
class UnaryExpression:
    operator: str
    argument: 'Expr'

@dataclass(frozen=True)
class LogicalExpression:
    operator: str
    left: 'Expr'
    right: 'Expr'

@dataclass(frozen=True)
class ConditionalExpression:
    test: 'Expr'
    consequent: 'Expr'
    alternate: 'Expr'

@dataclass(frozen=True)
class FunctionExpression:
    params: Tuple[str, ...]
    body: Tuple['Stmt', ...]

@dataclass(frozen=True)
class CallExpression:
    callee: 'Expr'
    arguments: Tuple['Expr', ...]

@dataclass(frozen=True)
class AssignmentExpression:
    left: Identifier
    right: 'Expr'

Expr: TypeAlias = Union[
    Identifier,
    Literal,
    BinaryExpression,
    UnaryExpression,
    LogicalExpression,
    ConditionalExpression,
    FunctionExpression,
    CallExpression,
    AssignmentExpression,
]

# ---------- Statements ----------

@dataclass(frozen=True)
class VariableDeclarator:
    id: Identifier
    init: Expr

@dataclass(frozen=True)
class VariableDeclaration:
    declarations: Tuple[VariableDeclarator, ...]

@dataclass(frozen=True)
class ReturnStatement:
    argument: Expr

@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expr

Stmt: TypeAlias = Union[VariableDeclaration, ReturnStatement, ExpressionStatement]

@dataclass(frozen=True)
class Program:
    body: Tuple[Stmt, ...]

# ---------- Loader ----------

def load_program(data: Any) -> Program:
    """Convert a decoded JSON document into a :class:`Program`.

    Accepts an ESTree ``Program`` object or any object carrying a ``body``
    list. Raises :class:`EstreeInputError` on the first malformed node.
    """
    if not isinstance(data, dict):
        raise EstreeInputError(f"Program must be an object, got {_json_kind(data)}", "$")

    kind = data.get('type')
    if kind is not None and kind != 'Program':
        raise EstreeInputError(f"Expected a Program node, got {kind!r}", "$")

    body = _load_body(_field(data, 'body', "$"), "$.body")
    logger.debug("Loaded program with %d top-level statements", len(body))

    return Program(body=body)

def _load_body(raw: Any, path: str) -> Tuple[Stmt, ...]:
    if not isinstance(raw, list):
        raise EstreeInputError(f"Expected a statement list, got {_json_kind(raw)}", path)

    return tuple(_load_stmt(item, f"{path}[{idx}]") for idx, item in enumerate(raw))

def _load_stmt(data: Any, path: str) -> Stmt:
    kind = _node_type(data, path)

    match kind:
        case 'VariableDeclaration':
            decls = _field(data, 'declarations', path)

            if not isinstance(decls, list):
                raise EstreeInputError("VariableDeclaration.declarations must be a list", path)

            return VariableDeclaration(
                declarations=tuple(_load_declarator(d, f"{path}.declarations[{i}]") for i, d in enumerate(decls))
            )
        case 'ReturnStatement':
            return ReturnStatement(argument=_load_expr(_field(data, 'argument', path), f"{path}.argument"))
        case 'ExpressionStatement':
            return ExpressionStatement(expression=_load_expr(_field(data, 'expression', path), f"{path}.expression"))
        case _:
            # bare expression nodes are accepted as expression statements
            return ExpressionStatement(expression=_load_expr(data, path))

def _load_declarator(data: Any, path: str) -> VariableDeclarator:
    kind = _node_type(data, path)
    if kind != 'VariableDeclarator':
        raise EstreeInputError(f"Expected VariableDeclarator, got {kind!r}", path)

    return VariableDeclarator(
        id=_load_identifier(_field(data, 'id', path), f"{path}.id"),
        init=_load_expr(_field(data, 'init', path), f"{path}.init"),
    )

def _load_identifier(data: Any, path: str) -> Identifier:
    kind = _node_type(data, path)
    if kind != 'Identifier':
        raise EstreeInputError(f"Expected Identifier, got {kind!r}", path)

    return Identifier(name=_str_field(data, 'name', path))

def _load_function(data: Dict[str, Any], path: str) -> FunctionExpression:
    params = _field(data, 'params', path)

    if not isinstance(params, list):
        raise EstreeInputError("FunctionExpression.params must be a list", path)

    names = tuple(_load_identifier(p, f"{path}.params[{i}]").name for i, p in enumerate(params))
    body = _field(data, 'body', path)

    # ESTree wraps the body in a BlockStatement; a bare list is tolerated too
    if isinstance(body, dict):
        block_path = f"{path}.body"
        block_kind = _node_type(body, block_path)
        if block_kind != 'BlockStatement':
            raise EstreeInputError(f"Function body must be a BlockStatement, got {block_kind!r}", block_path)
        stmts = _load_body(_field(body, 'body', block_path), f"{block_path}.body")
    else:
        stmts = _load_body(body, f"{path}.body")

    return FunctionExpression(params=names, body=stmts)

def _load_binary(data: Dict[str, Any], path: str) -> BinaryExpression:
    op = _operator(data, path, BINARY_OPS)

    return BinaryExpression(
        operator=op,
        left=_load_expr(_field(data, 'left', path), f"{path}.left"),
        right=_load_expr(_field(data, 'right', path), f"{path}.right"),
    )

def _load_logical(data: Dict[str, Any], path: str) -> LogicalExpression:
    op = _operator(data, path, LOGICAL_OPS)

    return LogicalExpression(
        operator=op,
        left=_load_expr(_field(data, 'left', path), f"{path}.left"),
        right=_load_expr(_field(data, 'right', path), f"{path}.right"),
    )

def _load_unary(data: Dict[str, Any], path: str) -> UnaryExpression:
    return UnaryExpression(
        operator=_str_field(data, 'operator', path),
        argument=_load_expr(_field(data, 'argument', path), f"{path}.argument"),
    )

def _load_conditional(data: Dict[str, Any], path: str) -> ConditionalExpression:
    return ConditionalExpression(
        test=_load_expr(_field(data, 'test', path), f"{path}.test"),
        consequent=_load_expr(_field(data, 'consequent', path), f"{path}.consequent"),
        alternate=_load_expr(_field(data, 'alternate', path), f"{path}.alternate"),
    )

def _load_call(data: Dict[str, Any], path: str) -> CallExpression:
    args = _field(data, 'arguments', path)

    if not isinstance(args, list):
        raise EstreeInputError("CallExpression.arguments must be a list", path)

    return CallExpression(
        callee=_load_expr(_field(data, 'callee', path), f"{path}.callee"),
        arguments=tuple(_load_expr(a, f"{path}.arguments[{i}]") for i, a in enumerate(args)),
    )

def _load_assignment(data: Dict[str, Any], path: str) -> AssignmentExpression:
    _operator(data, path, ASSIGNMENT_OPS)

    return AssignmentExpression(
        left=_load_identifier(_field(data, 'left', path), f"{path}.left"),
        right=_load_expr(_field(data, 'right', path), f"{path}.right"),
    )

def _load_literal(data: Dict[str, Any], path: str) -> Literal:
    return Literal(raw=_str_field(data, 'raw', path))

_EXPR_LOADERS: Dict[str, Callable[[Dict[str, Any], str], Expr]] = {
    'Identifier': lambda data, path: Identifier(name=_str_field(data, 'name', path)),
    'Literal': _load_literal,
    'BinaryExpression': _load_binary,
    'UnaryExpression': _load_unary,
    'LogicalExpression': _load_logical,
    'ConditionalExpression': _load_conditional,
    'FunctionExpression': _load_function,
    'CallExpression': _load_call,
    'AssignmentExpression': _load_assignment,
}

def _load_expr(data: Any, path: str) -> Expr:
    kind = _node_type(data, path)
    loader = _EXPR_LOADERS.get(kind)

    if loader is None:
        raise EstreeInputError(f"Unknown node type {kind!r}", path)

    return loader(data, path)

# ---------- Field helpers ----------

def _node_type(data: Any, path: str) -> str:
    if not isinstance(data, dict):
        raise EstreeInputError(f"Expected a node object, got {_json_kind(data)}", path)

    kind = data.get('type')
    if not isinstance(kind, str):
        raise EstreeInputError("Node is missing its 'type' field", path)

    return kind

def _field(data: Dict[str, Any], name: str, path: str) -> Any:
    value = data.get(name)

    if value is None:
        raise EstreeInputError(f"{data.get('type', 'Node')} is missing required field '{name}'", path)

    return value

def _str_field(data: Dict[str, Any], name: str, path: str) -> str:
    value = _field(data, name, path)

    if not isinstance(value, str):
        raise EstreeInputError(f"{data.get('type', 'Node')}.{name} must be a string", path)

    return value

def _operator(data: Dict[str, Any], path: str, allowed: frozenset[str]) -> str:
    op = _str_field(data, 'operator', path)

    if op not in allowed:
        raise EstreeInputError(f"Unsupported {data['type']} operator {op!r}", path)

    return op

def _json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"

