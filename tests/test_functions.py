from __future__ import annotations

import pytest

from tests.support.harness import (
    FALSE,
    TRUE,
    assign,
    binary,
    call,
    cond,
    error_of,
    expr_stmt,
    fn,
    ident,
    num,
    program,
    ret,
    run_runtime_case,
    value_of,
    var,
)

# var fact = function(n) { return n < 2 ? 1 : n * fact(n - 1); };
FACT = var(
    "fact",
    fn(
        ["n"],
        ret(
            cond(
                binary("<", ident("n"), num(2)),
                num(1),
                binary("*", ident("n"), call("fact", binary("-", ident("n"), num(1)))),
            )
        ),
    ),
)

SCENARIOS = [
    pytest.param(
        program(
            var("f", fn(["a", "b"], ret(binary("+", ident("a"), ident("b"))))),
            expr_stmt(call("f", num(2), num(3))),
        ),
        value_of("number", 5),
        None,
        id="call-two-params",
    ),
    pytest.param(
        program(var("f", fn([], ret(num(7)))), expr_stmt(call("f"))),
        value_of("number", 7),
        None,
        id="call-nullary",
    ),
    pytest.param(
        program(expr_stmt(call(fn(["x"], ret(binary("*", ident("x"), ident("x")))), num(9)))),
        value_of("number", 81),
        None,
        id="immediately-invoked",
    ),
    pytest.param(
        program(FACT, expr_stmt(call("fact", num(6)))),
        value_of("number", 720),
        None,
        id="recursion-through-enclosing-scope",
    ),
    pytest.param(
        program(
            var("f", fn(["x", "y"], ret(ident("x")))),
            expr_stmt(call("f", num(1))),
        ),
        error_of("arity mismatch"),
        None,
        id="arity-too-few",
    ),
    pytest.param(
        program(
            var("f", fn(["x"], ret(ident("x")))),
            expr_stmt(call("f", num(1), num(2))),
        ),
        error_of("arity mismatch"),
        None,
        id="arity-too-many",
    ),
    pytest.param(
        program(var("f", fn(["x"], expr_stmt(ident("x")))), expr_stmt(call("f", num(1)))),
        error_of("missing return"),
        None,
        id="missing-return",
    ),
    pytest.param(
        program(var("f", fn([])), expr_stmt(call("f"))),
        error_of("missing return"),
        None,
        id="missing-return-empty-body",
    ),
    pytest.param(
        program(expr_stmt(call("nope", num(1)))),
        error_of("unbound identifier"),
        None,
        id="call-unbound",
    ),
    pytest.param(
        program(var("x", num(3)), expr_stmt(call("x"))),
        error_of("not a function"),
        None,
        id="call-number",
    ),
    pytest.param(
        program(expr_stmt(call(num(3)))),
        error_of("not a function"),
        None,
        id="call-literal-callee",
    ),
    pytest.param(
        program(expr_stmt(call(binary("/", num(3), num(0))))),
        error_of("divide by zero"),
        None,
        id="callee-error-propagates",
    ),
    pytest.param(
        program(expr_stmt(call("nope", binary("/", num(1), num(0))))),
        error_of("divide by zero"),
        None,
        id="arguments-before-callee",
    ),
    pytest.param(
        program(
            var("f", fn(["a", "b"], ret(ident("a")))),
            expr_stmt(call("f", ident("missing"), binary("/", num(1), num(0)))),
        ),
        error_of("unbound identifier"),
        None,
        id="first-argument-error-wins",
    ),
    pytest.param(
        program(
            var("f", fn(["x"], ret(binary("+", ident("x"), TRUE)))),
            expr_stmt(call("f", num(1))),
        ),
        error_of("invalid binary type(s)"),
        None,
        id="error-inside-body-returns-to-caller",
    ),
    pytest.param(
        program(
            var("f", fn(["x"], ret(ident("x")))),
            expr_stmt(binary("+", call("f", TRUE), num(1))),
        ),
        error_of("invalid binary type(s)"),
        None,
        id="call-result-used-by-operator",
    ),
    pytest.param(
        program(
            var(
                "f",
                fn(
                    ["x"],
                    var("y", binary("*", ident("x"), num(2))),
                    var("z", binary("+", ident("y"), num(1))),
                    ret(ident("z")),
                ),
            ),
            expr_stmt(call("f", num(20))),
        ),
        value_of("number", 41),
        None,
        id="declarations-in-body",
    ),
    pytest.param(
        program(
            var("f", fn([], var("y", binary("/", num(1), num(0))), ret(num(1)))),
            expr_stmt(call("f")),
        ),
        error_of("divide by zero"),
        None,
        id="declaration-error-aborts-body",
    ),
    pytest.param(
        program(
            var("f", fn([], expr_stmt(ident("undefinedName")), ret(num(1)))),
            expr_stmt(call("f")),
        ),
        error_of("unbound identifier"),
        None,
        id="expression-statement-error-aborts-body",
    ),
    pytest.param(
        program(
            var("f", fn([], expr_stmt(num(5)), ret(num(1)))),
            expr_stmt(call("f")),
        ),
        value_of("number", 1),
        None,
        id="body-expression-values-discarded",
    ),
    pytest.param(
        program(
            var("f", fn([], ret(num(1)), ret(num(2)))),
            expr_stmt(call("f")),
        ),
        value_of("number", 1),
        None,
        id="return-stops-body",
    ),
    pytest.param(
        program(
            var("outer", fn([], var("inner", fn([], ret(num(1)))), expr_stmt(call("inner")), ret(num(2)))),
            expr_stmt(call("outer")),
        ),
        value_of("number", 2),
        None,
        id="inner-return-does-not-escape",
    ),
    pytest.param(
        program(var("f", fn([], ret(fn([], ret(num(1)))))), expr_stmt(call("f"))),
        value_of("function"),
        None,
        id="function-valued-result",
    ),
    pytest.param(
        program(
            var("apply", fn(["g", "v"], ret(call("g", ident("v"))))),
            var("neg", fn(["b"], ret(cond(ident("b"), FALSE, TRUE)))),
            expr_stmt(call("apply", ident("neg"), TRUE)),
        ),
        value_of("boolean", False),
        None,
        id="higher-order-argument",
    ),
    pytest.param(
        program(
            var("f", fn(["x"], ret(assign("x", num(3))))),
            expr_stmt(call("f", num(1))),
        ),
        value_of("void"),
        None,
        id="assignment-result-is-void",
    ),
]


@pytest.mark.parametrize("ast, expectation, expected_exc", SCENARIOS)
def test_functions(ast, expectation, expected_exc) -> None:
    run_runtime_case(ast, expectation, expected_exc)
