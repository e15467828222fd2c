from __future__ import annotations

import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Any, List, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .eval.common import render_result
from .evaluator import eval_program, recursion_headroom, resolve_max_depth
from .runtime import EstreeDepthError, EstreeInputError, EstreeRuntimeError
from .tree import load_program
from .types import MAX_DEPTH_CEILING
from .utils import debug_py_trace_enabled, log_level_from_env, parse_max_depth

logger = logging.getLogger(__name__)

def decode_input(data: Union[str, bytes]) -> str:
    if isinstance(data, str):
        return data

    # undecodable bytes become U+FFFD and get skipped as leading garbage
    return data.decode("utf-8", errors="replace")

def load_json_tolerant(text: str) -> Any:
    """
    Decode the JSON document in `text`, discarding leading garbage.
    Tries each '{' in turn until the rest of the input parses as a whole.
    """
    start = text.find("{")

    while start != -1:
        try:
            doc = json.loads(text[start:])
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue

        if start:
            logger.debug("Discarded %d leading characters before the JSON document", start)
        return doc

    raise EstreeInputError("No JSON program found in input")

def run(src: Union[str, bytes], max_depth: Optional[int]=None) -> str:
    """Evaluate one AST document and return its single result line.

    Decoding, loading and evaluation all share one depth budget; input nested
    deeper than the recursion limit allows is an EstreeDepthError.
    """
    limit = resolve_max_depth(max_depth)

    with recursion_headroom(limit):
        try:
            data = load_json_tolerant(decode_input(src))
            program = load_program(data)
        except RecursionError:
            logger.debug("Input nesting exhausted the recursion limit while loading")
            raise EstreeDepthError(limit) from None

        result = eval_program(program, max_depth=limit)

    return render_result(result)

def _load_source(arg: Optional[str]) -> Union[str, bytes]:
    """
    Resolve CLI input into AST text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as the JSON document itself.
    """

    if arg is None or arg == "-":
        data = sys.stdin.buffer.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    if arg.lstrip().startswith("{"):
        return arg

    candidate = Path(arg)
    try:
        if candidate.is_file():
            return candidate.read_bytes()
    except OSError as exc:
        logger.debug("Not reading %r as a file: %s", arg[:40], exc)

    return arg

def configure_logging(verbose: bool=False) -> None:
    level = logging.DEBUG if verbose else log_level_from_env()

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
        force=True,
    )

def main(argv: Optional[List[str]]=None) -> None:
    max_depth: Optional[int] = None
    verbose = False
    py_trace = debug_py_trace_enabled()
    arg = None
    it = iter(sys.argv[1:] if argv is None else argv)

    for token in it:
        if token in ("-v", "--verbose"):
            verbose = True
            continue

        if token == "--py-trace":
            py_trace = True
            continue

        if token.startswith("--max-depth="):
            max_depth = _parse_depth_flag(token.split("=", 1)[1])
            continue

        if token == "--max-depth":
            try:
                max_depth = _parse_depth_flag(next(it))
            except StopIteration:
                raise SystemExit("--max-depth flag requires a value") from None
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    configure_logging(verbose)
    source = _load_source(arg or "-")

    try:
        line = run(source, max_depth=max_depth)
    except EstreeRuntimeError as exc:
        if py_trace:
            traceback.print_exc()
        print(f"estree-ref: {exc}", file=sys.stderr)
        raise SystemExit(1) from None

    print(line)

def _parse_depth_flag(raw: str) -> int:
    value = parse_max_depth(raw)

    if value is None:
        raise SystemExit(f"--max-depth expects an integer from 1 to {MAX_DEPTH_CEILING}, got {raw!r}")

    return value

if __name__ == "__main__":
    main()
