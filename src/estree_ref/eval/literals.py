from __future__ import annotations

import re

from ..runtime import EsBool, EsError, EsNumber, EsValue, Frame
from ..tree import Identifier, Literal
from ..types import NOT_A_WHOLE_NUMBER, UNBOUND_IDENTIFIER

_WHOLE_NUMBER = re.compile(r"[+-]?[0-9]+")

def eval_identifier(n: Identifier, frame: Frame) -> EsValue:
    val = frame.lookup(n.name)

    if val is None:
        return EsError(UNBOUND_IDENTIFIER)

    return val

def eval_literal(n: Literal) -> EsValue:
    raw = n.raw

    if raw == "true":
        return EsBool(True)
    if raw == "false":
        return EsBool(False)
    if _WHOLE_NUMBER.fullmatch(raw):
        return EsNumber(int(raw))

    return EsError(NOT_A_WHOLE_NUMBER)
