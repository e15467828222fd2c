from __future__ import annotations

import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Iterator, List

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

for entry in (BASE_DIR, SRC_DIR):
    if str(entry) not in sys.path:
        sys.path.append(str(entry))

_ESTREE_ENV = ("ESTREE_MAX_DEPTH", "ESTREE_DEBUG_PY_TRACE", "ESTREE_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_estree_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's shell settings out of the results."""
    for name in _ESTREE_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level

    yield

    root.handlers[:] = handlers
    root.setLevel(level)


def pytest_collection_modifyitems(
    session: pytest.Session,
    config: pytest.Config,
    items: List[pytest.Item],
) -> None:
    """Scenario ids double as node ids; a repeated id would hide a case."""
    del session, config

    counts = Counter(item.nodeid for item in items)
    duplicates = sorted(nodeid for nodeid, n in counts.items() if n > 1)

    if duplicates:
        lines = "\n".join(f"- {nodeid}" for nodeid in duplicates)
        raise pytest.UsageError(f"Duplicate scenario ids:\n{lines}")
