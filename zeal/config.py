from __future__ import annotations
import os
import sys
from contextlib import contextmanager
from typing import Iterator


# Defaults
_DEFAULT_TAB_WIDTH = 4
_DEFAULT_RECURSION_LIMIT = 10_000
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_REPL_HOST = "127.0.0.1"
_DEFAULT_REPL_PORT = 8765


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_tab_width() -> int:
    return int_from_env('ZEAL_TAB_WIDTH', _DEFAULT_TAB_WIDTH)


def get_recursion_limit() -> int:
    return int_from_env('ZEAL_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)


def get_log_level() -> str:
    return os.environ.get('ZEAL_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()


def get_repl_address() -> tuple[str, int]:
    host = os.environ.get('ZEAL_REPL_HOST') or _DEFAULT_REPL_HOST
    return host, int_from_env('ZEAL_REPL_PORT', _DEFAULT_REPL_PORT)


@contextmanager
def recursion_limit(limit: int | None = None) -> Iterator[None]:
    """Raise Python's recursion limit to `limit` (ZEAL_RECURSION_LIMIT by default) for the block."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous, limit or get_recursion_limit()))
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
