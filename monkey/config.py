from __future__ import annotations
import logging
import os


# Defaults
_DEFAULT_MAX_CALL_DEPTH = 100
_DEFAULT_PROMPT = "→ "
_DEFAULT_LOG_LEVEL = "WARNING"


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def get_max_call_depth() -> int:
    return int_from_env('MONKEY_MAX_CALL_DEPTH', _DEFAULT_MAX_CALL_DEPTH)


def get_prompt() -> str:
    return os.environ.get('MONKEY_PROMPT', _DEFAULT_PROMPT)


def get_log_level() -> int:
    name = os.environ.get('MONKEY_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.WARNING
