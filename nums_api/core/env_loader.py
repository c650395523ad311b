"""Minimal .env support so the API can run outside of Docker."""

from __future__ import annotations

import os
from pathlib import Path

ENV_FILE_VARIABLE = "NUMS_ENV_FILE"


def _strip_quotes(raw: str) -> str:
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in {"'", '"'}:
        return raw[1:-1]
    # unquoted values may carry a trailing "# comment"
    return raw.split(" #", 1)[0].rstrip()


def parse_env_line(line: str) -> tuple[str, str] | None:
    """Split one ``KEY=value`` line, ignoring blanks and comments."""

    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    stripped = stripped.removeprefix("export ").lstrip()
    key, sep, value = stripped.partition("=")
    if not sep or not key.strip():
        return None
    return key.strip(), _strip_quotes(value.strip())


def default_env_path() -> Path:
    override = os.getenv(ENV_FILE_VARIABLE)
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[2] / ".env"


def load_env_file(path: Path | None = None) -> int:
    """Copy values from the .env file into os.environ without overriding.

    Returns the number of variables that were newly set.
    """

    env_path = path or default_env_path()
    if not env_path.is_file():
        return 0

    loaded = 0
    for line in env_path.read_text(encoding="utf-8").splitlines():
        parsed = parse_env_line(line)
        if parsed is None:
            continue
        key, value = parsed
        if key not in os.environ:
            os.environ[key] = value
            loaded += 1
    return loaded


__all__ = ["load_env_file", "parse_env_line"]
