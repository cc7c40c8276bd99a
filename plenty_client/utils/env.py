from __future__ import annotations

import os
from pathlib import Path

QUOTES = ('"', "'")


def load_env_file_if_present(path: str | Path = ".env", override: bool = False) -> dict[str, str]:
    """Copy ``KEY=VALUE`` settings from a .env file into ``os.environ``.

    Variables already present in the environment are kept unless ``override``
    is set. A missing file is not an error. Returns every pair the file
    defines, whether or not it was applied.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return {}

    pairs = dict(
        pair
        for pair in map(_parse_line, env_path.read_text(encoding="utf-8").splitlines())
        if pair is not None
    )
    for key, value in pairs.items():
        if override or key not in os.environ:
            os.environ[key] = value
    return pairs


def _parse_line(line: str) -> tuple[str, str] | None:
    """Split one .env line; comments, blanks and lines without ``=`` give None."""
    text = line.strip()
    if text.startswith("export "):
        text = text[len("export ") :].lstrip()
    if not text or text.startswith("#"):
        return None
    key, sep, value = text.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    return key, _unquote(value.strip())


def _unquote(value: str) -> str:
    # only a matching pair of quotes around the whole value is removed
    if len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def env_value(name: str, prefix: str = "") -> str | None:
    """Return a stripped environment value, treating empty strings as unset."""
    value = os.getenv(f"{prefix}{name}", "").strip()
    return value or None
