from __future__ import annotations

import os
from pathlib import Path


def load_env_file(path: str = ".env") -> list[str]:
    """Apply ``KEY=value`` lines from *path* to ``os.environ``.

    Variables that are already set are left alone. Returns the names that
    were actually applied, so the caller can report what the file provided.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return []

    applied: list[str] = []
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        parsed = _parse_line(raw_line)
        if parsed is None:
            continue
        key, value = parsed
        if key in os.environ:
            continue
        os.environ[key] = value
        applied.append(key)
    return applied


def _parse_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    line = line.removeprefix("export ").strip()
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    return key, _unquote(value.strip())


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value
