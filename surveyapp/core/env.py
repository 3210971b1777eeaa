from __future__ import annotations

import os
from pathlib import Path


def load_env(path: Path | None = None) -> None:
    """
    Populate os.environ from dotenv files.

    ``.env`` is read first, then ``.env.local`` next to it. Values exported by
    the shell are never replaced; ``.env.local`` may override ``.env``.
    """
    shell_keys = set(os.environ.keys())

    env_path = path or Path(__file__).resolve().parents[2] / ".env"
    if env_path.exists():
        for key, value in _parse(env_path):
            os.environ.setdefault(key, value)

    if path is None:
        local_path = env_path.parent / ".env.local"
        if local_path.exists():
            for key, value in _parse(local_path):
                if key not in shell_keys:
                    os.environ[key] = value


def _parse(env_path: Path) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            pairs.append((key, _strip_quotes(value.strip())))
    return pairs


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


__all__ = ["load_env"]
