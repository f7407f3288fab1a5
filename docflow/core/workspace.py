from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv(override=False)


def _project_root() -> Path:
    env = os.getenv("DOCFLOW_ROOT")
    if env:
        return Path(env)
    # In source layout, this file is under <root>/docflow/core
    return Path(__file__).resolve().parents[2]


def _work_dir() -> Path:
    env = os.getenv("DOCFLOW_WORK_DIR")
    if env:
        return Path(env).expanduser()
    return _project_root() / "docflow" / "work"


def _config_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "config"


def resolve_config_path(path: str | Path, *, relative_to: Path | None = None) -> Path:
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return (relative_to or _config_dir()) / p
