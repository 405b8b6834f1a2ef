from __future__ import annotations

import os
import tomllib
from importlib import metadata
from pathlib import Path


_DIST_NAME = "activity-reports"
_UNKNOWN_VERSION = "0+unknown"
_VERSION_FILE = Path(__file__).with_name("app_version.txt")
_PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def _read_version_from_file(path: Path) -> str | None:
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return raw or None


def _project_version() -> str | None:
    """Version declared in pyproject: installed metadata first, then the source tree."""
    try:
        return metadata.version(_DIST_NAME)
    except metadata.PackageNotFoundError:
        pass
    try:
        with _PYPROJECT.open("rb") as fh:
            raw = tomllib.load(fh)["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return None
    return str(raw).strip() or None


def get_app_version() -> str:
    env_override = (os.getenv("ACTIVITY_REPORTS_APP_VERSION") or "").strip()
    if env_override:
        return env_override

    file_version = _read_version_from_file(_VERSION_FILE)
    if file_version:
        return file_version

    return _project_version() or _UNKNOWN_VERSION


__all__ = ["get_app_version"]
