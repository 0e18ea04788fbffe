"""Settings lookup across process environment variables and .env files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, Optional

from dotenv import dotenv_values

from .errors import ConfigurationError

DOTENV_CANDIDATES = (Path(".env"), Path.home() / ".env")

_ENABLED = frozenset({"1", "true", "yes", "on"})
_DISABLED = frozenset({"0", "false", "no", "off"})


def _read_dotenv_files(paths: Iterable[Path]) -> Dict[str, str]:
    merged: Dict[str, str] = {}
    for path in paths:
        for key, value in dotenv_values(path).items():
            if value is not None:
                merged.setdefault(key, value)
    return merged


class Environment:
    """
    One snapshot of the notifier's settings sources.

    A process variable wins over any file; among files the earlier path wins.
    Blank values count as unset everywhere.
    """

    def __init__(self, dotenv_paths: Optional[Iterable[Path]] = None) -> None:
        paths = DOTENV_CANDIDATES if dotenv_paths is None else tuple(dotenv_paths)
        self._file_values = _read_dotenv_files(paths)

    def get(self, name: str) -> Optional[str]:
        value = os.environ.get(name, "").strip()
        if value:
            return value
        value = self._file_values.get(name, "").strip()
        return value or None

    def require(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise ConfigurationError.missing_value(name, "set it in the environment or a .env file")
        return value

    def flag(self, name: str, default: bool) -> bool:
        raw = self.get(name)
        if raw is None:
            return default
        lowered = raw.lower()
        if lowered in _ENABLED:
            return True
        if lowered in _DISABLED:
            return False
        raise ConfigurationError.invalid_value(name, raw, f"Expected one of {sorted(_ENABLED | _DISABLED)}")

    def number(self, name: str, default: float) -> float:
        raw = self.get(name)
        if raw is None:
            return default
        try:
            return float(raw)
        except ValueError as exc:
            raise ConfigurationError.invalid_value(name, raw, "Expected a number") from exc


__all__ = ["DOTENV_CANDIDATES", "Environment"]
