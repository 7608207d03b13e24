"""Dotenv file loading utilities."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict

from .errors import ConfigurationError

_INLINE_COMMENT = re.compile(r"\s+#.*$")


class DotenvLoader:
    """Loads deployment parameters from .env-style files."""

    @staticmethod
    def load_from_file(path: Path) -> Dict[str, str]:
        """
        Load key-value pairs from a .env file.

        Args:
            path: Path to .env file

        Returns:
            Dictionary of deployment parameters (empty when the file is absent)

        Raises:
            ConfigurationError: If file cannot be read
        """
        if not path.exists():
            return {}

        values: Dict[str, str] = {}
        try:
            for line in path.read_text(encoding="utf-8").splitlines():
                stripped = line.strip()
                if DotenvLoader._should_skip_line(stripped):
                    continue

                key, value = DotenvLoader._parse_env_line(stripped)
                if key:
                    values[key] = value

        except (OSError, UnicodeDecodeError) as exc:  # policy_guard: allow-silent-handler
            raise ConfigurationError.load_failed("deployment parameters", str(path)) from exc

        return values

    @staticmethod
    def _should_skip_line(line: str) -> bool:
        """Check if line should be skipped."""
        return not line or line.startswith("#") or "=" not in line

    @staticmethod
    def _parse_env_line(line: str) -> tuple[str, str]:
        """
        Parse a single env line into key and value.

        ``KEY = value``, ``export KEY=value``, quoted values and trailing
        `` # comments`` after unquoted values are accepted.

        Args:
            line: Line from .env file

        Returns:
            Tuple of (key, value)
        """
        key, raw_value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export ") :].strip()
        value = raw_value.strip()
        if value[:1] in ("'", '"'):
            closing = value.find(value[0], 1)
            if closing != -1:
                return key, value[1:closing]
            return key, value
        return key, _INLINE_COMMENT.sub("", value)


__all__ = ["DotenvLoader"]
