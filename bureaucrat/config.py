"""
bureaucrat configuration: discovery, YAML loading and validation.

A configuration file lives at the repository root under one of
CONFIG_FILENAMES (first found wins) and looks like:

    codes:
      - GH
      - JIRA
    branch_prefixes:
      - feature
      - bugfix

Both keys are optional. Without codes only CVE identifiers are tagged;
without branch_prefixes every branch is eligible.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import ConfigError
from .utils import truncate_path
from .yaml_safety import safe_yaml_load

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (
    ".bureaucrat-config.yaml",
    ".bureaucrat-config.yml",
    ".bureaucrat.yaml",
    ".bureaucrat.yml",
)

KNOWN_KEYS = ("codes", "branch_prefixes")

# YAML bomb protection
MAX_CONFIG_SIZE = 1_000_000


@dataclass(frozen=True)
class Config:
    """Immutable configuration for one hook invocation."""

    codes: tuple[str, ...] = ()
    branch_prefixes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Codes compare case-insensitively and are stored upper case, deduplicated.
        seen: set[str] = set()
        codes: list[str] = []
        for code in self.codes:
            canonical = code.upper()
            if canonical not in seen:
                seen.add(canonical)
                codes.append(canonical)
        object.__setattr__(self, "codes", tuple(codes))
        object.__setattr__(self, "branch_prefixes", tuple(self.branch_prefixes))


def find_config(root: Path | str) -> Path | None:
    """Find a bureaucrat config file in the repository root."""
    root = Path(root)
    for filename in CONFIG_FILENAMES:
        path = root / filename
        if path.is_file():
            logger.debug("Configuration file found at %s", truncate_path(path))
            return path
    return None


def _string_list(path: Path, key: str, value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigError(path, f"'{key}' must be a list of strings")
    items = []
    for item in value:
        # Bare numbers in YAML are a common slip; reject rather than coerce.
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(path, f"'{key}' entries must be non-empty strings, got {item!r}")
        items.append(item.strip())
    return tuple(items)


def parse_config(data: object, path: Path | str = "<config>") -> Config:
    """Validate an already-parsed YAML document and build a Config."""
    path = Path(path)
    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(path, "top level must be a mapping")

    unknown = sorted(str(key) for key in data if key not in KNOWN_KEYS)
    if unknown:
        raise ConfigError(path, f"unknown keys: {', '.join(unknown)}")

    return Config(
        codes=_string_list(path, "codes", data.get("codes")),
        branch_prefixes=_string_list(path, "branch_prefixes", data.get("branch_prefixes")),
    )


def load_config(path: Path | str) -> Config:
    """Load and validate a bureaucrat configuration file.

    Raises:
        ConfigError: file unreadable, too large, invalid YAML or invalid shape.
    """
    path = Path(path)
    try:
        if path.stat().st_size > MAX_CONFIG_SIZE:
            raise ConfigError(path, "file too large (max 1MB)")
        with open(path, encoding="utf-8") as f:
            data = safe_yaml_load(f)
    except OSError as e:
        raise ConfigError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise ConfigError(path, "file is not valid UTF-8") from e
    except yaml.YAMLError as e:
        raise ConfigError(path, f"invalid YAML: {e}") from e

    return parse_config(data, path)
