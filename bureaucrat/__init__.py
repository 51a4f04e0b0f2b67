"""
bureaucrat - Tag commit messages with the issue reference from the branch name.

A git prepare-commit-msg hook driven by a small YAML config.
"""

__version__ = "1.0.0"

from .config import Config, find_config, load_config
from .errors import BureaucratError, ConfigError
from .message import insert_tag, render_tag
from .resolver import Tag, resolve

__all__ = [
    "resolve",
    "Tag",
    "Config",
    "load_config",
    "find_config",
    "insert_tag",
    "render_tag",
    "BureaucratError",
    "ConfigError",
    "__version__",
]
