"""YAML loading for config files checked into repositories.

Alias references are counted while composing; a document using more than
MAX_ALIASES of them is rejected before it can expand.
"""

from __future__ import annotations

import yaml

MAX_ALIASES = 100


class AliasLimitedLoader(yaml.SafeLoader):
    """SafeLoader that refuses documents with too many alias references."""

    def __init__(self, stream) -> None:
        super().__init__(stream)
        self.aliases_seen = 0

    def compose_node(self, parent, index):
        if self.check_event(yaml.AliasEvent):
            self.aliases_seen += 1
            if self.aliases_seen > MAX_ALIASES:
                raise yaml.YAMLError(f"YAML alias limit exceeded (max {MAX_ALIASES})")
        return super().compose_node(parent, index)


def safe_yaml_load(stream):
    """Parse a single YAML document with AliasLimitedLoader."""
    return yaml.load(stream, Loader=AliasLimitedLoader)
