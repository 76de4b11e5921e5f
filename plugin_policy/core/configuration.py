# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""
Configuration scope that plugins bind to.

A ``PluginConfiguration`` is a hierarchical key/value store addressed by
dotted keys.  For the policy core its *presence* is what matters: a plugin
refuses every policy mutation until one is bound.  Registries also use it to
persist policy between sessions.

Usage
-----
    from plugin_policy.core.configuration import PluginConfiguration

    config = PluginConfiguration.from_yaml("scan_policy.yaml")
    config.get("plugins.p40012.level")          # "HIGH"
    config.set("plugins.p40012.enabled", False)
    config.to_yaml("scan_policy.yaml")
"""

from __future__ import annotations

import copy
import logging
import threading
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_MISSING = object()


class PluginConfiguration:
    """Hierarchical, dotted-key configuration scope."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(data) if data else {}
        self._lock = threading.RLock()

    # -- Read --------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at dotted *key*, or *default* if absent."""
        with self._lock:
            node: Any = self._data
            for part in self._split(key):
                if not isinstance(node, dict) or part not in node:
                    return default
                node = node[part]
            return copy.deepcopy(node)

    def contains(self, key: str) -> bool:
        """Return True if *key* is present (as a value or a section)."""
        return self.get(key, _MISSING) is not _MISSING

    def subset(self, prefix: str) -> PluginConfiguration:
        """Return a detached copy of the section under *prefix*."""
        section = self.get(prefix, {})
        if not isinstance(section, dict):
            raise ValueError(f"Configuration key '{prefix}' is a value, not a section")
        return PluginConfiguration(section)

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the whole tree."""
        with self._lock:
            return copy.deepcopy(self._data)

    # -- Write -------------------------------------------------------------

    def set(self, key: str, value: Any) -> None:
        """Store *value* at dotted *key*, creating intermediate sections."""
        parts = self._split(key)
        with self._lock:
            node = self._data
            for part in parts[:-1]:
                child = node.get(part)
                if not isinstance(child, dict):
                    if child is not None:
                        logger.warning("Replacing value at '%s' with a section to store '%s'", part, key)
                    child = {}
                    node[part] = child
                node = child
            node[parts[-1]] = value

    def remove(self, key: str) -> bool:
        """Delete *key*.  Returns True if something was removed."""
        parts = self._split(key)
        with self._lock:
            node: Any = self._data
            for part in parts[:-1]:
                if not isinstance(node, dict) or part not in node:
                    return False
                node = node[part]
            if isinstance(node, dict) and parts[-1] in node:
                del node[parts[-1]]
                return True
            return False

    def merge(self, other: dict[str, Any]) -> None:
        """Deep-merge *other* on top of this scope.  Nested dicts merge, everything else replaces."""
        with self._lock:
            self._data = self._deep_merge(self._data, other)

    # -- YAML --------------------------------------------------------------

    @classmethod
    def from_yaml(cls, path: str | Path) -> PluginConfiguration:
        """Load a configuration scope from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Configuration file must contain a mapping at top level: {path}")

        logger.debug("Loaded plugin configuration from %s", path)
        return cls(raw)

    def to_yaml(self, path: str | Path) -> None:
        """Dump the scope to a YAML file."""
        with open(path, "w", encoding="utf-8") as fh:
            fh.write("# Plugin Policy – scan policy configuration\n\n")
            yaml.dump(self.to_dict(), fh, default_flow_style=False, sort_keys=True, width=120)

    # -- Internal ----------------------------------------------------------

    @staticmethod
    def _split(key: str) -> list[str]:
        parts = [p for p in str(key).split(".") if p]
        if not parts:
            raise ValueError(f"Invalid configuration key: {key!r}")
        return parts

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        result = copy.deepcopy(base)
        for key, val in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(val, dict):
                result[key] = PluginConfiguration._deep_merge(result[key], val)
            else:
                result[key] = copy.deepcopy(val)
        return result

    def __repr__(self) -> str:
        return f"PluginConfiguration(keys={sorted(self._data)})"
