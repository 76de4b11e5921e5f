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
Registry of master plugins.

The registry holds one *master* instance per check.  Masters carry the
canonical policy (edited from a UI or a policy file) and are never run
directly: before a scan the orchestrator asks for working copies, each a
fresh instance that received the master's policy through ``clone_into``.

Architecture
~~~~~~~~~~~~

.. code-block:: text

    PluginConfiguration ──bind/load──▶ master plugins ──clone_into──▶ working copies
            ▲                               │
            └────────────save()─────────────┘

Iteration is always in identity order.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from ..config.config import Config
from .configuration import PluginConfiguration
from .exceptions import PluginRegistrationError
from .plugin import AbstractPlugin

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Identity-ordered catalog of master plugins sharing one configuration scope."""

    def __init__(self, configuration: PluginConfiguration | None = None, config: Config | None = None) -> None:
        self._config = config or Config()
        self._configuration = configuration or self._config.load_configuration()
        self._plugins: dict[int, AbstractPlugin] = {}
        self._lock = threading.RLock()

    @property
    def configuration(self) -> PluginConfiguration:
        return self._configuration

    # -- Mutation ------------------------------------------------------------

    def register(self, plugin: AbstractPlugin) -> None:
        """Register *plugin* as the master for its id.

        The plugin is bound to the registry's configuration, its saved policy
        is loaded, and ``Config`` default levels are applied.  Re-registering
        an instance of the same class replaces the previous master.

        Raises:
            PluginRegistrationError: If a plugin of a different class already
                uses the same id.
            TypeError: If *plugin* does not carry policy state.
        """
        if not isinstance(plugin, AbstractPlugin):
            raise TypeError(f"Only AbstractPlugin instances can be registered, got {type(plugin).__name__}")

        plugin_id = plugin.get_id()
        with self._lock:
            existing = self._plugins.get(plugin_id)
            if existing is not None and type(existing) is not type(plugin):
                raise PluginRegistrationError(
                    f"Plugin ID collision: {plugin_id} is used by both "
                    f"'{existing.get_code_name()}' and '{plugin.get_code_name()}'"
                )

            plugin.load_from(self._configuration)
            if self._config.default_attack_strength is not None:
                plugin.set_default_attack_strength(self._config.default_attack_strength)
            if self._config.default_alert_threshold is not None:
                plugin.set_default_alert_threshold(self._config.default_alert_threshold)
            if self._config.save_on_register:
                plugin.create_param_if_not_exist()

            self._plugins[plugin_id] = plugin
        logger.debug("Registered plugin %d (%s)", plugin_id, plugin.get_code_name())

    def unregister(self, plugin_id: int) -> AbstractPlugin | None:
        with self._lock:
            return self._plugins.pop(plugin_id, None)

    def save(self) -> None:
        """Write every master's policy back to the configuration scope."""
        with self._lock:
            for plugin in self.all_plugins():
                plugin.save_to(self._configuration)

    # -- Read-only accessors ---------------------------------------------------

    def get(self, plugin_id: int) -> AbstractPlugin | None:
        """Look up a master plugin by id."""
        with self._lock:
            return self._plugins.get(plugin_id)

    def get_by_code_name(self, code_name: str) -> AbstractPlugin | None:
        with self._lock:
            for plugin in self._plugins.values():
                if plugin.get_code_name() == code_name:
                    return plugin
        return None

    def all_plugins(self) -> list[AbstractPlugin]:
        """Return all masters sorted by identity."""
        with self._lock:
            return sorted(self._plugins.values())

    def enabled_plugins(self) -> list[AbstractPlugin]:
        return [p for p in self.all_plugins() if p.is_enabled()]

    def working_copies(self) -> list[AbstractPlugin]:
        """Return fresh instances carrying each master's policy, in identity order.

        Each copy is bound to its own detached scope so per-run changes do
        not leak back into the masters' configuration.
        """
        copies: list[AbstractPlugin] = []
        with self._lock:
            for master in self.all_plugins():
                copy = master.new_instance()
                copy.set_config(PluginConfiguration())
                master.clone_into(copy)
                copies.append(copy)
        logger.info("Prepared %d working plugin instance(s)", len(copies))
        return copies

    def __len__(self) -> int:
        return len(self._plugins)

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._plugins

    def __iter__(self) -> Iterator[AbstractPlugin]:
        return iter(self.all_plugins())
