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
Plugin interfaces for scan checks.

Two levels of capability exist:

* :class:`Plugin` – the narrow interface every check exposes (identity,
  name, detection entry point).  The orchestrator can run it but cannot
  manage its policy.
* :class:`AbstractPlugin` – a plugin carrying full policy state
  (enablement, alert threshold, attack strength, tech scope, status).
  Policy mutations require a bound :class:`PluginConfiguration`.

Concrete checks subclass ``AbstractPlugin`` and implement ``get_id``,
``get_name`` and ``scan``.
"""

from __future__ import annotations

import functools
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from ..config.constants import PluginPolicyConstants
from .configuration import PluginConfiguration
from .exceptions import ConfigurationRequiredError, IncompatibleTargetError
from .levels import AlertThreshold, AttackStrength, Status
from .policy_state import PolicyState
from .technology import ALL_TECHS, Tech, TechSet

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "yes", "1")
_FALSE_VALUES = ("false", "no", "0")


class Plugin(ABC):
    """Narrow interface shared by every scan check."""

    @abstractmethod
    def get_id(self) -> int:
        """Return the plugin's identity.  Constant for the instance's lifetime."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return the human-readable name."""
        pass

    @abstractmethod
    def scan(self, target: Any) -> None:
        """Run the check's detection logic against *target*."""
        pass

    def get_code_name(self) -> str:
        """Return the implementation's class name."""
        return type(self).__name__

    def get_description(self) -> str:
        return ""

    def get_dependency(self) -> list[str]:
        """Code names of plugins that must run (and be enabled) for this one to run."""
        return []

    def get_cwe_id(self) -> int:
        return 0

    def get_wasc_id(self) -> int:
        return 0

    def compare_to(self, other: Plugin) -> int:
        """Order by identity: -1, 0 or 1."""
        if not isinstance(other, Plugin):
            raise TypeError(f"Cannot compare {type(self).__name__} with {type(other).__name__}")
        mine, theirs = self.get_id(), other.get_id()
        if mine < theirs:
            return -1
        if mine > theirs:
            return 1
        return 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Plugin):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Plugin):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Plugin):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Plugin):
            return NotImplemented
        return self.compare_to(other) >= 0


def _requires_config(method):
    """Reject the call with ConfigurationRequiredError unless a configuration is bound."""

    @functools.wraps(method)
    def wrapper(self: AbstractPlugin, *args, **kwargs):
        with self._lock:
            if self._config is None:
                raise ConfigurationRequiredError(
                    f"Plugin {self.get_id()} ({self.get_code_name()}) has no configuration; "
                    f"bind one with set_config() before calling {method.__name__}()"
                )
            return method(self, *args, **kwargs)

    return wrapper


class AbstractPlugin(Plugin):
    """A plugin with full, configuration-gated policy state."""

    def __init__(self) -> None:
        self._state = PolicyState()
        self._config: PluginConfiguration | None = None
        self._lock = threading.RLock()
        self._delay_in_ms = 0
        self._time_started: datetime | None = None
        self._time_finished: datetime | None = None

    # -----------------------------------------------------------------------
    # Identity
    # -----------------------------------------------------------------------

    def get_name(self) -> str:
        return self.get_code_name()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbstractPlugin):
            return False
        return self.get_id() == other.get_id()

    def __hash__(self) -> int:
        return hash((AbstractPlugin, self.get_id()))

    def __repr__(self) -> str:
        return f"{self.get_code_name()}(id={self.get_id()}, enabled={self.is_enabled()})"

    def new_instance(self) -> AbstractPlugin:
        """Create a fresh, unconfigured instance of the same check.

        Subclasses whose constructor takes arguments must override this.
        """
        return type(self)()

    # -----------------------------------------------------------------------
    # Configuration binding
    # -----------------------------------------------------------------------

    def set_config(self, config: PluginConfiguration) -> None:
        if not isinstance(config, PluginConfiguration):
            raise TypeError(f"Expected PluginConfiguration, got {type(config).__name__}")
        with self._lock:
            if config is self._config:
                return
            self._config = config
        logger.debug("Bound configuration to plugin %d", self.get_id())

    def get_config(self) -> PluginConfiguration | None:
        with self._lock:
            return self._config

    # -----------------------------------------------------------------------
    # Policy reads
    # -----------------------------------------------------------------------

    def is_enabled(self) -> bool:
        return self._state.enabled

    def get_attack_strength(self, include_default: bool = False) -> AttackStrength:
        """Return the attack strength.

        Args:
            include_default: If True return the stored value, which may be
                ``DEFAULT``.  Otherwise ``DEFAULT`` is resolved through the
                default override, then the built-in fallback (``MEDIUM``).
        """
        return self._state.resolved_attack_strength(include_default)

    def get_alert_threshold(self, include_default: bool = False) -> AlertThreshold:
        """Return the alert threshold.

        Args:
            include_default: If True return the stored value, or ``OFF`` when
                the plugin is disabled.  Otherwise ``DEFAULT`` is resolved
                like the attack strength.
        """
        return self._state.resolved_alert_threshold(include_default)

    def get_default_attack_strength(self) -> AttackStrength | None:
        return self._state.default_attack_strength

    def get_default_alert_threshold(self) -> AlertThreshold | None:
        return self._state.default_alert_threshold

    def get_attack_strengths_supported(self) -> list[AttackStrength]:
        return [AttackStrength.LOW, AttackStrength.MEDIUM, AttackStrength.HIGH, AttackStrength.INSANE]

    def get_alert_thresholds_supported(self) -> list[AlertThreshold]:
        return [AlertThreshold.LOW, AlertThreshold.MEDIUM, AlertThreshold.HIGH]

    def get_tech_set(self) -> TechSet:
        return self._state.tech_set.copy()

    def in_scope(self, tech: Tech) -> bool:
        return self._state.tech_set.includes(tech)

    def targets(self, techs: TechSet) -> bool:
        """True if any tech in *techs* is also in this plugin's scope."""
        candidates = set(ALL_TECHS) | techs.included_techs()
        return any(techs.includes(t) and self.in_scope(t) for t in candidates)

    def get_status(self) -> Status:
        return self._state.status

    def is_deprecated(self) -> bool:
        return self._state.status == Status.DEPRECATED

    # -----------------------------------------------------------------------
    # Policy writes
    # -----------------------------------------------------------------------

    @_requires_config
    def set_enabled(self, enabled: bool) -> None:
        self._state.enable(bool(enabled))

    @_requires_config
    def set_alert_threshold(self, level: AlertThreshold | str) -> None:
        self._state.store_alert_threshold(AlertThreshold.parse(level))

    @_requires_config
    def set_default_alert_threshold(self, level: AlertThreshold | str) -> None:
        self._state.store_default_alert_threshold(AlertThreshold.parse(level))

    @_requires_config
    def set_attack_strength(self, level: AttackStrength | str) -> None:
        self._state.store_attack_strength(AttackStrength.parse(level))

    @_requires_config
    def set_default_attack_strength(self, level: AttackStrength | str) -> None:
        self._state.store_default_attack_strength(AttackStrength.parse(level))

    @_requires_config
    def set_tech_set(self, tech_set: TechSet) -> None:
        if not isinstance(tech_set, TechSet):
            raise TypeError(f"Expected TechSet, got {type(tech_set).__name__}")
        self._state.tech_set = tech_set.copy()

    @_requires_config
    def set_status(self, status: Status | str) -> None:
        self._state.status = Status.parse(status)

    # -----------------------------------------------------------------------
    # Template propagation
    # -----------------------------------------------------------------------

    def clone_into(self, plugin: Plugin) -> None:
        """Copy this plugin's policy into *plugin*.

        Raises:
            IncompatibleTargetError: If *plugin* is not an ``AbstractPlugin``.
            ConfigurationRequiredError: If *plugin* has no configuration bound.
        """
        if not isinstance(plugin, AbstractPlugin):
            raise IncompatibleTargetError(
                f"Cannot clone policy of plugin {self.get_id()} into {type(plugin).__name__}: "
                "target does not carry policy state"
            )
        target_config = plugin.get_config()
        if target_config is None:
            raise ConfigurationRequiredError(
                f"Cannot clone policy into plugin {plugin.get_id()}: target has no configuration"
            )

        with self._lock:
            snapshot = self._state.snapshot()
        with plugin._lock:
            plugin._state.apply(snapshot)
            plugin.save_to(target_config)
        logger.debug("Cloned policy of plugin %d into %r", self.get_id(), plugin)

    # -----------------------------------------------------------------------
    # Persistence
    # -----------------------------------------------------------------------

    def save_to(self, config: PluginConfiguration) -> None:
        """Write enablement, stored threshold and stored strength into *config*."""
        key = PluginPolicyConstants.plugin_key(self.get_id())
        with self._lock:
            config.set(f"{key}.{PluginPolicyConstants.CONFIG_ENABLED_KEY}", self._state.enabled)
            config.set(f"{key}.{PluginPolicyConstants.CONFIG_LEVEL_KEY}", self._state.alert_threshold.value)
            config.set(f"{key}.{PluginPolicyConstants.CONFIG_STRENGTH_KEY}", self._state.attack_strength.value)

    def load_from(self, config: PluginConfiguration) -> None:
        """Bind *config* and restore this plugin's saved policy from it.

        Fields without a saved entry keep their current values.  A stored
        ``OFF`` threshold always loads as disabled.
        """
        self.set_config(config)
        key = PluginPolicyConstants.plugin_key(self.get_id())
        section = config.get(key)
        if section is None:
            return
        if not isinstance(section, dict):
            logger.warning("Ignoring malformed policy entry '%s' for plugin %d", key, self.get_id())
            return

        with self._lock:
            state = self._state
            enabled = self._parse_enabled(section.get(PluginPolicyConstants.CONFIG_ENABLED_KEY), key, state.enabled)
            level = self._parse_stored(
                AlertThreshold, section.get(PluginPolicyConstants.CONFIG_LEVEL_KEY), key, state.alert_threshold
            )
            strength = self._parse_stored(
                AttackStrength, section.get(PluginPolicyConstants.CONFIG_STRENGTH_KEY), key, state.attack_strength
            )
            state.restore(enabled, level, strength)

    def create_param_if_not_exist(self) -> None:
        """Save the current policy into the bound configuration unless an entry already exists."""
        if self._config is None:
            raise ConfigurationRequiredError(f"Plugin {self.get_id()} has no configuration")
        if not self._config.contains(PluginPolicyConstants.plugin_key(self.get_id())):
            self.save_to(self._config)

    @staticmethod
    def _parse_enabled(raw, key: str, current: bool) -> bool:
        if raw is None:
            return current
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, int) and raw in (0, 1):
            return bool(raw)
        if isinstance(raw, str):
            value = raw.strip().lower()
            if value in _TRUE_VALUES:
                return True
            if value in _FALSE_VALUES:
                return False
        logger.warning("Unknown enabled flag %r under '%s'; keeping %s", raw, key, current)
        return current

    @staticmethod
    def _parse_stored(enum_cls, raw, key, current):
        if raw is None:
            return current
        # YAML 1.1 loads a bare OFF as False
        if raw is False and enum_cls is AlertThreshold:
            return AlertThreshold.OFF
        try:
            return enum_cls.parse(raw)
        except ValueError:
            logger.warning("Unknown %s %r under '%s'; keeping %s", enum_cls.__name__, raw, key, current.value)
            return current

    # -----------------------------------------------------------------------
    # Run metadata
    # -----------------------------------------------------------------------

    def get_delay_in_ms(self) -> int:
        return self._delay_in_ms

    def set_delay_in_ms(self, delay: int) -> None:
        if delay < 0:
            raise ValueError(f"Delay must be >= 0, got {delay}")
        self._delay_in_ms = delay

    def set_time_started(self) -> None:
        self._time_started = datetime.now(timezone.utc)
        self._time_finished = None

    def get_time_started(self) -> datetime | None:
        return self._time_started

    def set_time_finished(self) -> None:
        self._time_finished = datetime.now(timezone.utc)

    def get_time_finished(self) -> datetime | None:
        return self._time_finished
