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
Per-plugin policy state and its transition rules.

Enablement and alert threshold are coupled:

* storing ``OFF`` as the threshold disables the plugin,
* storing any other threshold enables it,
* enabling a plugin whose stored threshold is ``OFF`` resets it to ``DEFAULT``,
* a disabled plugin reports ``OFF`` as its raw threshold.

Attack strength has no coupling.  Both levels resolve a stored ``DEFAULT``
through the default override first and the built-in fallback second.

``PolicyState`` knows nothing about configuration binding; the owning plugin
gates mutations before calling in here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..config.constants import PluginPolicyConstants
from .levels import AlertThreshold, AttackStrength, Status
from .technology import TechSet

logger = logging.getLogger(__name__)

FALLBACK_ATTACK_STRENGTH = AttackStrength.parse(PluginPolicyConstants.FALLBACK_ATTACK_STRENGTH)
FALLBACK_ALERT_THRESHOLD = AlertThreshold.parse(PluginPolicyConstants.FALLBACK_ALERT_THRESHOLD)


@dataclass(frozen=True)
class PolicySnapshot:
    """An immutable copy of every clonable policy field."""

    enabled: bool
    alert_threshold: AlertThreshold
    default_alert_threshold: AlertThreshold | None
    attack_strength: AttackStrength
    default_attack_strength: AttackStrength | None
    tech_set: TechSet
    status: Status


@dataclass
class PolicyState:
    """Mutable policy fields for one plugin instance."""

    enabled: bool = True
    alert_threshold: AlertThreshold = AlertThreshold.DEFAULT
    default_alert_threshold: AlertThreshold | None = None
    attack_strength: AttackStrength = AttackStrength.DEFAULT
    default_attack_strength: AttackStrength | None = None
    tech_set: TechSet = field(default_factory=TechSet.all)
    status: Status = Status.UNKNOWN

    # -- Reads --------------------------------------------------------------

    def resolved_attack_strength(self, include_default: bool = False) -> AttackStrength:
        if include_default or self.attack_strength != AttackStrength.DEFAULT:
            return self.attack_strength
        return self.default_attack_strength or FALLBACK_ATTACK_STRENGTH

    def resolved_alert_threshold(self, include_default: bool = False) -> AlertThreshold:
        if include_default:
            if not self.enabled:
                return AlertThreshold.OFF
            return self.alert_threshold
        if self.alert_threshold != AlertThreshold.DEFAULT:
            return self.alert_threshold
        return self.default_alert_threshold or FALLBACK_ALERT_THRESHOLD

    # -- Transitions --------------------------------------------------------

    def enable(self, enabled: bool) -> None:
        self.enabled = enabled
        if enabled and self.alert_threshold == AlertThreshold.OFF:
            logger.debug("Enabled with threshold OFF; resetting threshold to DEFAULT")
            self.alert_threshold = AlertThreshold.DEFAULT

    def store_alert_threshold(self, level: AlertThreshold) -> None:
        self.alert_threshold = level
        if level == AlertThreshold.OFF:
            if self.enabled:
                logger.debug("Threshold set to OFF; disabling")
            self.enabled = False
        elif not self.enabled:
            logger.debug("Threshold set to %s; re-enabling", level.value)
            self.enabled = True

    def store_default_alert_threshold(self, level: AlertThreshold) -> None:
        if level in (AlertThreshold.DEFAULT, AlertThreshold.OFF):
            raise ValueError(f"Default alert threshold cannot be {level.value}")
        self.default_alert_threshold = level

    def store_attack_strength(self, level: AttackStrength) -> None:
        self.attack_strength = level

    def store_default_attack_strength(self, level: AttackStrength) -> None:
        if level == AttackStrength.DEFAULT:
            raise ValueError("Default attack strength cannot be DEFAULT")
        self.default_attack_strength = level

    # -- Bulk copy ----------------------------------------------------------

    def snapshot(self) -> PolicySnapshot:
        return PolicySnapshot(
            enabled=self.enabled,
            alert_threshold=self.alert_threshold,
            default_alert_threshold=self.default_alert_threshold,
            attack_strength=self.attack_strength,
            default_attack_strength=self.default_attack_strength,
            tech_set=self.tech_set.copy(),
            status=self.status,
        )

    def apply(self, snap: PolicySnapshot) -> None:
        """Overwrite every field with *snap*, bypassing the coupling rules.

        The snapshot came from a consistent state, so copying raw values
        keeps the invariants and reproduces both read views exactly.
        """
        self.enabled = snap.enabled
        self.alert_threshold = snap.alert_threshold
        self.default_alert_threshold = snap.default_alert_threshold
        self.attack_strength = snap.attack_strength
        self.default_attack_strength = snap.default_attack_strength
        self.tech_set = snap.tech_set.copy()
        self.status = snap.status

    def restore(self, enabled: bool, alert_threshold: AlertThreshold, attack_strength: AttackStrength) -> None:
        """Load persisted values.  A stored ``OFF`` wins over ``enabled: true``."""
        self.enabled = enabled
        self.alert_threshold = alert_threshold
        self.attack_strength = attack_strength
        if alert_threshold == AlertThreshold.OFF and enabled:
            logger.debug("Persisted threshold OFF with enabled=true; loading as disabled")
            self.enabled = False
