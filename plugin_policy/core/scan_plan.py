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
Decide which checks run against which discovered targets.

Targets come from the crawler as :class:`DiscoveredTarget` descriptors; how
they were found is irrelevant here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .levels import AlertThreshold, AttackStrength
from .plugin import AbstractPlugin
from .technology import TechSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscoveredTarget:
    """A resource found by the crawler."""

    url: str
    source: str = ""
    depth: int = 0


@dataclass(frozen=True)
class PlannedCheck:
    """One plugin to run against one target, with the levels it should use."""

    target: DiscoveredTarget
    plugin: AbstractPlugin
    attack_strength: AttackStrength
    alert_threshold: AlertThreshold


def _runnable_plugins(plugins: Iterable[AbstractPlugin], techs: TechSet | None) -> list[AbstractPlugin]:
    candidates: dict[str, AbstractPlugin] = {}
    for plugin in sorted(plugins):
        if not plugin.is_enabled() or plugin.get_alert_threshold() == AlertThreshold.OFF:
            continue
        if techs is not None and not plugin.targets(techs):
            logger.debug("Skipping plugin %d: no target technology in scope", plugin.get_id())
            continue
        candidates[plugin.get_code_name()] = plugin

    # Drop plugins with a dependency outside the set until nothing changes,
    # so a dependency chain is only kept when every link is runnable.
    changed = True
    while changed:
        changed = False
        for code_name, plugin in list(candidates.items()):
            missing = [dep for dep in plugin.get_dependency() if dep not in candidates]
            if missing:
                logger.info(
                    "Skipping plugin %d (%s): dependencies not runnable: %s",
                    plugin.get_id(),
                    code_name,
                    ", ".join(missing),
                )
                del candidates[code_name]
                changed = True

    return sorted(candidates.values())


def build_scan_plan(
    plugins: Iterable[AbstractPlugin],
    targets: Iterable[DiscoveredTarget],
    techs: TechSet | None = None,
) -> list[PlannedCheck]:
    """Pair every target with every runnable plugin, plugins in identity order.

    A plugin is runnable when it is enabled, its resolved alert threshold is
    not ``OFF``, all of its dependencies are runnable by the same rule, and
    (when *techs* is given) it targets at least one of those techs.
    """
    runnable = _runnable_plugins(plugins, techs)
    plan = [
        PlannedCheck(
            target=target,
            plugin=plugin,
            attack_strength=plugin.get_attack_strength(),
            alert_threshold=plugin.get_alert_threshold(),
        )
        for target in targets
        for plugin in runnable
    ]
    logger.debug("Scan plan: %d check(s) across %d plugin(s)", len(plan), len(runnable))
    return plan
