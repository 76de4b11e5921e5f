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
Level vocabularies for plugin policy.

``DEFAULT`` is a sentinel meaning "use the default override, or the built-in
fallback".  It is a valid *stored* value but never a *resolved* one.
"""

from __future__ import annotations

from enum import Enum


class _LevelEnum(str, Enum):
    """Shared parsing for the level enums."""

    @classmethod
    def parse(cls, value):
        """Coerce *value* (member or case-insensitive name) to a member.

        Raises:
            ValueError: If *value* does not name a member of this enum.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        valid = ", ".join(m.name for m in cls)
        raise ValueError(f"Invalid {cls.__name__} {value!r}. Expected one of: {valid}")


class AttackStrength(_LevelEnum):
    """How aggressively a check probes a target."""

    DEFAULT = "DEFAULT"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    INSANE = "INSANE"


class AlertThreshold(_LevelEnum):
    """Minimum confidence a check needs before it reports. ``OFF`` suppresses the check."""

    DEFAULT = "DEFAULT"
    OFF = "OFF"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Status(_LevelEnum):
    """Maturity of a check implementation."""

    UNKNOWN = "UNKNOWN"
    ALPHA = "ALPHA"
    BETA = "BETA"
    RELEASE = "RELEASE"
    EXAMPLE = "EXAMPLE"
    DEPRECATED = "DEPRECATED"
