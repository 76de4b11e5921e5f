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
Configuration class for Plugin Policy.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from ..core.configuration import PluginConfiguration
from ..core.levels import AlertThreshold, AttackStrength
from .constants import PluginPolicyConstants

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    Process-level settings applied by ``PluginRegistry``.

    ``default_attack_strength`` / ``default_alert_threshold`` become each
    registered master's default override; they change how a stored
    ``DEFAULT`` resolves, never the stored value itself.
    """

    default_attack_strength: AttackStrength | None = None
    default_alert_threshold: AlertThreshold | None = None

    # YAML file holding saved plugin policy
    policy_file: Path | None = None

    # Write an entry for newly registered plugins into the configuration
    save_on_register: bool = True

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""

        if self.default_attack_strength is None:
            if env_strength := os.getenv(PluginPolicyConstants.ENV_DEFAULT_STRENGTH):
                self.default_attack_strength = env_strength
        if self.default_alert_threshold is None:
            if env_threshold := os.getenv(PluginPolicyConstants.ENV_DEFAULT_THRESHOLD):
                self.default_alert_threshold = env_threshold

        if self.policy_file is None:
            if env_file := os.getenv(PluginPolicyConstants.ENV_POLICY_FILE):
                self.policy_file = env_file

        if os.getenv(PluginPolicyConstants.ENV_SAVE_ON_REGISTER, "").lower() in ("false", "0"):
            self.save_on_register = False

        # Normalise and validate
        if self.default_attack_strength is not None:
            self.default_attack_strength = AttackStrength.parse(self.default_attack_strength)
            if self.default_attack_strength == AttackStrength.DEFAULT:
                raise ValueError("Default attack strength cannot be DEFAULT")
        if self.default_alert_threshold is not None:
            self.default_alert_threshold = AlertThreshold.parse(self.default_alert_threshold)
            if self.default_alert_threshold in (AlertThreshold.DEFAULT, AlertThreshold.OFF):
                raise ValueError(f"Default alert threshold cannot be {self.default_alert_threshold.value}")
        if self.policy_file is not None:
            self.policy_file = Path(self.policy_file)

    @classmethod
    def from_env(cls) -> Config:
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> Config:
        """
        Load configuration from .env file.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if config_file.exists():
            load_dotenv(config_file, override=True)
        else:
            logger.warning("Config file not found: %s", config_file)

        return cls.from_env()

    def load_configuration(self) -> PluginConfiguration:
        """Return the saved plugin policy scope, or an empty one when no file is configured."""
        if self.policy_file is None:
            return PluginConfiguration()
        return PluginConfiguration.from_yaml(self.policy_file)
