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
Constants for Plugin Policy.
"""

from pathlib import Path


class PluginPolicyConstants:
    """Constants shared by the policy core, the registry and the config layer."""

    # Project paths
    PACKAGE_ROOT = Path(__file__).parent.parent
    DATA_DIR = PACKAGE_ROOT / "data"
    EXAMPLE_POLICY_FILE = DATA_DIR / "example_policy.yaml"

    # Configuration scope layout: plugins.p<id>.<field>
    CONFIG_PLUGINS_KEY = "plugins"
    CONFIG_PLUGIN_PREFIX = "p"
    CONFIG_ENABLED_KEY = "enabled"
    CONFIG_LEVEL_KEY = "level"
    CONFIG_STRENGTH_KEY = "strength"

    # Built-in fallbacks used when a stored level is DEFAULT and no
    # default override has been set.
    FALLBACK_ATTACK_STRENGTH = "MEDIUM"
    FALLBACK_ALERT_THRESHOLD = "MEDIUM"

    # Environment variables read by Config
    ENV_DEFAULT_STRENGTH = "PLUGIN_POLICY_DEFAULT_STRENGTH"
    ENV_DEFAULT_THRESHOLD = "PLUGIN_POLICY_DEFAULT_THRESHOLD"
    ENV_POLICY_FILE = "PLUGIN_POLICY_FILE"
    ENV_SAVE_ON_REGISTER = "PLUGIN_POLICY_SAVE_ON_REGISTER"

    @classmethod
    def plugin_key(cls, plugin_id: int) -> str:
        """Return the configuration key under which a plugin's policy lives."""
        return f"{cls.CONFIG_PLUGINS_KEY}.{cls.CONFIG_PLUGIN_PREFIX}{plugin_id}"

    @classmethod
    def get_data_path(cls) -> Path:
        """Get path to data directory."""
        return cls.DATA_DIR
