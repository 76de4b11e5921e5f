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

"""Plugin Policy exceptions.

All exceptions inherit from PluginPolicyError for easy catching.

Example:
    >>> from plugin_policy.core.exceptions import ConfigurationRequiredError
    >>>
    >>> try:
    ...     plugin.set_enabled(False)
    ... except ConfigurationRequiredError:
    ...     plugin.set_config(PluginConfiguration())
    ...     plugin.set_enabled(False)
"""


class PluginPolicyError(Exception):
    """Base exception for all Plugin Policy errors."""

    pass


class ConfigurationRequiredError(PluginPolicyError):
    """Raised when policy state is mutated on a plugin with no configuration bound.

    Recoverable: bind a configuration with ``set_config`` and retry.
    Reads never raise this.
    """

    pass


class IncompatibleTargetError(PluginPolicyError):
    """Raised when policy is cloned into a plugin that cannot hold it.

    The target only implements the narrow ``Plugin`` interface and not the
    full policy state of ``AbstractPlugin``.
    """

    pass


class PluginRegistrationError(PluginPolicyError):
    """Raised when a plugin id collides with a different registered plugin."""

    pass
