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
Plugin Policy - enablement, strength and threshold policy for scan checks.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("plugin-policy")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

__author__ = "Cisco Systems, Inc."


def __getattr__(name: str):
    """Lazy-load public API symbols on first access."""
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "PluginPolicyConstants": (".config.constants", "PluginPolicyConstants"),
        "AlertThreshold": (".core.levels", "AlertThreshold"),
        "AttackStrength": (".core.levels", "AttackStrength"),
        "Status": (".core.levels", "Status"),
        "PluginConfiguration": (".core.configuration", "PluginConfiguration"),
        "Plugin": (".core.plugin", "Plugin"),
        "AbstractPlugin": (".core.plugin", "AbstractPlugin"),
        "PluginRegistry": (".core.plugin_registry", "PluginRegistry"),
        "Tech": (".core.technology", "Tech"),
        "TechSet": (".core.technology", "TechSet"),
        "DiscoveredTarget": (".core.scan_plan", "DiscoveredTarget"),
        "PlannedCheck": (".core.scan_plan", "PlannedCheck"),
        "build_scan_plan": (".core.scan_plan", "build_scan_plan"),
        "PluginPolicyError": (".core.exceptions", "PluginPolicyError"),
        "ConfigurationRequiredError": (".core.exceptions", "ConfigurationRequiredError"),
        "IncompatibleTargetError": (".core.exceptions", "IncompatibleTargetError"),
        "PluginRegistrationError": (".core.exceptions", "PluginRegistrationError"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AbstractPlugin",
    "AlertThreshold",
    "AttackStrength",
    "Config",
    "ConfigurationRequiredError",
    "DiscoveredTarget",
    "IncompatibleTargetError",
    "PlannedCheck",
    "Plugin",
    "PluginConfiguration",
    "PluginPolicyConstants",
    "PluginPolicyError",
    "PluginRegistrationError",
    "PluginRegistry",
    "Status",
    "Tech",
    "TechSet",
    "build_scan_plan",
]
