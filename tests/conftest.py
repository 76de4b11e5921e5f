# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from plugin_policy.config.constants import PluginPolicyConstants
from plugin_policy.core.configuration import PluginConfiguration
from plugin_policy.core.plugin import AbstractPlugin, Plugin

# ---------------------------------------------------------------------------
# Sample plugins
# ---------------------------------------------------------------------------


class SamplePlugin(AbstractPlugin):
    """Minimal policy-bearing check with an injectable id."""

    def __init__(self, plugin_id: int = 0, dependencies: list[str] | None = None):
        super().__init__()
        self._plugin_id = plugin_id
        self._dependencies = dependencies or []
        self.scanned: list = []

    def get_id(self) -> int:
        return self._plugin_id

    def get_dependency(self) -> list[str]:
        return list(self._dependencies)

    def scan(self, target) -> None:
        self.scanned.append(target)

    def new_instance(self) -> SamplePlugin:
        return type(self)(self._plugin_id, self._dependencies)


class OtherSamplePlugin(SamplePlugin):
    """A second check type, used for id-collision tests."""


class ThirdSamplePlugin(SamplePlugin):
    """A third check type, used for dependency chains."""


class NarrowPlugin(Plugin):
    """A check exposing only the narrow Plugin interface."""

    def __init__(self, plugin_id: int = 0):
        self._plugin_id = plugin_id

    def get_id(self) -> int:
        return self._plugin_id

    def get_name(self) -> str:
        return "Narrow"

    def scan(self, target) -> None:
        pass


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

_POLICY_ENV_VARS = (
    PluginPolicyConstants.ENV_DEFAULT_STRENGTH,
    PluginPolicyConstants.ENV_DEFAULT_THRESHOLD,
    PluginPolicyConstants.ENV_POLICY_FILE,
    PluginPolicyConstants.ENV_SAVE_ON_REGISTER,
)


@pytest.fixture(autouse=True)
def clean_policy_env():
    """Keep PLUGIN_POLICY_* variables from the developer's shell out of the tests."""
    env = {k: v for k, v in os.environ.items() if k not in _POLICY_ENV_VARS}
    with patch.dict("os.environ", env, clear=True):
        yield


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_plugin():
    """Factory: ``make_plugin(plugin_id=0, configured=False, cls=SamplePlugin, **kwargs)``."""

    def _factory(plugin_id: int = 0, configured: bool = False, cls=SamplePlugin, **kwargs) -> SamplePlugin:
        plugin = cls(plugin_id, **kwargs)
        if configured:
            plugin.set_config(PluginConfiguration())
        return plugin

    return _factory


@pytest.fixture
def plugin(make_plugin) -> SamplePlugin:
    """An unconfigured plugin with id 0."""
    return make_plugin()


@pytest.fixture
def configured_plugin(make_plugin) -> SamplePlugin:
    """A plugin with id 0 and an empty configuration bound."""
    return make_plugin(configured=True)


@pytest.fixture
def narrow_plugin() -> NarrowPlugin:
    return NarrowPlugin()


@pytest.fixture
def other_plugin_cls():
    return OtherSamplePlugin


@pytest.fixture
def third_plugin_cls():
    return ThirdSamplePlugin


@pytest.fixture
def example_policy_file() -> Path:
    """Path to the example policy shipped with the package."""
    return PluginPolicyConstants.EXAMPLE_POLICY_FILE
