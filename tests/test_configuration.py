# Copyright 2026 Cisco Systems, Inc. and its affiliates
# SPDX-License-Identifier: Apache-2.0

"""Tests for PluginConfiguration and plugin policy persistence."""

import textwrap

import pytest
import yaml

from plugin_policy.core.configuration import PluginConfiguration
from plugin_policy.core.exceptions import ConfigurationRequiredError
from plugin_policy.core.levels import AlertThreshold, AttackStrength


class TestPluginConfiguration:
    def test_get_missing_returns_default(self):
        config = PluginConfiguration()
        assert config.get("plugins.p1.level") is None
        assert config.get("plugins.p1.level", "DEFAULT") == "DEFAULT"

    def test_set_creates_sections(self):
        config = PluginConfiguration()
        config.set("plugins.p1.level", "HIGH")
        assert config.get("plugins.p1.level") == "HIGH"
        assert config.contains("plugins.p1")
        assert config.to_dict() == {"plugins": {"p1": {"level": "HIGH"}}}

    def test_get_returns_copies(self):
        config = PluginConfiguration({"plugins": {"p1": {"enabled": True}}})
        section = config.get("plugins.p1")
        section["enabled"] = False
        assert config.get("plugins.p1.enabled") is True

    def test_remove(self):
        config = PluginConfiguration({"a": {"b": 1}})
        assert config.remove("a.b") is True
        assert config.remove("a.b") is False
        assert config.contains("a")

    def test_subset(self):
        config = PluginConfiguration({"plugins": {"p1": {"enabled": False}}})
        sub = config.subset("plugins")
        assert sub.get("p1.enabled") is False

    def test_subset_of_value_fails(self):
        config = PluginConfiguration({"a": 1})
        with pytest.raises(ValueError):
            config.subset("a")

    def test_merge_is_deep(self):
        config = PluginConfiguration({"plugins": {"p1": {"enabled": True, "level": "LOW"}}})
        config.merge({"plugins": {"p1": {"level": "HIGH"}, "p2": {"enabled": False}}})
        assert config.get("plugins.p1.enabled") is True
        assert config.get("plugins.p1.level") == "HIGH"
        assert config.get("plugins.p2.enabled") is False

    def test_empty_key_rejected(self):
        with pytest.raises(ValueError):
            PluginConfiguration().get("")

    def test_yaml_round_trip(self, tmp_path):
        config = PluginConfiguration()
        config.set("plugins.p40012.level", "HIGH")
        path = tmp_path / "policy.yaml"

        config.to_yaml(path)

        with open(path) as fh:
            assert yaml.safe_load(fh) == {"plugins": {"p40012": {"level": "HIGH"}}}
        assert PluginConfiguration.from_yaml(path).get("plugins.p40012.level") == "HIGH"

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PluginConfiguration.from_yaml(tmp_path / "nope.yaml")

    def test_from_yaml_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            PluginConfiguration.from_yaml(path)

    def test_example_policy_loads(self, example_policy_file):
        config = PluginConfiguration.from_yaml(example_policy_file)
        assert config.get("plugins.p40012.strength") == "INSANE"


class TestSaveAndLoad:
    def test_save_writes_stored_values(self, configured_plugin):
        configured_plugin.set_alert_threshold(AlertThreshold.HIGH)
        configured_plugin.set_enabled(False)
        config = PluginConfiguration()

        configured_plugin.save_to(config)

        assert config.get("plugins.p0") == {"enabled": False, "level": "HIGH", "strength": "DEFAULT"}

    def test_load_binds_and_restores(self, make_plugin):
        config = PluginConfiguration({"plugins": {"p3": {"enabled": True, "level": "LOW", "strength": "HIGH"}}})
        plugin = make_plugin(3)

        plugin.load_from(config)

        assert plugin.get_config() is config
        assert plugin.get_alert_threshold() == AlertThreshold.LOW
        assert plugin.get_attack_strength() == AttackStrength.HIGH

    def test_load_off_wins_over_enabled(self, make_plugin):
        config = PluginConfiguration({"plugins": {"p3": {"enabled": True, "level": "OFF"}}})
        plugin = make_plugin(3)

        plugin.load_from(config)

        assert plugin.is_enabled() is False
        assert plugin.get_alert_threshold(True) == AlertThreshold.OFF

    def test_load_disabled_with_level_keeps_level(self, make_plugin):
        config = PluginConfiguration({"plugins": {"p3": {"enabled": False, "level": "HIGH"}}})
        plugin = make_plugin(3)

        plugin.load_from(config)

        assert plugin.is_enabled() is False
        assert plugin.get_alert_threshold() == AlertThreshold.HIGH
        assert plugin.get_alert_threshold(True) == AlertThreshold.OFF

    @pytest.mark.parametrize("flag", ["false", "False", "NO", "0", 0])
    def test_load_enabled_flag_written_as_false(self, make_plugin, flag):
        config = PluginConfiguration({"plugins": {"p7": {"enabled": flag, "level": "HIGH"}}})
        plugin = make_plugin(7)

        plugin.load_from(config)

        assert plugin.is_enabled() is False
        assert plugin.get_alert_threshold() == AlertThreshold.HIGH

    @pytest.mark.parametrize("flag", ["true", "Yes", "1", 1])
    def test_load_enabled_flag_written_as_true(self, make_plugin, flag):
        plugin = make_plugin(7, configured=True)
        plugin.set_enabled(False)

        plugin.load_from(PluginConfiguration({"plugins": {"p7": {"enabled": flag}}}))

        assert plugin.is_enabled() is True

    def test_load_unknown_enabled_flag_keeps_current(self, make_plugin, caplog):
        plugin = make_plugin(7, configured=True)
        plugin.set_enabled(False)

        with caplog.at_level("WARNING"):
            plugin.load_from(PluginConfiguration({"plugins": {"p7": {"enabled": "maybe"}}}))

        assert plugin.is_enabled() is False
        assert "maybe" in caplog.text

    def test_load_without_entry_keeps_current_policy(self, make_plugin):
        plugin = make_plugin(3, configured=True)
        plugin.set_attack_strength(AttackStrength.INSANE)

        plugin.load_from(PluginConfiguration())

        assert plugin.get_attack_strength() == AttackStrength.INSANE

    def test_load_unknown_level_keeps_current(self, make_plugin, caplog):
        config = PluginConfiguration({"plugins": {"p3": {"level": "LOUD"}}})
        plugin = make_plugin(3)

        with caplog.at_level("WARNING"):
            plugin.load_from(config)

        assert plugin.get_alert_threshold(True) == AlertThreshold.DEFAULT
        assert "LOUD" in caplog.text

    def test_save_then_load_into_fresh_plugin(self, make_plugin):
        source = make_plugin(9, configured=True)
        source.set_alert_threshold(AlertThreshold.OFF)
        source.set_attack_strength(AttackStrength.LOW)
        config = PluginConfiguration()
        source.save_to(config)

        fresh = make_plugin(9)
        fresh.load_from(config)

        assert fresh.is_enabled() is False
        assert fresh.get_attack_strength(True) == AttackStrength.LOW

    def test_create_param_if_not_exist(self, make_plugin):
        config = PluginConfiguration()
        plugin = make_plugin(5)
        plugin.set_config(config)

        plugin.create_param_if_not_exist()
        assert config.get("plugins.p5.enabled") is True

        config.set("plugins.p5.enabled", False)
        plugin.create_param_if_not_exist()
        assert config.get("plugins.p5.enabled") is False

    def test_create_param_requires_config(self, plugin):
        with pytest.raises(ConfigurationRequiredError):
            plugin.create_param_if_not_exist()

    def test_load_from_yaml_file(self, make_plugin, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text(
            textwrap.dedent("""\
                plugins:
                  p12:
                    enabled: true
                    level: medium
                    strength: insane
            """)
        )
        plugin = make_plugin(12)

        plugin.load_from(PluginConfiguration.from_yaml(path))

        assert plugin.get_alert_threshold(True) == AlertThreshold.MEDIUM
        assert plugin.get_attack_strength(True) == AttackStrength.INSANE

    def test_bare_off_in_yaml_loads_as_off(self, make_plugin, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text("plugins:\n  p12:\n    level: OFF\n")
        plugin = make_plugin(12)

        plugin.load_from(PluginConfiguration.from_yaml(path))

        assert plugin.is_enabled() is False
        assert plugin.get_alert_threshold(True) == AlertThreshold.OFF
