"""Tests for configuration system."""

import os
from dataclasses import dataclass
from pathlib import Path

import pytest

from localefly.core.config import Config, config_properties, env_key_for
from localefly.kernel.exceptions import ConfigurationException


class TestConfig:
    def test_load_from_dict(self):
        config = Config({"app": {"name": "test-service", "port": 8080}})
        assert config.get("app.name") == "test-service"
        assert config.get("app.port") == 8080

    def test_get_with_default(self):
        config = Config({})
        assert config.get("missing.key", "default") == "default"

    def test_get_section(self):
        config = Config({"localefly": {"locale": {"default": "fr"}}})
        assert config.get_section("localefly.locale") == {"default": "fr"}
        assert config.get_section("localefly.missing") == {}

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("app:\n  name: my-service\n")
        config = Config.from_file(config_file)
        assert config.get("app.name") == "my-service"

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "settings.toml"
        config_file.write_text('[localefly.locale]\nsupported = ["en", "fr"]\n')
        config = Config.from_file(config_file)
        assert config.get("localefly.locale.supported") == ["en", "fr"]

    def test_packaged_defaults_are_loaded(self, tmp_path: Path):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("{}\n")
        config = Config.from_file(config_file)
        assert config.get("localefly.locale.priority") == "specificity"
        assert config.loaded_sources[0].startswith("localefly-defaults.yaml")

    def test_missing_file_is_fatal(self, tmp_path: Path):
        with pytest.raises(ConfigurationException):
            Config.from_file(tmp_path / "nope.yaml")

    def test_malformed_yaml_is_fatal(self, tmp_path: Path):
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("localefly: [unclosed\n")
        with pytest.raises(ConfigurationException):
            Config.from_file(config_file)

    def test_non_mapping_yaml_is_fatal(self, tmp_path: Path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- en\n- fr\n")
        with pytest.raises(ConfigurationException):
            Config.from_file(config_file)

    def test_env_var_override(self):
        os.environ["LOCALEFLY_LOCALE_DEFAULT"] = "de"
        try:
            config = Config({"localefly": {"locale": {"default": "fr"}}})
            assert config.get("localefly.locale.default") == "de"
        finally:
            del os.environ["LOCALEFLY_LOCALE_DEFAULT"]

    def test_env_key_mapping(self):
        assert env_key_for("localefly.locale.detect-environment") == "LOCALEFLY_LOCALE_DETECT_ENVIRONMENT"
        assert env_key_for("app.name") == "LOCALEFLY_APP_NAME"


class TestPlaceholders:
    def test_env_placeholder(self, monkeypatch):
        monkeypatch.setenv("SITE_LOCALE", "ja")
        config = Config({"localefly": {"locale": {"default": "${SITE_LOCALE}"}}})
        assert config.get("localefly.locale.default") == "ja"

    def test_config_reference(self):
        config = Config({"site": {"locale": "da-DK"}, "localefly": {"locale": {"default": "${site.locale}"}}})
        assert config.get("localefly.locale.default") == "da-DK"

    def test_placeholder_default(self):
        config = Config({"localefly": {"locale": {"default": "${UNSET_LOCALE_VAR_XYZ:en-GB}"}}})
        assert config.get("localefly.locale.default") == "en-GB"

    def test_unresolvable_placeholder_is_fatal(self):
        config = Config({"localefly": {"locale": {"default": "${UNSET_LOCALE_VAR_XYZ}"}}})
        with pytest.raises(ConfigurationException):
            config.get("localefly.locale.default")

    def test_circular_reference_is_fatal(self):
        config = Config({"a": "${b}", "b": "${a}"})
        with pytest.raises(ConfigurationException):
            config.get("a")


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///test.db"
            pool_size: int = 5

        config = Config({"database": {"url": "postgresql://localhost/mydb", "pool_size": 20}})
        db_config = config.bind(DatabaseConfig)
        assert db_config.url == "postgresql://localhost/mydb"
        assert db_config.pool_size == 20

    def test_bind_uses_defaults(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///default.db"
            pool_size: int = 5

        db_config = Config({}).bind(DatabaseConfig)
        assert db_config.url == "sqlite:///default.db"
        assert db_config.pool_size == 5

    def test_bind_coerces_env_strings(self, monkeypatch):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            pool_size: int = 5
            ratio: float = 0.5

        monkeypatch.setenv("LOCALEFLY_DATABASE_POOL_SIZE", "12")
        monkeypatch.setenv("LOCALEFLY_DATABASE_RATIO", "0.25")
        db_config = Config({}).bind(DatabaseConfig)
        assert db_config.pool_size == 12
        assert db_config.ratio == 0.25

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            value: str = ""

        with pytest.raises(ConfigurationException):
            Config({}).bind(Plain)


class TestProfileConfigMerging:
    def test_merge_profile_config(self, tmp_path):
        base = tmp_path / "localefly.yaml"
        base.write_text("localefly:\n  locale:\n    supported: [en]\n    default: en\n")

        profile = tmp_path / "localefly-ca.yaml"
        profile.write_text("localefly:\n  locale:\n    default: fr-CA\n")

        config = Config.from_file(base, active_profiles=["ca"])
        assert config.get("localefly.locale.default") == "fr-CA"
        assert config.get("localefly.locale.supported") == ["en"]

    def test_config_subdirectory_is_merged_first(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "localefly.yaml").write_text("localefly:\n  locale:\n    default: de\n    priority: quality\n")
        (tmp_path / "localefly.yaml").write_text("localefly:\n  locale:\n    default: fr\n")

        config = Config.from_sources(tmp_path)
        assert config.get("localefly.locale.default") == "fr"
        assert config.get("localefly.locale.priority") == "quality"

    def test_missing_profile_file_is_skipped(self, tmp_path):
        base = tmp_path / "localefly.yaml"
        base.write_text("app:\n  name: test\n")

        config = Config.from_file(base, active_profiles=["nonexistent"])
        assert config.get("app.name") == "test"

    def test_without_defaults(self, tmp_path):
        config = Config.from_sources(tmp_path, load_defaults=False)
        assert config.to_dict() == {}
        assert config.loaded_sources == []
