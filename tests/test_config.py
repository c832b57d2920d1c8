"""Tests for MappingConfig and its YAML loader."""

from zoneinfo import ZoneInfo

import pytest
import yaml

from tuple_mapping.config import DEFAULT_CONFIG, MappingConfig, load_config, parse_config


class TestMappingConfig:
    def test_default_is_system_local(self):
        assert DEFAULT_CONFIG.timezone is None
        assert DEFAULT_CONFIG.tzinfo is None

    def test_named_zone(self):
        config = MappingConfig(timezone="Europe/Warsaw")
        assert config.tzinfo == ZoneInfo("Europe/Warsaw")

    def test_unknown_zone_rejected(self):
        with pytest.raises(ValueError, match="Unknown time zone"):
            MappingConfig(timezone="Mars/Olympus_Mons")

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.timezone = "UTC"


class TestParseConfig:
    def test_empty_document(self):
        assert parse_config({}) == MappingConfig()

    def test_section(self):
        assert parse_config({"tuple_mapping": {"timezone": "UTC"}}).timezone == "UTC"

    def test_empty_section(self):
        assert parse_config({"tuple_mapping": None}) == MappingConfig()

    def test_section_must_be_mapping(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            parse_config({"tuple_mapping": ["UTC"]})

    def test_unknown_option(self):
        with pytest.raises(ValueError, match="Unknown tuple_mapping option"):
            parse_config({"tuple_mapping": {"tz": "UTC"}})


class TestLoadConfig:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "mapping.yaml"
        path.write_text("tuple_mapping:\n  timezone: UTC\nother_tool:\n  key: 1\n")
        config = load_config(path)
        assert config.timezone == "UTC"
        assert config.tzinfo == ZoneInfo("UTC")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == MappingConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("tuple_mapping: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_config(path)
