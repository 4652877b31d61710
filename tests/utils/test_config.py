"""Tests for configuration management."""

import json

import pytest

from tickprogress.utils.config import Config


@pytest.fixture
def config_file(tmp_path):
    """Path to a not yet existing config file."""
    return tmp_path / "tickprogress.json"


class TestConfigDefaults:
    """Test default configuration."""

    def test_defaults_without_file(self, config_file):
        """Missing file yields the defaults."""
        config = Config(config_file)

        assert config.get("bar_length") == 20
        assert config.get("bar_filled") == "="
        assert config.get("bar_empty") == "-"
        assert config.get("bar_undefined") == "~"
        assert config.get("block_size") == 4096
        assert config.get("line_format") is None

    def test_get_with_default(self, config_file):
        """Unknown keys fall back to the given default."""
        config = Config(config_file)
        assert config.get("missing", "fallback") == "fallback"

    def test_bar_style(self, config_file):
        """bar_style maps onto ProgressLine arguments."""
        config = Config(config_file)
        assert config.bar_style() == {
            "bar_length": 20,
            "filled": "=",
            "empty": "-",
            "undefined": "~"
        }


class TestConfigFile:
    """Test loading and saving configuration files."""

    def test_file_overrides_defaults(self, config_file):
        """Values from the file replace defaults, others remain."""
        config_file.write_text(json.dumps({"bar_filled": "#", "block_size": 512}))

        config = Config(config_file)

        assert config.get("bar_filled") == "#"
        assert config.get("block_size") == 512
        assert config.get("bar_empty") == "-"

    def test_invalid_json_falls_back(self, config_file, caplog):
        """Corrupt files are ignored with a warning."""
        config_file.write_text("{not json")

        config = Config(config_file)

        assert config.get("bar_length") == 20
        assert "Ignoring unreadable config file" in caplog.text

    def test_non_object_falls_back(self, config_file):
        """A JSON document that is not an object is ignored."""
        config_file.write_text("[1, 2, 3]")

        config = Config(config_file)

        assert config.get("bar_length") == 20

    def test_save_round_trip(self, config_file):
        """Saved values are loaded by a new instance."""
        config = Config(config_file)
        config.set("bar_length", 40)
        config.save()

        assert Config(config_file).get("bar_length") == 40
