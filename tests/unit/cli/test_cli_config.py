"""Unit tests for gfmhost CLI configuration loading.

This module tests file discovery, loading of each supported format, and
priority handling.
"""

import json

import pytest

from gfmhost.cli.config import find_config_in_parents, load_config_file, load_config_with_priority
from gfmhost.exceptions import ConfigError


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Test loading an option record from each format."""

    def test_toml(self, tmp_path):
        """Test loading a TOML record."""
        path = tmp_path / "options.toml"
        path.write_text('default_line_ending = "lf"\nallow_dangerous_html = true\n')
        assert load_config_file(path) == {"default_line_ending": "lf", "allow_dangerous_html": True}

    def test_json(self, tmp_path):
        """Test loading a JSON record."""
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"gfm_tagfilter": False}))
        assert load_config_file(str(path)) == {"gfm_tagfilter": False}

    @pytest.mark.parametrize("suffix", [".yaml", ".yml"])
    def test_yaml(self, tmp_path, suffix):
        """Test loading a YAML record."""
        path = tmp_path / f"options{suffix}"
        path.write_text("gfm_footnote_label: Notes\n")
        assert load_config_file(path) == {"gfm_footnote_label": "Notes"}

    def test_markdown_section(self, tmp_path):
        """Test that a markdown sub-table is used as the record."""
        path = tmp_path / "options.toml"
        path.write_text('[markdown]\ndefault_line_ending = "lf"\n')
        assert load_config_file(path) == {"default_line_ending": "lf"}

    def test_pyproject_section(self, tmp_path):
        """Test loading [tool.gfmhost] from pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.gfmhost]\ngfm_tagfilter = false\n')
        assert load_config_file(path) == {"gfm_tagfilter": False}

    def test_pyproject_without_section(self, tmp_path):
        """Test that a pyproject.toml without the section yields an empty record."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')
        assert load_config_file(path) == {}

    def test_empty_yaml(self, tmp_path):
        """Test that an empty YAML file yields an empty record."""
        path = tmp_path / "options.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(tmp_path / "missing.toml")
        assert exc_info.value.file_path == str(tmp_path / "missing.toml")

    def test_directory(self, tmp_path):
        """Test that a directory path raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config_file(tmp_path)

    def test_unsupported_extension(self, tmp_path):
        """Test that unknown extensions raise ConfigError."""
        path = tmp_path / "options.ini"
        path.write_text("[markdown]\n")
        with pytest.raises(ConfigError, match="Unsupported config file format"):
            load_config_file(path)

    def test_invalid_json(self, tmp_path):
        """Test that malformed JSON raises ConfigError."""
        path = tmp_path / "options.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert exc_info.value.original_error is not None

    def test_invalid_toml(self, tmp_path):
        """Test that malformed TOML raises ConfigError."""
        path = tmp_path / "options.toml"
        path.write_text("default_line_ending = ")
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_non_table_content(self, tmp_path):
        """Test that a top-level list raises ConfigError."""
        path = tmp_path / "options.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="must contain a table"):
            load_config_file(path)

    def test_non_table_markdown_section(self, tmp_path):
        """Test that a non-table markdown entry raises ConfigError."""
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"markdown": "lf"}))
        with pytest.raises(ConfigError):
            load_config_file(path)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery."""

    def test_find_in_start_dir(self, tmp_path):
        """Test discovering a config file in the start directory."""
        config = tmp_path / ".gfmhost.toml"
        config.write_text('default_line_ending = "lf"\n')
        assert find_config_in_parents(tmp_path) == config.resolve()

    def test_find_in_parent(self, tmp_path):
        """Test discovering a config file in a parent directory."""
        config = tmp_path / ".gfmhost.json"
        config.write_text("{}")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config.resolve()

    def test_dedicated_file_before_pyproject(self, tmp_path):
        """Test that dedicated config files win over pyproject.toml."""
        (tmp_path / "pyproject.toml").write_text("[tool.gfmhost]\ngfm_tagfilter = false\n")
        config = tmp_path / ".gfmhost.yaml"
        config.write_text("gfm_tagfilter: true\n")
        assert find_config_in_parents(tmp_path) == config.resolve()

    def test_pyproject_with_section(self, tmp_path):
        """Test that pyproject.toml is found when it has a [tool.gfmhost] section."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.gfmhost]\ngfm_tagfilter = false\n")
        assert find_config_in_parents(tmp_path) == pyproject.resolve()

    def test_invalid_pyproject_skipped(self, tmp_path):
        """Test that an unreadable pyproject.toml does not stop the search."""
        (tmp_path / "pyproject.toml").write_text("[tool.gfmhost\n")
        nested = tmp_path / "pkg"
        nested.mkdir()
        (nested / "pyproject.toml").write_text("[tool.other]\nx = 1\n")
        assert find_config_in_parents(nested) is None


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigWithPriority:
    """Test configuration priority handling."""

    def test_explicit_path_wins(self, tmp_path):
        """Test that the explicit path beats the environment path."""
        explicit = tmp_path / "explicit.json"
        explicit.write_text(json.dumps({"gfm_footnote_label": "explicit"}))
        env = tmp_path / "env.json"
        env.write_text(json.dumps({"gfm_footnote_label": "env"}))
        assert load_config_with_priority(str(explicit), str(env)) == {"gfm_footnote_label": "explicit"}

    def test_env_path(self, tmp_path):
        """Test that the environment path is used without an explicit path."""
        env = tmp_path / "env.json"
        env.write_text(json.dumps({"gfm_footnote_label": "env"}))
        assert load_config_with_priority(None, str(env)) == {"gfm_footnote_label": "env"}

    def test_discovery(self, no_config_env):
        """Test that auto-discovery is the last resort."""
        (no_config_env / ".gfmhost.toml").write_text('gfm_footnote_label = "found"\n')
        assert load_config_with_priority() == {"gfm_footnote_label": "found"}

    def test_nothing_found(self, no_config_env):
        """Test that no configuration yields an empty record."""
        assert load_config_with_priority() == {}
