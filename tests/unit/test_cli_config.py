"""Unit tests for CLI configuration discovery and loading."""

import json
import logging

import pytest

from mdpeek.cli.config import (
    _load_pyproject_section,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    validate_config,
)
from mdpeek.exceptions import ConfigError


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Test loading each configuration format."""

    def test_toml(self, tmp_path):
        """Test a TOML configuration file."""
        path = tmp_path / ".mdpeek.toml"
        path.write_text('theme = "nord"\nrule_width = 60\n')
        assert load_config_file(path) == {"theme": "nord", "rule_width": 60}

    def test_yaml(self, tmp_path):
        """Test a YAML configuration file."""
        path = tmp_path / ".mdpeek.yaml"
        path.write_text("theme: dracula\nstandalone: true\n")
        assert load_config_file(path) == {"theme": "dracula", "standalone": True}

    def test_yml_extension(self, tmp_path):
        """Test that the short YAML extension is accepted."""
        path = tmp_path / ".mdpeek.yml"
        path.write_text("title: Notes\n")
        assert load_config_file(str(path)) == {"title": "Notes"}

    def test_empty_yaml(self, tmp_path):
        """Test that an empty YAML file is an empty configuration."""
        path = tmp_path / ".mdpeek.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_yaml_must_be_mapping(self, tmp_path):
        """Test that a YAML list is rejected."""
        path = tmp_path / ".mdpeek.yaml"
        path.write_text("- theme\n- nord\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config_file(path)

    def test_json(self, tmp_path):
        """Test a JSON configuration file."""
        path = tmp_path / ".mdpeek.json"
        path.write_text(json.dumps({"color_system": "256", "log_level": "DEBUG"}))
        assert load_config_file(path) == {"color_system": "256", "log_level": "DEBUG"}

    def test_json_must_be_object(self, tmp_path):
        """Test that a JSON array is rejected."""
        path = tmp_path / ".mdpeek.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="object"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "name,content",
        [
            (".mdpeek.toml", "theme = "),
            (".mdpeek.json", "{not json"),
            (".mdpeek.yaml", "theme: [unclosed"),
        ],
    )
    def test_malformed_files(self, tmp_path, name, content):
        """Test that syntax errors become ConfigError with the path attached."""
        path = tmp_path / name
        path.write_text(content)
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert exc_info.value.config_path == str(path)
        assert exc_info.value.original_error is not None

    def test_unsupported_extension(self, tmp_path):
        """Test that unknown formats are rejected."""
        path = tmp_path / "mdpeek.ini"
        path.write_text("[mdpeek]\n")
        with pytest.raises(ConfigError, match="Unsupported"):
            load_config_file(path)

    def test_missing_file(self, tmp_path):
        """Test that a missing file is reported."""
        with pytest.raises(ConfigError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")


@pytest.mark.unit
@pytest.mark.cli
class TestPyprojectSection:
    """Test the [tool.mdpeek] section of pyproject.toml."""

    def test_section_loaded(self, tmp_path):
        """Test that the section is used as configuration."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.mdpeek]\ntheme = "ayu"\n')
        assert load_config_file(path) == {"theme": "ayu"}

    def test_missing_section(self, tmp_path):
        """Test that a pyproject.toml without the section is empty."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')
        assert _load_pyproject_section(path) == {}

    def test_section_must_be_table(self, tmp_path):
        """Test that a scalar section is rejected."""
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool]\nmdpeek = 3\n")
        with pytest.raises(ConfigError, match="must be a table"):
            _load_pyproject_section(path)


@pytest.mark.unit
@pytest.mark.cli
class TestValidateConfig:
    """Test key and type checks."""

    def test_unknown_keys_dropped_with_warning(self, caplog):
        """Test that unknown keys are logged and ignored."""
        with caplog.at_level(logging.WARNING, logger="mdpeek.cli.config"):
            result = validate_config({"theme": "nord", "colour": "red"}, "cfg.toml")
        assert result == {"theme": "nord"}
        assert "colour" in caplog.text

    @pytest.mark.parametrize(
        "config",
        [
            {"rule_width": "wide"},
            {"rule_width": True},
            {"standalone": "yes"},
            {"theme": 3},
        ],
    )
    def test_wrong_types_rejected(self, config):
        """Test that values of the wrong type raise."""
        with pytest.raises(ConfigError):
            validate_config(config)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test discovery upward from the document directory."""

    def test_found_in_parent_directory(self, tmp_path):
        """Test that a config file in a parent directory is found."""
        config = tmp_path / ".mdpeek.toml"
        config.write_text('theme = "nord"\n')
        child = tmp_path / "docs" / "guide"
        child.mkdir(parents=True)
        assert find_config_in_parents(child) == config.resolve()

    def test_nearest_directory_wins(self, tmp_path):
        """Test that the closest config file is used."""
        (tmp_path / ".mdpeek.toml").write_text('theme = "nord"\n')
        child = tmp_path / "docs"
        child.mkdir()
        nearer = child / ".mdpeek.yaml"
        nearer.write_text("theme: ayu\n")
        assert find_config_in_parents(child) == nearer.resolve()

    def test_filename_priority(self, tmp_path):
        """Test that TOML is preferred over JSON in one directory."""
        (tmp_path / ".mdpeek.json").write_text("{}")
        toml_path = tmp_path / ".mdpeek.toml"
        toml_path.write_text("")
        assert find_config_in_parents(tmp_path) == toml_path.resolve()

    def test_pyproject_without_section_skipped(self, tmp_path):
        """Test that an unrelated pyproject.toml does not stop the search."""
        config = tmp_path / ".mdpeek.toml"
        config.write_text("")
        child = tmp_path / "pkg"
        child.mkdir()
        (child / "pyproject.toml").write_text('[project]\nname = "pkg"\n')
        assert find_config_in_parents(child) == config.resolve()

    def test_pyproject_with_section_found(self, tmp_path):
        """Test that a pyproject.toml with the section counts as a config file."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.mdpeek]\ntheme = "mono"\n')
        assert find_config_in_parents(tmp_path) == pyproject.resolve()


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Test the order in which configuration sources are consulted."""

    def test_explicit_path_first(self, tmp_path):
        """Test that --config wins over the environment and discovery."""
        explicit = tmp_path / "explicit.toml"
        explicit.write_text('theme = "ayu"\n')
        env = tmp_path / "env.toml"
        env.write_text('theme = "nord"\n')
        (tmp_path / ".mdpeek.toml").write_text('theme = "mono"\n')
        config = load_config_with_priority(str(explicit), str(env), tmp_path)
        assert config == {"theme": "ayu"}

    def test_environment_before_discovery(self, tmp_path):
        """Test that the environment path wins over discovery."""
        env = tmp_path / "env.toml"
        env.write_text('theme = "nord"\n')
        (tmp_path / ".mdpeek.toml").write_text('theme = "mono"\n')
        assert load_config_with_priority(None, str(env), tmp_path) == {"theme": "nord"}

    def test_discovery_last(self, tmp_path):
        """Test that a discovered file is used when nothing else is given."""
        (tmp_path / ".mdpeek.toml").write_text('theme = "mono"\n')
        assert load_config_with_priority(None, None, tmp_path) == {"theme": "mono"}
