"""Tests for building the run configuration."""

import pytest
import yaml

from proto_release.environment import BuildConfig, load_settings
from proto_release.exceptions import SettingsError


def write_settings(path, data):
    """Helper to write a YAML settings file."""
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f)


class TestFromEnv:
    """Test BuildConfig.from_env."""

    def test_defaults(self, proto_tree):
        config = BuildConfig.from_env({}, root=str(proto_tree))
        assert config.root == proto_tree.resolve()
        assert config.categories == ("product", "platform", "shared")
        assert config.protoc == "protoc"
        assert config.jar == "jar"
        assert config.output_dir == "dist/generated"
        assert config.validate() == []

    def test_tool_overrides_from_env(self, proto_tree):
        env = {"PROTOC_BIN": "/opt/protoc/bin/protoc", "JAR_BIN": "/usr/lib/jvm/bin/jar"}
        config = BuildConfig.from_env(env, root=str(proto_tree))
        assert config.protoc == "/opt/protoc/bin/protoc"
        assert config.jar == "/usr/lib/jvm/bin/jar"

    @pytest.mark.parametrize("env,no_color,tty,expected", [
        ({}, False, True, True),
        ({}, True, True, False),
        ({}, False, False, False),
        ({"NO_COLOR": "1"}, False, True, False),
        ({"TERM": "dumb"}, False, True, False),
        ({"TERM": "xterm-256color"}, False, True, True),
    ])
    def test_color_detection(self, proto_tree, env, no_color, tty, expected):
        config = BuildConfig.from_env(env, root=str(proto_tree), no_color=no_color, stderr_is_tty=tty)
        assert config.color is expected

    def test_debug_extends_categories(self, proto_tree):
        assert "sandbox" not in BuildConfig.from_env({}, root=str(proto_tree)).allowed_categories()
        debug_config = BuildConfig.from_env({}, root=str(proto_tree), debug=True)
        assert debug_config.allowed_categories() == ["product", "platform", "shared", "sandbox"]

    def test_config_is_immutable(self, proto_tree):
        config = BuildConfig.from_env({}, root=str(proto_tree))
        with pytest.raises(AttributeError):
            config.debug = True


class TestSettingsFile:
    """Test the optional YAML settings file."""

    def test_settings_file_in_root(self, proto_tree):
        write_settings(proto_tree / "proto-release.yaml", {
            "categories": ["payments"],
            "debug_category": "playground",
            "output_dir": "build/java",
        })
        config = BuildConfig.from_env({}, root=str(proto_tree))
        assert config.categories == ("payments",)
        assert config.debug_category == "playground"
        assert config.output_dir == "build/java"

    def test_settings_path_from_env(self, proto_tree, tmp_path_factory):
        settings = tmp_path_factory.mktemp("settings") / "custom.yaml"
        write_settings(settings, {"protoc": "protoc-25"})
        config = BuildConfig.from_env({"PROTO_RELEASE_CONFIG": str(settings)}, root=str(proto_tree))
        assert config.protoc == "protoc-25"

    def test_env_wins_over_settings(self, proto_tree):
        write_settings(proto_tree / "proto-release.yaml", {"protoc": "protoc-25"})
        config = BuildConfig.from_env({"PROTOC_BIN": "protoc-26"}, root=str(proto_tree))
        assert config.protoc == "protoc-26"

    def test_unknown_key_is_validation_error(self, proto_tree):
        write_settings(proto_tree / "proto-release.yaml", {"compiler": "protoc"})
        config = BuildConfig.from_env({}, root=str(proto_tree))
        assert config.validate() == ["Unknown setting 'compiler' in proto-release.yaml"]

    def test_bad_categories_is_validation_error(self, proto_tree):
        write_settings(proto_tree / "proto-release.yaml", {"categories": "product"})
        config = BuildConfig.from_env({}, root=str(proto_tree))
        assert "Setting 'categories' must be a list of strings" in config.validate()
        assert config.categories == ("product", "platform", "shared")

    def test_missing_file_is_empty(self, tmp_path):
        assert load_settings(tmp_path / "missing.yaml") == {}

    def test_empty_file_is_empty(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path) == {}

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("categories: [product\n")
        with pytest.raises(SettingsError):
            load_settings(path)

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- product\n")
        with pytest.raises(SettingsError):
            load_settings(path)


class TestValidate:
    """Test BuildConfig.validate."""

    def test_missing_root(self, tmp_path):
        config = BuildConfig.from_env({}, root=str(tmp_path / "nowhere"))
        assert any("is not a directory" in e for e in config.validate())

    @pytest.mark.parametrize("output_dir", ["/tmp/out", "../out", "dist/../../out"])
    def test_output_dir_must_stay_in_root(self, proto_tree, output_dir):
        write_settings(proto_tree / "proto-release.yaml", {"output_dir": output_dir})
        config = BuildConfig.from_env({}, root=str(proto_tree))
        assert any("must stay inside the project root" in e for e in config.validate())
