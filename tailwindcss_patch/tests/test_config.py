"""Tests for the tailwindcss-mangle config file."""

import os
import re

import pytest
import yaml

from tailwindcss_patch.core.config import (
    CONFIG_FILE,
    get_config,
    get_default_registry_config,
    get_default_transformer_config,
    get_default_user_config,
    init_config,
    load_patch_options,
)
from tailwindcss_patch.core.errors import ConfigFileError
from tailwindcss_patch.core.options import normalize_options


def _normalise_regex(value):
    if isinstance(value, list):
        return [_normalise_regex(item) for item in value]
    if isinstance(value, re.Pattern):
        return value.pattern
    if isinstance(value, dict):
        return {key: _normalise_regex(item) for key, item in value.items()}
    return value


def _write_config(directory, data):
    path = directory / CONFIG_FILE
    path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False), encoding="utf-8")
    return path


class TestDefaults:
    def test_registry(self):
        assert get_default_registry_config() == {
            "output": {
                "file": ".tw-patch/tw-class-list.json",
                "pretty": True,
                "strip_universal_selector": True,
            },
            "tailwind": {},
        }

    def test_transformer_patterns_compiled(self):
        sources = get_default_transformer_config()["sources"]
        assert all(isinstance(pattern, re.Pattern) for pattern in sources["include"] + sources["exclude"])
        assert sources["include"][0].search("src/App.vue")
        assert sources["exclude"][0].search("/repo/node_modules/x.js")

    def test_user_config(self):
        config = get_default_user_config()
        assert set(config) == {"registry", "transformer"}

    def test_fresh_copies(self):
        first = get_default_user_config()
        first["registry"]["output"]["file"] = "changed.json"
        assert get_default_user_config()["registry"]["output"]["file"] == ".tw-patch/tw-class-list.json"


class TestInitConfig:
    def test_init_then_load_equals_defaults(self, tmp_path):
        path = init_config(str(tmp_path))

        assert path == os.path.join(str(tmp_path), CONFIG_FILE)
        assert os.path.exists(path)
        result = get_config(str(tmp_path))
        assert result.config_file == path
        assert _normalise_regex(result.config) == _normalise_regex(get_default_user_config())

    def test_existing_file_kept(self, tmp_path):
        path = _write_config(tmp_path, {"registry": {"output": {"file": "mine.json"}}})
        init_config(str(tmp_path))
        assert yaml.safe_load(path.read_text(encoding="utf-8")) == {"registry": {"output": {"file": "mine.json"}}}


class TestGetConfig:
    def test_missing_file_uses_defaults(self, tmp_path):
        result = get_config(str(tmp_path))
        assert result.config_file is None
        assert result.user_config == {}
        assert _normalise_regex(result.config) == _normalise_regex(get_default_user_config())

    def test_changed_options(self, tmp_path):
        _write_config(tmp_path, {
            "registry": {
                "output": {
                    "file": "xxx/yyy/zzz.json",
                    "pretty": False,
                    "strip_universal_selector": False,
                },
                "tailwind": {
                    "cwd": "aaa/bbb/cc",
                },
            },
        })

        config = get_config(str(tmp_path)).config

        assert config == {
            "registry": {
                "output": {
                    "file": "xxx/yyy/zzz.json",
                    "pretty": False,
                    "strip_universal_selector": False,
                },
                "tailwind": {
                    "cwd": "aaa/bbb/cc",
                },
            },
            "transformer": get_default_transformer_config(),
        }

    def test_transformer_patterns(self, tmp_path):
        _write_config(tmp_path, {"transformer": {"sources": {"include": [r"\.custom$"]}}})
        sources = get_config(str(tmp_path)).config["transformer"]["sources"]

        assert [pattern.pattern for pattern in sources["include"]] == [r"\.custom$"]
        assert _normalise_regex(sources["exclude"]) == _normalise_regex(
            get_default_transformer_config()["sources"]["exclude"]
        )

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / CONFIG_FILE).write_text("registry: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigFileError):
            get_config(str(tmp_path))

    def test_not_a_mapping(self, tmp_path):
        (tmp_path / CONFIG_FILE).write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigFileError):
            get_config(str(tmp_path))

    def test_wrong_shape(self, tmp_path):
        _write_config(tmp_path, {"registry": {"output": "classes.json"}})
        with pytest.raises(ConfigFileError):
            get_config(str(tmp_path))

    def test_invalid_regex(self, tmp_path):
        _write_config(tmp_path, {"transformer": {"sources": {"exclude": ["(unclosed"]}}})
        with pytest.raises(ConfigFileError):
            get_config(str(tmp_path))


class TestLoadPatchOptions:
    def test_registry_section(self, tmp_path):
        _write_config(tmp_path, {"registry": {"output": {"file": "out/classes.json"}, "tailwind": {"version": 4}}})
        loaded = load_patch_options(str(tmp_path))

        assert loaded["cwd"] == str(tmp_path)
        assert loaded["output"]["file"] == "out/classes.json"
        assert loaded["tailwind"]["version"] == 4

        options = normalize_options(loaded)
        assert options.output.file == os.path.join(str(tmp_path), "out", "classes.json")
        assert options.output.pretty == 2
        assert options.tailwind.version_hint == 4

    def test_defaults_without_file(self, tmp_path):
        options = normalize_options(load_patch_options(str(tmp_path)))
        assert options.project_root == str(tmp_path)
        assert options.output.remove_universal_selector is True

    def test_legacy_patch_section(self, tmp_path):
        _write_config(tmp_path, {"patch": {"output": {"filename": "legacy.json", "loose": False}}})
        loaded = load_patch_options(str(tmp_path))

        assert loaded["output"] == {"file": "legacy.json", "pretty": False}

    def test_legacy_patch_cache(self, tmp_path):
        _write_config(tmp_path, {"patch": {"cache": {"dir": ".cache", "file": "c.json"}}})
        options = normalize_options(load_patch_options(str(tmp_path)))

        assert options.cache.enabled is True
        assert options.cache.path == os.path.join(str(tmp_path), ".cache", "c.json")

    def test_overrides_win(self, tmp_path):
        _write_config(tmp_path, {"registry": {"output": {"file": "from-config.json"}}})
        loaded = load_patch_options(str(tmp_path), {"output": {"file": "override.json", "format": "lines"}})

        assert loaded["output"]["file"] == "override.json"
        assert loaded["output"]["format"] == "lines"
        assert loaded["output"]["pretty"] is True
