from pathlib import Path

import pytest

from i18n_extraction_tools.config_file_load import (
    CONFIG_FILE_NAME,
    deep_merge,
    find_config_upwards,
    merge_load,
)
from i18n_extraction_tools.custom_exceptions import ConfigurationError

CONFIG_FILES = Path(__file__).parent / "test_data" / "config_files"


def test_single_file_config_load():
    loaded = merge_load(CONFIG_FILES / "single_file_config.json")
    assert loaded == {
        "rootDir": "app",
        "languages": ["zh", "en"],
        "keepKeyRules": ["/^G\\/+/", "app.title"],
    }


def test_config_dict_merge():
    loaded = merge_load(CONFIG_FILES / "config_dict_merge.json")
    assert loaded == {
        "rootDir": "app",
        "languages": ["zh", "en", "ko"],
        "keepKeyRules": ["/^G\\/+/", "app.title"],
        "outDir": "i18n",
    }


def test_config_chained_load():
    loaded = merge_load(CONFIG_FILES / "config_dict_chain.json")
    assert loaded["rootDir"] == "web"
    assert loaded["translate"] is True
    assert loaded["outDir"] == "i18n"
    assert loaded["languages"] == ["zh", "en", "ko"]
    assert "source" not in loaded


def test_merge_order_and_clearing():
    loaded = merge_load(CONFIG_FILES / "config_merge_order.json")
    assert loaded == {
        "languages": ["zh", "en", "ko"],
        "keepKeyRules": ["/^G\\/+/", "app.title"],
        "outDir": "i18n",
        "translate": True,
    }


def test_missing_source_raises():
    with pytest.raises(FileNotFoundError):
        merge_load(CONFIG_FILES / "does_not_exist.json")


def test_non_object_config_raises():
    with pytest.raises(ConfigurationError) as exc_info:
        merge_load(CONFIG_FILES / "list_config.json")
    assert exc_info.value.data_value.endswith("list_config.json")


def test_empty_merge():
    d = {"a": 1}
    assert deep_merge({}, {}) == {}
    assert deep_merge(d, {}) == d
    assert deep_merge({}, d) == d


def test_merge_clearing():
    first = {"a": 1, "b": 2}
    assert deep_merge(first, {"a": None}) == {"b": 2}


def test_deep_merging_behavior():
    first = {"a": {"zh": "zh-CN", "en": "en"}}
    second = {"a": {"zh": "zh-Hans"}}
    assert deep_merge(first, second) == {"a": {"zh": "zh-Hans", "en": "en"}}


def test_list_merge_skips_duplicates():
    assert deep_merge({"files": ["**/*.js"]}, {"files": ["**/*.js", "**/*.vue"]}) == {
        "files": ["**/*.js", "**/*.vue"]
    }


def test_find_config_upwards(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text("{}")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_config_upwards(nested) == (tmp_path / CONFIG_FILE_NAME).resolve()


def test_find_config_upwards_prefers_closest(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text("{}")
    nested = tmp_path / "a"
    nested.mkdir()
    (nested / CONFIG_FILE_NAME).write_text("{}")
    assert find_config_upwards(nested) == (nested / CONFIG_FILE_NAME).resolve()
