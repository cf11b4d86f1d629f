import re
from pathlib import Path

import pytest
from pydantic import ValidationError

from i18n_extraction_tools.config_file_load import CONFIG_FILE_NAME
from i18n_extraction_tools.custom_exceptions import ConfigurationError
from i18n_extraction_tools.extraction_configuration import (
    ExtractionConfiguration,
    parse_keep_key_rule,
    resolve_configuration,
)

CONFIG_FILES = Path(__file__).parent / "test_data" / "config_files"


def test_defaults():
    configuration = ExtractionConfiguration()
    assert configuration.root_dir == "src"
    assert configuration.out_dir == "lang"
    assert configuration.languages == ["zh", "en"]
    assert configuration.base_language == "zh"
    assert configuration.translate is False
    assert configuration.translate_languages == []
    assert configuration.regulars[0].search("$t('Hello')").group(1) == "Hello"
    assert configuration.keep_key_rules[0].search("G/shared")


def test_camel_case_aliases():
    configuration = ExtractionConfiguration(
        **{"rootDir": "app", "outDir": "i18n", "forceTranslate": True}
    )
    assert configuration.root_dir == "app"
    assert configuration.out_dir == "i18n"
    assert configuration.force_translate is True


def test_configuration_is_immutable():
    configuration = ExtractionConfiguration()
    with pytest.raises(ValidationError):
        configuration.root_dir = "other"


def test_unknown_option_is_rejected():
    with pytest.raises(ValidationError):
        ExtractionConfiguration(**{"langauges": ["zh"]})


def test_pattern_needs_one_group():
    with pytest.raises(ValidationError):
        ExtractionConfiguration(regulars=[r"t\((.+?)\)(x)"])
    with pytest.raises(ValidationError):
        ExtractionConfiguration(regulars=[r"t\(.+?\)"])


def test_invalid_pattern_is_rejected():
    with pytest.raises(ValidationError):
        ExtractionConfiguration(regulars=[r"t\(('(.+?)"])


def test_keep_key_rules_parsing():
    assert parse_keep_key_rule("app.title") == "app.title"
    assert parse_keep_key_rule("/^G\\//").pattern == "^G\\/"
    assert parse_keep_key_rule("/") == "/"
    pattern = re.compile("x")
    assert parse_keep_key_rule(pattern) is pattern
    with pytest.raises(ValueError):
        parse_keep_key_rule(42)


def test_keep_key_rules_accept_callables():
    configuration = ExtractionConfiguration(keep_key_rules=[lambda key: key.startswith("x")])
    assert configuration.keep_key_rules[0]("xy")


def test_absolute_root_dir(tmp_path):
    configuration = ExtractionConfiguration(cwd=tmp_path, root_dir="src")
    assert configuration.absolute_root_dir == (tmp_path / "src").resolve()


def test_resolve_defaults_without_config(tmp_path):
    configuration = resolve_configuration({}, no_config=True, cwd=tmp_path)
    assert configuration.root_dir == "src"
    assert configuration.cwd == tmp_path


def test_resolve_precedence(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text(
        '{"rootDir": "app", "outDir": "i18n", "languages": ["zh", "en", "ko"]}'
    )
    configuration = resolve_configuration(
        {"out_dir": "locales", "root_dir": None, "translate": None}, cwd=tmp_path
    )
    assert configuration.root_dir == "app"
    assert configuration.out_dir == "locales"
    assert configuration.languages == ["zh", "en", "ko"]
    assert configuration.translate is False


def test_resolve_no_config_ignores_file(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text('{"rootDir": "app"}')
    configuration = resolve_configuration({}, no_config=True, cwd=tmp_path)
    assert configuration.root_dir == "src"


def test_resolve_explicit_config():
    configuration = resolve_configuration(
        {}, config_path=CONFIG_FILES / "single_file_config.json", cwd="."
    )
    assert configuration.root_dir == "app"
    assert configuration.keep_key_rules[0].search("G/x")
    assert configuration.keep_key_rules[1] == "app.title"


def test_resolve_missing_explicit_config(tmp_path):
    with pytest.raises(ConfigurationError):
        resolve_configuration({}, config_path=tmp_path / "nope.json", cwd=tmp_path)


def test_resolve_invalid_json():
    with pytest.raises(ConfigurationError):
        resolve_configuration({}, config_path=CONFIG_FILES / "invalid_json.json")


def test_resolve_non_object_config():
    with pytest.raises(ConfigurationError):
        resolve_configuration({}, config_path=CONFIG_FILES / "list_config.json")


def test_resolve_validation_errors_propagate():
    with pytest.raises(ValidationError):
        resolve_configuration({}, config_path=CONFIG_FILES / "two_group_pattern.json")
    with pytest.raises(ValidationError):
        resolve_configuration({}, config_path=CONFIG_FILES / "unknown_option.json")
