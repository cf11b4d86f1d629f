import logging

from i18n_extraction_tools.custom_exceptions import (
    ConfigurationError,
    ExtractionError,
    PersistenceError,
    TranslationError,
)


def test_translation_error(caplog):
    error = TranslationError("你好", "HTTP 500", "en")
    assert isinstance(error, ExtractionError)
    assert "HTTP 500" in str(error)
    assert "你好" in str(error)
    with caplog.at_level(logging.DEBUG):
        error.log_it()
    assert caplog.records[-1].levelno == 26
    assert caplog.records[-1].name == "i18n_extraction_tools.custom_exceptions"
    assert "TRANSLATION FAILED\ten\t你好\tHTTP 500" in caplog.text


def test_configuration_error():
    error = ConfigurationError("Configuration file not found", "/tmp/x.json")
    assert error.message == "Configuration file not found"
    assert "/tmp/x.json" in str(error)


def test_persistence_error():
    error = PersistenceError("lang/en.json", "disk full")
    assert str(error) == "Could not persist translation table\tlang/en.json\tdisk full"
