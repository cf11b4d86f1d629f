"""Machine translation of translation table values.

Translations are requested one key at a time. Each request is finished
before the next one starts, so the backend never sees more than one call
from a run, and a failing key does not affect the others.
"""

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Protocol

import httpx

from i18n_extraction_tools.custom_exceptions import TranslationError

if TYPE_CHECKING:
    from i18n_extraction_tools.extraction_report import ExtractionReport


class Translator(Protocol):
    def translate(self, from_language: str, to_language: str, text: str) -> str:
        ...


class LibreTranslateTranslator:
    """Translates through a LibreTranslate compatible /translate endpoint."""

    def __init__(
        self,
        url: str,
        api_key: str = "",
        timeout: float = 30.0,
        language_map: Optional[dict[str, str]] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.language_map = language_map or {}
        self.http_client = http_client or httpx.Client(timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        self.http_client.close()

    def backend_language(self, language: str) -> str:
        return self.language_map.get(language, language)

    def translate(self, from_language: str, to_language: str, text: str) -> str:
        payload = {
            "q": text,
            "source": self.backend_language(from_language),
            "target": self.backend_language(to_language),
            "format": "text",
        }
        if self.api_key:
            payload["api_key"] = self.api_key
        try:
            response = self.http_client.post(self.url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as status_error:
            raise TranslationError(
                text,
                f"HTTP {status_error.response.status_code}: {status_error.response.text}",
                to_language,
            ) from status_error
        except (httpx.HTTPError, httpx.InvalidURL) as http_error:
            raise TranslationError(
                text, f"{http_error.__class__.__name__}: {http_error}", to_language
            ) from http_error
        except ValueError as json_error:
            raise TranslationError(
                text, f"Invalid response: {json_error}", to_language
            ) from json_error
        if not isinstance(body, dict) or not isinstance(body.get("translatedText"), str):
            raise TranslationError(text, f"Unexpected response: {body}", to_language)
        return body["translatedText"]


def backfill(
    translator: Translator,
    from_language: str,
    to_language: str,
    keys: Iterable[str],
    report: Optional["ExtractionReport"] = None,
    report_section: str = "",
) -> dict[str, str]:
    """Translates the keys one by one and returns the successful translations.

    Failed keys are logged and left out of the result, so they keep whatever
    value the table already holds.

    Args:
        translator (Translator): The translation backend
        from_language (str): The base language
        to_language (str): The table language
        keys (Iterable[str]): Keys to translate, in order
        report (Optional[ExtractionReport]): Report to count translations in
        report_section (str): Report section to count in

    Returns:
        dict[str, str]: key -> translated value for every key that succeeded
    """
    translations: dict[str, str] = {}
    for key in keys:
        try:
            translated = translator.translate(from_language, to_language, key)
            if not translated:
                raise TranslationError(key, "Empty translation", to_language)
        except TranslationError as translation_error:
            translation_error.log_it()
            logging.warning(
                "Could not translate %s to %s: %s", key, to_language, translation_error.message
            )
            if report:
                report.add(report_section, "Translation failures")
            continue
        except httpx.HTTPError as http_error:
            TranslationError(key, str(http_error), to_language).log_it()
            logging.warning("Could not translate %s to %s: %s", key, to_language, http_error)
            if report:
                report.add(report_section, "Translation failures")
            continue
        except Exception as error:
            TranslationError(key, f"{error.__class__.__name__}: {error}", to_language).log_it()
            logging.warning(
                "Could not translate %s to %s: %s: %s",
                key,
                to_language,
                error.__class__.__name__,
                error,
            )
            if report:
                report.add(report_section, "Translation failures")
            continue
        logging.info("%s\t%s", key, translated)
        translations[key] = translated
        if report:
            report.add(report_section, "Keys translated")
    return translations
