import i18n

from i18n_extraction_tools.logging_config import get_logger

logger = get_logger(__name__)


class ExtractionError(Exception):
    pass


class ConfigurationError(ExtractionError):
    """Raised when the configuration can not be loaded or validated.
    This error should take the process to a halt before any table is touched."""

    def __init__(
        self,
        message="Critical configuration issue. Extraction halted.",
        data_value="",
    ):
        self.message = message
        self.data_value = data_value
        super().__init__(self.message)

    def __str__(self):
        return (
            i18n.t("Critical configuration issue. Check the configuration file and flags")
            + f"\t{self.message}\t{self.data_value}"
        )


class TranslationError(ExtractionError):
    """Raised when a single key could not be translated. The issue is not critical,
    the key keeps its current value and the batch continues"""

    def __init__(self, key="", message="", to_language=""):
        self.key = key or ""
        self.message = message
        self.to_language = to_language
        super().__init__(self.message)

    def __str__(self):
        return (
            i18n.t("Translation failed. The key keeps its current value. ")
            + f"\t{self.to_language}\t{self.key}\t{self.message}"
        )

    def log_it(self):
        logger.data_issues(
            "TRANSLATION FAILED\t%s\t%s\t%s",
            self.to_language,
            self.key,
            self.message,
        )


class PersistenceError(ExtractionError):
    """Raised when a translation table can not be read or written.
    Reported per module and language, other tables are not rolled back"""

    def __init__(self, file_path, message=""):
        self.file_path = file_path
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return f"Could not persist translation table\t{self.file_path}\t{self.message}"
