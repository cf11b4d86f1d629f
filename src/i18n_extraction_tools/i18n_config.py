from pathlib import Path

import i18n

settings = {
    "file_format": "json",
    "skip_locale_root_data": True,
    "fallback": "en",
    "filename_format": "{locale}.{format}",
}
TRANSLATIONS_PATH = Path(__file__).parent / "translations"


def setup_i18n(locale: str = "en"):
    """Points python-i18n at the bundled message catalog."""
    for setting, value in settings.items():
        i18n.set(setting, value)
    if str(TRANSLATIONS_PATH) not in i18n.load_path:
        i18n.load_path.append(str(TRANSLATIONS_PATH))
    i18n.set("locale", locale)
