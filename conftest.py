import pytest

from i18n_extraction_tools.i18n_config import setup_i18n


@pytest.fixture(scope="session", autouse=True)
def install_l10n():
    setup_i18n("en")
