from unittest.mock import Mock

import pytest

from localekit.i18n import TranslationFactory, Translator
from tests.factories.i18n import make_locales_manager


@pytest.fixture
def manager():
    """LocalesManager with "en" (default) and "fr", falling back to "en"."""
    return make_locales_manager()


@pytest.fixture
def factory(manager):
    return TranslationFactory(manager)


@pytest.fixture
def translator(manager, factory):
    """Translator with a few English and French messages."""
    translator = Translator(manager, factory)
    translator.add_resource(
        {
            "hello": "Hello",
            "greeting": "Hello %name%",
            "only_en": "English only",
            "apples": "{0} No apples|{1} One apple|]1,Inf] %count% apples",
        },
        "en",
    )
    translator.add_resource(
        {
            "hello": "Bonjour",
            "greeting": "Bonjour %name%",
            "apples": "{0} Aucune pomme|{1} Une pomme|]1,Inf] %count% pommes",
        },
        "fr",
    )
    return translator


@pytest.fixture
def system_locale_setter():
    return Mock()
