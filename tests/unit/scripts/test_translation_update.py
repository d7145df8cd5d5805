"""Tests for localekit.scripts.translation_update and extractor modules."""

import pytest
import yaml

from localekit.i18n import TranslationCatalog
from localekit.scripts import translation_update
from localekit.scripts.extractor import CatalogueOperation, MessageExtractor
from tests.factories.i18n import make_locales_manager


@pytest.fixture
def project(tmp_path):
    """Project with templates, sources and French messages."""
    (tmp_path / "templates").mkdir()
    (tmp_path / "templates" / "index.html").write_text(
        '<h1>{{ "hello"|trans }}</h1>\n<p>{% trans %}Goodbye{% endtrans %}</p>\n'
    )
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text('print(_("welcome"))\n')
    (tmp_path / "translations").mkdir()
    with open(tmp_path / "translations" / "messages.fr.yml", "w") as f:
        yaml.dump({"hello": "Bonjour", "old": "Ancien"}, f)
    return tmp_path


@pytest.fixture(autouse=True)
def locales_manager(monkeypatch):
    monkeypatch.setattr(
        translation_update, "create_locales_manager", lambda: make_locales_manager()
    )


def read_messages(project):
    with open(project / "translations" / "messages.fr.yml", encoding="utf-8") as f:
        return yaml.safe_load(f)


class TestMessageExtractor:
    """Tests for MessageExtractor."""

    def test_extract_text(self):
        text = (
            '_("a") gettext(\'b\') translator.trans("c") translate("d")\n'
            '{{ "e"|trans }} {% trans %} f {% endtrans %} ngettext("x")'
        )
        assert MessageExtractor().extract_text(text) == ["a", "b", "c", "d", "e", "f"]

    def test_escaped_quotes(self):
        assert MessageExtractor().extract_text(r'_("say \"hi\"")') == ['say "hi"']

    def test_prefix_is_applied_to_messages(self, project):
        catalog = MessageExtractor("__").extract(project / "src", TranslationCatalog("fr"))
        assert catalog.get("welcome") == "__welcome"


class TestCatalogueOperation:
    """Tests for CatalogueOperation."""

    def make_catalogs(self):
        source = TranslationCatalog("fr", {"messages": {"hello": "Bonjour", "old": "Ancien"}})
        target = TranslationCatalog("fr", {"messages": {"hello": "hello", "new": "new"}})
        return source, target

    def test_merge(self):
        operation = CatalogueOperation(*self.make_catalogs())
        assert operation.get_messages("messages") == {
            "hello": "Bonjour",
            "old": "Ancien",
            "new": "new",
        }
        assert operation.get_new_messages("messages") == {"new": "new"}
        assert operation.get_obsolete_messages("messages") == {}

    def test_clean(self):
        operation = CatalogueOperation(*self.make_catalogs(), clean=True)
        assert operation.get_messages("messages") == {"hello": "Bonjour", "new": "new"}
        assert operation.get_obsolete_messages("messages") == {"old": "Ancien"}


class TestTranslationUpdate:
    """Tests for the translation update command."""

    def test_force_writes_merged_messages(self, project):
        code = translation_update.main(
            ["--locale", "fr", "--force", "--base-path", str(project)]
        )

        assert code == 0
        assert read_messages(project) == {
            "hello": "Bonjour",
            "old": "Ancien",
            "welcome": "welcome",
            "Goodbye": "Goodbye",
        }
        assert (project / "translations" / "messages.fr.yml~").exists()

    def test_clean_and_prefix(self, project):
        translation_update.main(
            [
                "--locale", "fr",
                "--force",
                "--clean",
                "--no-backup",
                "--prefix", "__",
                "--base-path", str(project),
            ]
        )

        assert read_messages(project) == {
            "hello": "Bonjour",
            "welcome": "__welcome",
            "Goodbye": "__Goodbye",
        }
        assert not (project / "translations" / "messages.fr.yml~").exists()

    def test_dump_messages_does_not_write(self, project, capsys):
        code = translation_update.main(
            ["--locale", "fr", "--dump-messages", "--base-path", str(project)]
        )

        out = capsys.readouterr().out
        assert code == 0
        assert 'Messages extracted for domain "messages" (4 messages)' in out
        assert "+ welcome" in out
        assert "4 messages were successfully extracted." in out
        assert read_messages(project) == {"hello": "Bonjour", "old": "Ancien"}

    def test_dump_messages_with_clean_lists_obsolete(self, project, capsys):
        translation_update.main(
            ["--locale", "fr", "--dump-messages", "--clean", "--base-path", str(project)]
        )
        assert "- old" in capsys.readouterr().out

    def test_force_or_dump_required(self, project):
        with pytest.raises(SystemExit) as exc_info:
            translation_update.main(["--locale", "fr", "--base-path", str(project)])
        assert exc_info.value.code == 2

    def test_unknown_locale_rejected(self, project):
        with pytest.raises(SystemExit):
            translation_update.main(
                ["--locale", "de", "--force", "--base-path", str(project)]
            )

    def test_unsupported_output_format_rejected(self, project):
        with pytest.raises(SystemExit):
            translation_update.main(
                ["--locale", "fr", "--force", "--output-format", "xlf", "--base-path", str(project)]
            )

    def test_bad_output_path_rejected(self, project):
        with pytest.raises(SystemExit):
            translation_update.main(
                ["--locale", "fr", "--force", "--output-path", "missing", "--base-path", str(project)]
            )

    def test_no_messages(self, tmp_path, capsys):
        code = translation_update.main(
            ["--locale", "fr", "--force", "--base-path", str(tmp_path)]
        )
        assert code == 0
        assert "No translation messages were found." in capsys.readouterr().err
