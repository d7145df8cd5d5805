"""Message extraction from templates and sources.

Recognizes:
- calls: _("id"), gettext("id"), trans("id"), translate("id")
- template filters: {{ "id"|trans }}
- template blocks: {% trans %}id{% endtrans %}
"""

import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from localekit.core.logging import get_module_logger
from localekit.i18n.models import DEFAULT_DOMAIN, TranslationCatalog

logger = get_module_logger()

EXTENSIONS = (".html", ".jinja", ".jinja2", ".j2", ".py")

_CALL_RE = re.compile(
    r"(?<!\w)(?:_|gettext|trans|translate)\(\s*(?P<q>['\"])(?P<id>(?:\\.|(?!(?P=q)).)+)(?P=q)",
    re.S,
)
_FILTER_RE = re.compile(
    r"(?P<q>['\"])(?P<id>(?:\\.|(?!(?P=q)).)+)(?P=q)\s*\|\s*trans\b",
)
_BLOCK_RE = re.compile(r"\{%-?\s*trans\s*-?%\}(?P<id>.*?)\{%-?\s*endtrans\s*-?%\}", re.S)


class MessageExtractor:
    """Collects message ids from files into a catalogue.

    New messages are stored with the prefix prepended to the id, so untranslated
    entries stand out in the written files.

    Attributes:
        prefix: Prefix of the messages of extracted ids.
    """

    def __init__(self, prefix: Optional[str] = None):
        self.prefix = prefix or ""

    def extract_text(self, text: str) -> List[str]:
        """Find the message ids in a text, in order of appearance."""
        found = []
        for regex in (_CALL_RE, _FILTER_RE, _BLOCK_RE):
            for match in regex.finditer(text):
                message_id = match.group("id").strip()
                if regex is not _BLOCK_RE:
                    message_id = re.sub(r"\\(.)", r"\1", message_id)
                if message_id and message_id not in found:
                    found.append(message_id)
        return found

    def files(self, path: Path) -> Iterable[Path]:
        path = Path(path)
        if path.is_file():
            return [path] if path.suffix in EXTENSIONS else []
        return sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in EXTENSIONS)

    def extract(
        self,
        path: Path,
        catalog: TranslationCatalog,
        domain: str = DEFAULT_DOMAIN,
    ) -> TranslationCatalog:
        """Extract the messages found under a path into the catalogue."""
        count = 0
        for file_path in self.files(path):
            try:
                text = file_path.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                logger.warning("skipped_unreadable_file", file=str(file_path))
                continue
            for message_id in self.extract_text(text):
                if not catalog.has(message_id, domain):
                    catalog.set(message_id, self.prefix + message_id, domain)
                    count += 1

        logger.info("extracted_messages", path=str(path), count=count)
        return catalog


class CatalogueOperation:
    """Combines an existing catalogue (source) with extracted messages (target).

    A merge keeps every existing message and adds the new ones. A clean
    operation also drops the existing messages that were not extracted, and
    reports them as obsolete.
    """

    def __init__(
        self,
        source: TranslationCatalog,
        target: TranslationCatalog,
        clean: bool = False,
    ):
        self.source = source
        self.target = target
        self.clean = clean
        self._result = TranslationCatalog(locale=source.locale)
        self._new: Dict[str, Dict[str, str]] = {}
        self._obsolete: Dict[str, Dict[str, str]] = {}
        self._process()

    def _process(self) -> None:
        for domain in self.domains():
            existing = self.source.all(domain)
            extracted = self.target.all(domain)

            new = {k: v for k, v in extracted.items() if k not in existing}
            if self.clean:
                kept = {k: v for k, v in existing.items() if k in extracted}
                obsolete = {k: v for k, v in existing.items() if k not in extracted}
            else:
                kept = existing
                obsolete = {}

            self._new[domain] = new
            self._obsolete[domain] = obsolete
            self._result.add({**kept, **new}, domain)

    def domains(self) -> List[str]:
        return list(dict.fromkeys(self.source.domains() + self.target.domains()))

    def get_messages(self, domain: str) -> Dict[str, str]:
        return self._result.all(domain)

    def get_new_messages(self, domain: str) -> Dict[str, str]:
        return dict(self._new.get(domain, {}))

    def get_obsolete_messages(self, domain: str) -> Dict[str, str]:
        return dict(self._obsolete.get(domain, {}))

    def result(self) -> TranslationCatalog:
        return self._result
