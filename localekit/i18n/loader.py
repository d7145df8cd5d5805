"""Translation loading interface and implementations.

Defines the contract for loading message catalogues and provides a YAML-based loader.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml

import structlog
from localekit.i18n.models import TranslationCatalog

logger = structlog.get_logger()

YAML_SUFFIXES = (".yml", ".yaml")


class TranslationLoader(ABC):
    """Abstract base for translation loaders."""

    @abstractmethod
    def load(self, locale: str) -> TranslationCatalog:
        """Load the messages of a locale.

        Raises:
            FileNotFoundError: If no translation files exist for the locale.
            ValueError: If the translation format is invalid.
        """
        pass

    @abstractmethod
    def load_all(self) -> Dict[str, TranslationCatalog]:
        """Load the messages of every locale found.

        Returns:
            Dict mapping language code to TranslationCatalog.
        """
        pass


def flatten_messages(data: Dict[Any, Any], prefix: str = "") -> Dict[str, str]:
    """Flatten nested mappings into dotted message ids."""
    result: Dict[str, str] = {}
    for key, value in data.items():
        message_id = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            result.update(flatten_messages(value, message_id))
        elif value is None:
            result[message_id] = ""
        else:
            result[message_id] = str(value)
    return result


def parse_filename(path: Path) -> Optional[tuple]:
    """Split "<domain>.<locale>.yml" into (domain, locale), or None."""
    if path.suffix not in YAML_SUFFIXES:
        return None
    parts = path.stem.split(".")
    if len(parts) < 2 or not parts[-1]:
        return None
    return ".".join(parts[:-1]), parts[-1]


class YAMLTranslationLoader(TranslationLoader):
    """Loader for YAML message files.

    Expects files named <domain>.<locale>.yml (or .yaml) in the translations
    directory, each holding a mapping of message id to message. Nested
    mappings produce dotted message ids.

    Attributes:
        translations_dir: Path to directory containing YAML files.
        cache: Cache of loaded catalogs (locale -> catalog).
    """

    def __init__(
        self,
        translations_dir: Path,
        use_cache: bool = True,
    ):
        """Initialize YAML translation loader.

        Args:
            translations_dir: Path to directory with YAML translation files.
            use_cache: Whether to cache loaded catalogs in memory.

        Raises:
            ValueError: If the directory does not exist.
        """
        self.translations_dir = Path(translations_dir)
        self.use_cache = use_cache
        self.cache: Dict[str, TranslationCatalog] = {}

        if not self.translations_dir.exists():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )

        logger.info(
            "initialized_yaml_loader",
            translations_dir=str(self.translations_dir),
            use_cache=use_cache,
        )

    def _files_for(self, locale: str) -> list:
        return sorted(
            path
            for suffix in YAML_SUFFIXES
            for path in self.translations_dir.glob(f"*.{locale}{suffix}")
        )

    def load(self, locale: str) -> TranslationCatalog:
        """Load the messages of a locale from YAML files.

        Raises:
            FileNotFoundError: If no YAML files found for locale.
            ValueError: If YAML parsing fails.
        """
        if self.use_cache and locale in self.cache:
            logger.info("loaded_from_cache", locale=locale)
            return self.cache[locale]

        yaml_files = self._files_for(locale)
        if not yaml_files:
            raise FileNotFoundError(
                f"No translation files found for locale {locale} in {self.translations_dir}"
            )

        catalog = TranslationCatalog(
            locale=locale, loaded_at=datetime.now(timezone.utc).isoformat()
        )
        self._read_files(catalog, yaml_files)

        logger.info(
            "loaded_translations",
            locale=locale,
            file_count=len(yaml_files),
            domain_count=len(catalog.messages),
        )

        if self.use_cache:
            self.cache[locale] = catalog

        return catalog

    def load_all(self, locales: Optional[Iterable[str]] = None) -> Dict[str, TranslationCatalog]:
        """Load the messages of every locale found in the directory.

        Args:
            locales: Optional restriction on the language codes to load.

        Raises:
            ValueError: If no translation files found at all.
        """
        locales_found = []
        for path in sorted(self.translations_dir.iterdir()):
            parsed = parse_filename(path)
            if parsed and parsed[1] not in locales_found:
                locales_found.append(parsed[1])

        if not locales_found:
            raise ValueError(f"No translation files found in {self.translations_dir}")

        if locales is not None:
            wanted = set(locales)
            locales_found = [locale for locale in locales_found if locale in wanted]

        result = {}
        for locale in locales_found:
            try:
                result[locale] = self.load(locale)
            except FileNotFoundError:
                logger.warning("could_not_load_locale", locale=locale)

        return result

    def read(self, catalog: TranslationCatalog) -> TranslationCatalog:
        """Merge the directory's messages for the catalog's locale into it.

        Missing files are not an error.
        """
        self._read_files(catalog, self._files_for(catalog.locale))
        return catalog

    def _read_files(self, catalog: TranslationCatalog, yaml_files: list) -> None:
        for yaml_file in yaml_files:
            domain, _ = parse_filename(yaml_file)
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error("yaml_parse_error", file=str(yaml_file), error=str(e))
                raise ValueError(f"Failed to parse {yaml_file}: {e}") from e

            if not data:
                continue
            if not isinstance(data, dict):
                logger.warning(
                    "invalid_yaml_format", file=str(yaml_file), expected="dict"
                )
                continue

            catalog.add(flatten_messages(data), domain)

    def clear_cache(self) -> None:
        """Clear all cached translations."""
        self.cache.clear()
        logger.info("cleared_translation_cache")
