"""
Extract translation strings from templates and sources.

Messages found in templates/, views/ and src/ are merged with the messages of
translations/. The result can be displayed or written back to the translation
files.

Usage:
    localekit-translation-update --locale fr --dump-messages
    localekit-translation-update --locale fr --force --prefix "__"

    # Drop messages no longer found in the sources:
    localekit-translation-update --locale fr --force --clean
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from localekit.core.logging import get_module_logger
from localekit.i18n.errors import ConfigError
from localekit.i18n.formatter import MessageFormatter
from localekit.i18n.loader import YAMLTranslationLoader
from localekit.i18n.models import TranslationCatalog
from localekit.i18n.writer import YAMLTranslationWriter
from localekit.scripts.extractor import CatalogueOperation, MessageExtractor
from localekit.services.providers import create_locales_manager

logger = get_module_logger()

TRANSLATIONS_DIR = "translations"
VIEWS_DIRS = ("templates", "views", "src")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="localekit-translation-update",
        description=(
            "Extracts translation strings from templates. "
            "Translations can be displayed or merged into translation files."
        ),
    )
    parser.add_argument("--locale", required=True, help="The locale.")
    parser.add_argument("--domain", help="The domain to update.")
    parser.add_argument(
        "--output-path",
        help="The directory where to load and update the messages.",
    )
    parser.add_argument(
        "--output-format",
        default="yml",
        help="Override the default output format.",
    )
    parser.add_argument(
        "--prefix",
        default="",
        help="Add a prefix to the messages of new translation strings.",
    )
    parser.add_argument(
        "--dump-messages",
        action="store_true",
        help="Dump the messages in the console.",
    )
    parser.add_argument(
        "--force", action="store_true", help="Update the translation file(s)."
    )
    parser.add_argument(
        "--no-backup",
        action="store_true",
        help="Disable backups for translation files.",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Purge messages not found in templates.",
    )
    parser.add_argument(
        "--base-path",
        default=".",
        help="Project directory holding translations/ and the templates.",
    )
    return parser


def filter_catalog(catalog: TranslationCatalog, domain: str) -> TranslationCatalog:
    """Keep only the messages of one domain."""
    filtered = TranslationCatalog(locale=catalog.locale, loaded_at=catalog.loaded_at)
    if domain in catalog.messages:
        filtered.add(catalog.all(domain), domain)
    return filtered


def dump_messages(operation: CatalogueOperation, formatter: MessageFormatter) -> int:
    """Print the messages of every domain, new ones with "+" and obsolete ones with "-"."""
    total = 0
    for domain in operation.domains():
        new_ids = list(operation.get_new_messages(domain))
        all_ids = list(operation.get_messages(domain))
        obsolete_ids = list(operation.get_obsolete_messages(domain))

        lines = [f"  {message_id}" for message_id in all_ids if message_id not in new_ids]
        lines += [f"+ {message_id}" for message_id in new_ids]
        lines += [f"- {message_id}" for message_id in obsolete_ids]

        count = formatter.choice_format("%count% message|%count% messages", len(lines), "en")
        print(f'Messages extracted for domain "{domain}" ({count})')
        for line in lines:
            print(line)
        print()
        total += len(lines)
    return total


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.force and not args.dump_messages:
        parser.error("You must choose one of --force or --dump-messages")

    writer = YAMLTranslationWriter()
    if args.output_format not in writer.formats():
        parser.error(
            f"Wrong output format, must be one of: {', '.join(writer.formats())}."
        )

    try:
        manager = create_locales_manager()
    except ConfigError as e:
        logger.error("invalid_locales_configuration", error=str(e))
        print(f"Invalid locales configuration: {e}", file=sys.stderr)
        return 1

    if not manager.has_locale(args.locale):
        parser.error(
            f"Invalid locale {args.locale!r}, must be one of: "
            f"{', '.join(manager.available_locales())}."
        )

    base_path = Path(args.base_path)
    project_name = "Project"
    root = base_path
    if args.output_path:
        root = base_path / args.output_path.rstrip("/")
        if not root.is_dir():
            parser.error(f"Bad output path: {args.output_path}")
        project_name = args.output_path

    trans_path = root / TRANSLATIONS_DIR
    views_paths = [root / name for name in VIEWS_DIRS]

    print(f'Generating "{args.locale}" translation files for "{project_name}"')

    extracted = TranslationCatalog(locale=args.locale)
    extractor = MessageExtractor(args.prefix)
    for path in views_paths:
        if path.is_dir():
            extractor.extract(path, extracted)

    current = TranslationCatalog(locale=args.locale)
    if trans_path.is_dir():
        YAMLTranslationLoader(trans_path, use_cache=False).read(current)

    if args.domain:
        current = filter_catalog(current, args.domain)
        extracted = filter_catalog(extracted, args.domain)

    operation = CatalogueOperation(current, extracted, clean=args.clean)

    if not operation.domains():
        print("No translation messages were found.", file=sys.stderr)
        return 0

    formatter = MessageFormatter()
    result = "Translation files were successfully updated"

    if args.dump_messages:
        total = dump_messages(operation, formatter)
        result = formatter.choice_format(
            "%count% message was successfully extracted"
            "|%count% messages were successfully extracted",
            total,
            "en",
        )

    if args.no_backup:
        writer.disable_backup()

    if args.force:
        written = writer.write(operation.result(), trans_path, args.output_format)
        logger.info(
            "translation_update_completed",
            locale=args.locale,
            files=[str(path) for path in written],
        )
        if args.dump_messages:
            result += " and translation files were updated"

    print(f"{result}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
