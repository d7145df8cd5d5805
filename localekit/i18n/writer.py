"""YAML writer for message catalogues."""

import shutil
from pathlib import Path
from typing import List

import yaml

from localekit.core.logging import get_module_logger
from localekit.i18n.models import TranslationCatalog

logger = get_module_logger()


class YAMLTranslationWriter:
    """Writes a catalogue as one <domain>.<locale>.<format> file per domain.

    Files about to be replaced are copied to "<name>~" unless backups are disabled.
    """

    FORMATS = ("yml", "yaml")

    def __init__(self, backup: bool = True):
        self.backup = backup

    def formats(self) -> List[str]:
        """Get the supported output formats."""
        return list(self.FORMATS)

    def disable_backup(self) -> None:
        """Do not keep a copy of replaced files."""
        self.backup = False

    def write(
        self,
        catalog: TranslationCatalog,
        path: Path,
        output_format: str = "yml",
    ) -> List[Path]:
        """Write the catalogue.

        Args:
            catalog: Catalogue to write.
            path: Destination directory, created if missing.
            output_format: One of formats().

        Returns:
            The written files.

        Raises:
            ValueError: If the format is not supported.
        """
        if output_format not in self.FORMATS:
            raise ValueError(
                f"Wrong output format, must be one of: {', '.join(self.FORMATS)}."
            )

        directory = Path(path)
        directory.mkdir(parents=True, exist_ok=True)

        written = []
        for domain in catalog.domains():
            target = directory / f"{domain}.{catalog.locale}.{output_format}"
            if self.backup and target.exists():
                shutil.copyfile(target, target.with_name(target.name + "~"))

            with open(target, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    catalog.all(domain),
                    f,
                    allow_unicode=True,
                    default_flow_style=False,
                    sort_keys=True,
                )
            written.append(target)

        logger.info(
            "wrote_translations",
            locale=catalog.locale,
            path=str(directory),
            file_count=len(written),
        )
        return written
