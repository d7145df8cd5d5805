"""Process locale synchronization."""

import locale
from typing import Iterable, Optional

from localekit.core.logging import get_module_logger

logger = get_module_logger()


def apply_system_locale(candidates: Iterable[str]) -> Optional[str]:
    """Apply the first system locale the runtime accepts.

    Args:
        candidates: Ordered system locale strings (e.g. "fr_FR.UTF8").

    Returns:
        The applied locale string, or None if none was accepted.
    """
    tried = []
    for candidate in candidates:
        tried.append(candidate)
        try:
            locale.setlocale(locale.LC_ALL, candidate)
        except locale.Error:
            logger.debug("system_locale_rejected", locale=candidate)
            continue
        logger.debug("system_locale_applied", locale=candidate)
        return candidate

    if tried:
        logger.debug("no_system_locale_applied", candidates=tried)
    return None
