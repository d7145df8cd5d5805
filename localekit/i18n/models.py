"""Locale and catalogue models for the i18n system.

Defines the core data structures for configured locales and message catalogues.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

DEFAULT_DOMAIN = "messages"


@dataclass(frozen=True)
class LocaleInfo:
    """A configured locale.

    Attributes:
        code: Language code (e.g., "en", "fr").
        locales: System locale strings for the language (e.g., "en_US.UTF8").
        active: Inactive locales are ignored by the locales manager.
        metadata: Any extra configuration (labels, flags, ...).
    """

    code: str
    locales: Tuple[str, ...] = ()
    active: bool = True
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_config(cls, code: str, data: Any = None) -> "LocaleInfo":
        """Create a LocaleInfo from a configuration entry.

        Args:
            code: Language code the entry is keyed by.
            data: Mapping of options, an existing LocaleInfo or None.

        Returns:
            LocaleInfo instance.

        Raises:
            ValueError: If data is neither a mapping, a LocaleInfo nor None.
        """
        if isinstance(data, LocaleInfo):
            return data
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError(f"Locale options for {code!r} must be a mapping")

        options = dict(data)
        system_locales = options.pop("locale", ())
        if isinstance(system_locales, str):
            system_locales = (system_locales,)
        active = bool(options.pop("active", True))

        return cls(
            code=code,
            locales=tuple(system_locales),
            active=active,
            metadata=options,
        )

    def __str__(self) -> str:
        return self.code


@dataclass
class TranslationCatalog:
    """Container for the messages of a single locale, grouped by domain.

    Attributes:
        locale: Language code this catalog is for.
        messages: Nested dict structure {domain: {message_id: message}}.
        loaded_at: Timestamp (ISO 8601) when messages were loaded.
    """

    locale: str
    messages: Dict[str, Dict[str, str]] = field(default_factory=dict)
    loaded_at: Optional[str] = None

    def get(self, message_id: str, domain: str = DEFAULT_DOMAIN) -> Optional[str]:
        """Retrieve a message, or None if it is not defined."""
        return self.messages.get(domain, {}).get(message_id)

    def set(self, message_id: str, message: str, domain: str = DEFAULT_DOMAIN) -> None:
        """Set a message."""
        self.messages.setdefault(domain, {})[message_id] = message

    def has(self, message_id: str, domain: str = DEFAULT_DOMAIN) -> bool:
        """Check if a message is defined in the domain."""
        return message_id in self.messages.get(domain, {})

    def add(self, messages: Mapping[str, str], domain: str = DEFAULT_DOMAIN) -> None:
        """Add several messages to a domain, replacing existing ones."""
        self.messages.setdefault(domain, {}).update(messages)

    def all(self, domain: str = DEFAULT_DOMAIN) -> Dict[str, str]:
        """Get a copy of all messages of a domain."""
        return dict(self.messages.get(domain, {}))

    def domains(self) -> list:
        """Get the domains defined in this catalog."""
        return list(self.messages.keys())

    def merge(self, other: "TranslationCatalog") -> None:
        """Merge another catalog into this one.

        Later entries override earlier ones.
        """
        for domain, messages in other.messages.items():
            self.add(messages, domain)
