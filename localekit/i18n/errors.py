"""Errors for the i18n package."""


class ConfigError(ValueError):
    """Raised when locales, options or collaborators are misconfigured.

    Configuration errors are fatal: they surface at construction time (or at
    the misconfigured call) and are never recovered internally.
    """


class NotConfiguredError(RuntimeError):
    """Raised when a collaborator is requested before it was installed."""
