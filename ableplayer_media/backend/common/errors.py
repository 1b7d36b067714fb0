from __future__ import annotations



class AblePlayerError(Exception):
    """Base for all ableplayer-media exceptions."""


class ConfigError(AblePlayerError):
    """Configuration related issues."""


class TemplateError(AblePlayerError):
    """Template rendering issues."""


class TemplateNotFoundError(TemplateError):
    """Raised when no template is registered under the requested name."""
