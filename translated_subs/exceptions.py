class SubtitleAddonError(Exception):
    """Base exception for subtitle addon errors."""
    pass


class ConfigError(SubtitleAddonError):
    """Raised when required configuration is missing or malformed."""
    pass


class UpstreamUnavailable(SubtitleAddonError):
    """Raised when the subtitle index or a subtitle file cannot be reached (transport error or non-2xx)."""
    pass


class NoContentFound(SubtitleAddonError):
    """Raised when the index has no entries in either the target or the source language."""
    pass


class TranslationFailed(SubtitleAddonError):
    """Raised when the translation call errors or returns unusable output."""
    pass


class SchemaError(SubtitleAddonError):
    """Raised when an upstream response body is missing required fields."""
    pass
