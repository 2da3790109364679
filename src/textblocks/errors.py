"""Exception types raised by textblocks.

Only configuration problems are reported with these types. Exceptions
raised by caller-supplied line or block parsers are propagated unchanged.
"""

from __future__ import annotations


class TextBlocksError(Exception):
    """Base class for all textblocks errors."""


class ConfigurationError(TextBlocksError, ValueError):
    """Raised when a delimiter or settings value cannot be used."""


class DelimiterNotImplementedError(ConfigurationError, NotImplementedError):
    """Raised when a delimiter strategy exists but is not implemented yet."""
