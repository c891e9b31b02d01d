"""
Types package for language tag processing.

This package contains subtag value types, result types, configuration and
error classes used throughout the package.
"""

from wsid.types.config import TagConfig
from wsid.types.errors import ErrorKind, UsageError, ValidationError
from wsid.types.results import ParseResult, Subtags, TagCodes
from wsid.types.subtags import LanguageSubtag, RegionSubtag, ScriptSubtag, Subtag, VariantSubtag

__all__ = [
    "ErrorKind",
    "LanguageSubtag",
    "ParseResult",
    "RegionSubtag",
    "ScriptSubtag",
    "Subtag",
    "Subtags",
    "TagCodes",
    "TagConfig",
    "UsageError",
    "ValidationError",
    "VariantSubtag",
]
