"""
wsid: Writing System Identifiers

Parse, validate, edit and convert BCP 47 / RFC 5646 language tags, including
the private-use conventions used for unregistered languages and the bridge to
legacy ICU locale ids.
"""

__version__ = "0.1.0"

__all__ = ["IetfLanguageTag", "Rfc5646Tag", "UsageError", "ValidationError", "default_engine"]


def __getattr__(name):
    """Lazy import so the registry is only loaded when first needed."""
    if name in ("IetfLanguageTag", "default_engine"):
        from . import ietf

        return getattr(ietf, name)
    if name == "Rfc5646Tag":
        from .tag import Rfc5646Tag

        return Rfc5646Tag
    if name in ("UsageError", "ValidationError"):
        from .types import errors

        return getattr(errors, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
