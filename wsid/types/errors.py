"""
Error types for language tag processing.

Two kinds of failure are kept apart throughout the package:

- **GRAMMAR**: the resulting tag would be malformed. A subtag is off its
  grammar or not registered, a language is missing, or a stray private-use
  marker was supplied.
- **USAGE**: the request is well-formed but does not make sense in context,
  e.g. adding a token that is already present or passing characters outside
  the token alphabet.

Neither exception derives from the other, so callers can tell them apart.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Tag attached to every failure raised or reported by this package."""

    GRAMMAR = "grammar"
    USAGE = "usage"


class ValidationError(ValueError):
    """The tag that would result is not a well-formed, registered RFC 5646 tag."""

    kind = ErrorKind.GRAMMAR


class UsageError(ValueError):
    """The operation is redundant or meaningless for the current tag."""

    kind = ErrorKind.USAGE
