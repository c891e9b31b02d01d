"""
Result types for language tag processing.

Parsing arbitrary input routinely fails, so the parsing entry points report
failure through an Either-like ParseResult instead of raising.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from wsid.types.errors import ErrorKind, UsageError, ValidationError
from wsid.types.subtags import LanguageSubtag, RegionSubtag, ScriptSubtag, VariantSubtag


@dataclass(frozen=True)
class Subtags:
    """Typed components of a language tag."""

    language: LanguageSubtag | None
    script: ScriptSubtag | None = None
    region: RegionSubtag | None = None
    variants: tuple[VariantSubtag, ...] = ()


@dataclass(frozen=True)
class TagCodes:
    """Plain-string components of a language tag."""

    language: str | None
    script: str | None
    region: str | None
    variants: str | None


@dataclass(frozen=True)
class ParseResult:
    """Result of a parsing operation - Either-like structure."""

    success: bool
    result: Any = None
    error_message: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def success_with(cls, result: Any) -> ParseResult:
        return cls(success=True, result=result)

    @classmethod
    def failure(cls, error_message: str, error_kind: ErrorKind = ErrorKind.GRAMMAR) -> ParseResult:
        return cls(success=False, result=None, error_message=error_message, error_kind=error_kind)

    def map(self, f) -> ParseResult:
        """Transform a successful result; tag errors raised by ``f`` become failures."""
        if self.success:
            try:
                return ParseResult.success_with(f(self.result))
            except (ValidationError, UsageError) as e:
                return ParseResult.failure(str(e), e.kind)
        return self

    def flat_map(self, f) -> ParseResult:
        """Chain another result-returning step onto a successful result."""
        if self.success:
            try:
                return f(self.result)
            except (ValidationError, UsageError) as e:
                return ParseResult.failure(str(e), e.kind)
        return self

    def unwrap(self) -> Any:
        """Return the result, raising the error matching ``error_kind`` on failure."""
        if self.success:
            return self.result
        if self.error_kind is ErrorKind.USAGE:
            raise UsageError(self.error_message)
        raise ValidationError(self.error_message)
