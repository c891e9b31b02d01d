"""
Subtag value types.

A subtag is a code string plus registry metadata. Registered subtags are
created once by the registry loader and shared; private-use subtags are minted
on demand by whoever needs them. Equality is by code, case-insensitively, and
only between subtags of the same kind.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from wsid.types.errors import UsageError

if TYPE_CHECKING:
    from wsid.services.registry import SubtagRegistry


@dataclass(frozen=True, eq=False)
class Subtag:
    """Base class for language, script, region and variant subtags."""

    code: str
    name: str | None = None
    is_private_use: bool = False
    is_deprecated: bool = False

    def __post_init__(self):
        if not self.code:
            raise UsageError(f"{type(self).__name__} requires a code")

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.code.lower() == other.code.lower()

    def __hash__(self):
        return hash((type(self).__name__, self.code.lower()))

    def __str__(self):
        return self.code

    @property
    def display_name(self) -> str:
        return self.name or self.code

    @classmethod
    def from_code(cls, code: str | None, registry: SubtagRegistry | None = None):
        """
        Resolve a code through the registry, falling back to a private-use subtag.

        Returns None for an empty code.
        """
        if not code:
            return None
        if registry is None:
            from wsid.services.registry import load_default_registry

            registry = load_default_registry()
        subtag = cls._lookup(registry, code)
        if subtag is None:
            subtag = cls(code, is_private_use=True)
        return subtag

    @classmethod
    def _lookup(cls, registry: SubtagRegistry, code: str):
        raise NotImplementedError


@dataclass(frozen=True, eq=False)
class LanguageSubtag(Subtag):
    """
    A primary language, optionally with extended language subtags ("zh-yue").

    ``iso3_code`` is the ISO 639-3 identifier. The registry loader only fills it
    in for 3-letter subtags, which are their own ISO 639-3 code; the IANA
    registry has no mapping for 2-letter subtags, so callers that know one
    (e.g. "zh" used for Mandarin, "cmn") pass it explicitly.
    """

    iso3_code: str | None = None

    @classmethod
    def _lookup(cls, registry, code):
        return registry.languages.try_get(code)


@dataclass(frozen=True, eq=False)
class ScriptSubtag(Subtag):
    @classmethod
    def _lookup(cls, registry, code):
        return registry.scripts.try_get(code)


@dataclass(frozen=True, eq=False)
class RegionSubtag(Subtag):
    @property
    def display_name(self) -> str:
        # AA, ZZ and the QM..QZ/XA..XZ ranges all read "Private use"; show which one.
        if self.is_private_use and self.name:
            return f"{self.name} ({self.code})"
        return super().display_name

    @classmethod
    def _lookup(cls, registry, code):
        return registry.regions.try_get(code)


@dataclass(frozen=True, eq=False)
class VariantSubtag(Subtag):
    prefixes: tuple[str, ...] = ()

    @classmethod
    def _lookup(cls, registry, code):
        subtag = registry.variants.try_get(code)
        if subtag is None:
            subtag = registry.private_use_variants.try_get(code)
        return subtag
