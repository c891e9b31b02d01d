"""
Subtag registry service.

This module loads the IANA language subtag registry shipped in ``wsid/data``
and builds immutable lookup tables for languages, extended languages, scripts,
regions and variants. The registry is built once per process and shared;
nothing mutates it after initialization.
"""
from __future__ import annotations

import string
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from functools import cache
from importlib.resources import files
from types import MappingProxyType
from typing import Generic, TypeVar

from wsid.paths import logger
from wsid.record_jar import Record, parse_record_jar
from wsid.subtag_data import COMMON_PRIVATE_USE_VARIANTS, PRIVATE_USE_REGIONS
from wsid.types import LanguageSubtag, RegionSubtag, ScriptSubtag, Subtag, TagConfig, VariantSubtag

T = TypeVar("T", bound=Subtag)

PRIVATE_USE_DESCRIPTION = "Private use"
RANGE_SEPARATOR = ".."


class SubtagTable(Generic[T]):
    """Read-only, case-insensitive table of subtags keyed by code."""

    __slots__ = ("_items", "_kind")

    def __init__(self, kind: str, subtags: Iterable[T]):
        self._kind = kind
        self._items = MappingProxyType({subtag.code.lower(): subtag for subtag in subtags})

    @property
    def kind(self) -> str:
        return self._kind

    def try_get(self, code: str | None) -> T | None:
        """Return the subtag registered under ``code``, or None."""
        if not code:
            return None
        return self._items.get(code.lower())

    def __contains__(self, code) -> bool:
        return isinstance(code, str) and code.lower() in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"SubtagTable({self._kind!r}, {len(self)} subtags)"


@dataclass(frozen=True)
class SubtagRegistry:
    """Immutable container for all registered subtags."""

    languages: SubtagTable[LanguageSubtag]
    extlangs: SubtagTable[LanguageSubtag]
    scripts: SubtagTable[ScriptSubtag]
    regions: SubtagTable[RegionSubtag]
    variants: SubtagTable[VariantSubtag]
    private_use_variants: SubtagTable[VariantSubtag]
    file_date: str | None = None

    def try_get_language(self, code: str | None) -> LanguageSubtag | None:
        """
        Resolve a language code that may carry extended language subtags ("zh-yue").

        The primary subtag must be a registered language and every extension a
        registered extlang; the result keeps the primary's metadata under the
        full code.
        """
        if not code:
            return None
        primary, *extlangs = code.split("-")
        language = self.languages.try_get(primary)
        if language is None or not all(extlang in self.extlangs for extlang in extlangs):
            return None
        return replace(language, code=code) if extlangs else language

    def is_private_use_script_code(self, code: str) -> bool:
        script = self.scripts.try_get(code)
        return script is not None and script.is_private_use

    def is_private_use_region_code(self, code: str) -> bool:
        region = self.regions.try_get(code)
        return region is not None and region.is_private_use


class RegistryInitializationService:
    """Service to build the subtag registry from record-jar data."""

    def __init__(self, config: TagConfig):
        self._config = config

    def initialize_registry(self) -> SubtagRegistry:
        """Read the registry file and build all lookup tables."""
        records = self._read_records()
        file_date = None
        by_type: dict[str, list[Record]] = {}
        for record in records:
            record_type = record.get_one("Type")
            if record_type is None:
                file_date = record.get_one("File-Date", file_date)
                continue
            by_type.setdefault(record_type, []).append(record)

        registry = SubtagRegistry(
            languages=SubtagTable("language", self._build(by_type.get("language", ()), self._language)),
            extlangs=SubtagTable("extlang", self._build(by_type.get("extlang", ()), self._language)),
            scripts=SubtagTable("script", self._build(by_type.get("script", ()), self._script)),
            regions=SubtagTable("region", self._build(by_type.get("region", ()), self._region)),
            variants=SubtagTable("variant", self._build(by_type.get("variant", ()), self._variant)),
            private_use_variants=SubtagTable(
                "private use variant",
                (VariantSubtag(code, name, is_private_use=True) for code, name in COMMON_PRIVATE_USE_VARIANTS.items()),
            ),
            file_date=file_date,
        )
        logger.info(
            f"Loaded subtag registry {file_date or '(undated)'}: "
            f"{len(registry.languages)} languages, {len(registry.extlangs)} extlangs, "
            f"{len(registry.scripts)} scripts, {len(registry.regions)} regions, "
            f"{len(registry.variants)} variants",
        )
        return registry

    def _read_records(self) -> list[Record]:
        resource = files(self._config.data_package).joinpath(self._config.registry_file)
        text = resource.read_text(encoding="utf-8")
        return list(parse_record_jar(text.splitlines()))

    def _build(self, records: Iterable[Record], factory) -> Iterator[Subtag]:
        for record in records:
            subtag = record.get_one("Subtag")
            if subtag is None:
                continue  # grandfathered and redundant records carry a whole Tag
            for code in expand_range(subtag):
                yield factory(code, record)

    @staticmethod
    def _common(record: Record) -> dict:
        name = record.first("Description")
        return {
            "name": name,
            "is_private_use": name == PRIVATE_USE_DESCRIPTION,
            "is_deprecated": "Deprecated" in record,
        }

    def _language(self, code: str, record: Record) -> LanguageSubtag:
        return LanguageSubtag(code, iso3_code=code if len(code) == 3 else None, **self._common(record))

    def _script(self, code: str, record: Record) -> ScriptSubtag:
        return ScriptSubtag(code, **self._common(record))

    def _region(self, code: str, record: Record) -> RegionSubtag:
        fields = self._common(record)
        fields["is_private_use"] = fields["is_private_use"] or code.upper() in PRIVATE_USE_REGIONS
        return RegionSubtag(code, **fields)

    def _variant(self, code: str, record: Record) -> VariantSubtag:
        return VariantSubtag(code, prefixes=tuple(record.get("Prefix", ())), **self._common(record))


def expand_range(subtag: str) -> list[str]:
    """
    Expand a registry range such as ``qaa..qtz`` into its member codes.

    Members keep the letter case of the range start ("Qaaa..Qabx" yields
    "Qaaa", "Qaab", ...). A plain subtag expands to itself.
    """
    if RANGE_SEPARATOR not in subtag:
        return [subtag]
    start, end = subtag.split(RANGE_SEPARATOR, 1)
    if len(start) != len(end) or not (start + end).isalpha():
        raise ValueError(f"unsupported subtag range {subtag!r}")

    def to_number(code: str) -> int:
        number = 0
        for ch in code.lower():
            number = number * 26 + string.ascii_lowercase.index(ch)
        return number

    def to_code(number: int) -> str:
        letters = []
        for template in reversed(start):
            number, digit = divmod(number, 26)
            letter = string.ascii_lowercase[digit]
            letters.append(letter.upper() if template.isupper() else letter)
        return "".join(reversed(letters))

    return [to_code(n) for n in range(to_number(start), to_number(end) + 1)]


@cache
def load_default_registry() -> SubtagRegistry:
    """Build the process-wide registry from the default configuration."""
    return RegistryInitializationService(TagConfig.create_default()).initialize_registry()
