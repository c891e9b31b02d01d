"""
Services package for language tag processing.

This package contains the service classes behind the public API, organized by
domain responsibility: registry loading, the tag grammar, token-list editing,
tag conversion and the ICU locale bridge.
"""

from wsid.services.conversion import LanguageTagConversionService
from wsid.services.grammar import LEGACY, STRICT, TagGrammar, TagMatch
from wsid.services.icu import IcuLocale, IcuLocaleService
from wsid.services.parts import PartGrammar, PartList
from wsid.services.registry import (
    RegistryInitializationService,
    SubtagRegistry,
    SubtagTable,
    expand_range,
    load_default_registry,
)
from wsid.types import ParseResult, Subtags, TagConfig

__all__ = [
    # Grammar
    "LEGACY",
    "STRICT",
    "TagGrammar",
    "TagMatch",
    # ICU bridge
    "IcuLocale",
    "IcuLocaleService",
    # Conversion
    "LanguageTagConversionService",
    # Types (re-exported for convenience)
    "ParseResult",
    "Subtags",
    "TagConfig",
    # Token lists
    "PartGrammar",
    "PartList",
    # Registry
    "RegistryInitializationService",
    "SubtagRegistry",
    "SubtagTable",
    "expand_range",
    "load_default_registry",
]
