"""
BCP 47 / RFC 5646 language tag engine.

``IetfLanguageTag`` is the entry point for parsing tags, generating them from
subtags and bridging to legacy ICU locale ids. It wires the registry, the
grammars and the conversion services together; the services themselves live in
``wsid.services``.

## Usage

```python
from wsid import IetfLanguageTag

engine = IetfLanguageTag()

result = engine.try_get_subtags("qaa-Latn-x-kal-etic")
# ParseResult(success=True, result=Subtags(language=kal, script=Latn, ...))

engine.icu_locale_to_language_tag("xkal__X_ETIC")
# "qaa-fonipa-x-kal-etic"

engine.language_tag_to_icu_locale("en-Latn-US-fonipa")
# "en_Latn_US_IPA"

engine.is_valid("en-bogus")
# False
```

Parsing entry points (``try_get_subtags``, ``try_get_variant_subtags``,
``get_codes``) return a ParseResult and never raise; generation entry points
raise ``UsageError`` for input that cannot be turned into a tag.
"""
from __future__ import annotations

from collections.abc import Iterable
from functools import cache

from wsid.services import (
    IcuLocaleService,
    LanguageTagConversionService,
    RegistryInitializationService,
    SubtagRegistry,
    TagGrammar,
    load_default_registry,
)
from wsid.tag import Rfc5646Tag
from wsid.types import (
    LanguageSubtag,
    ParseResult,
    RegionSubtag,
    ScriptSubtag,
    TagConfig,
    VariantSubtag,
)


class IetfLanguageTag:
    """Language tag engine with dependency injection of its services."""

    def __init__(self, config: TagConfig | None = None, registry: SubtagRegistry | None = None):
        self._config = config or TagConfig.create_default()
        if registry is None:
            if config is None:
                registry = load_default_registry()
            else:
                registry = RegistryInitializationService(self._config).initialize_registry()
        self._registry = registry

        self._strict = TagGrammar.strict(self._config)
        self._legacy = TagGrammar.legacy(self._config)
        self._conversion = LanguageTagConversionService(self._config, self._registry, self._strict)
        self._icu = IcuLocaleService(self._config, self._registry, self._conversion, self._legacy)

    @property
    def config(self) -> TagConfig:
        return self._config

    @property
    def registry(self) -> SubtagRegistry:
        return self._registry

    # ---- parsing ----

    def try_get_subtags(self, tag: str | None) -> ParseResult:
        return self._conversion.try_get_subtags(tag)

    def is_valid(self, tag: str | None) -> bool:
        return self._conversion.is_valid(tag)

    def get_codes(self, tag: str | None) -> ParseResult:
        return self._conversion.get_codes(tag)

    def try_get_variant_subtags(self, variant_codes: str | None) -> ParseResult:
        return self._conversion.try_get_variant_subtags(variant_codes)

    def get_variant_codes(self, variants: Iterable[VariantSubtag]) -> str | None:
        return self._conversion.get_variant_codes(variants)

    def split_variant_and_private_use(self, variant_and_private_use: str) -> tuple[str, str]:
        return self._conversion.split_variant_and_private_use(variant_and_private_use)

    def concatenate_variant_and_private_use(self, variant: str | None, private_use: str | None) -> str | None:
        return self._conversion.concatenate_variant_and_private_use(variant, private_use)

    # ---- generation ----

    def to_language_tag(
        self,
        language: LanguageSubtag | None,
        script: ScriptSubtag | None = None,
        region: RegionSubtag | None = None,
        variants: Iterable[VariantSubtag] = (),
    ) -> str:
        return self._conversion.to_language_tag(language, script, region, variants)

    def codes_to_language_tag(
        self,
        language: str | None,
        script: str | None = None,
        region: str | None = None,
        variant_codes: str | None = None,
    ) -> str:
        return self._conversion.codes_to_language_tag(language, script, region, variant_codes)

    # ---- ICU bridge ----

    def icu_locale_to_language_tag(self, icu_locale: str) -> str:
        return self._icu.icu_locale_to_language_tag(icu_locale)

    def to_icu_locale(
        self,
        language: LanguageSubtag | None,
        script: ScriptSubtag | None = None,
        region: RegionSubtag | None = None,
        variants: Iterable[VariantSubtag] = (),
    ) -> str:
        return self._icu.to_icu_locale(language, script, region, variants)

    def codes_to_icu_locale(
        self,
        language: str | None,
        script: str | None = None,
        region: str | None = None,
        variant_codes: str | None = None,
    ) -> str:
        return self._icu.codes_to_icu_locale(language, script, region, variant_codes)

    def language_tag_to_icu_locale(self, tag: str) -> str:
        return self._icu.language_tag_to_icu_locale(tag)

    # ---- entities ----

    def create_tag(
        self,
        language: str | None = "",
        script: str | None = "",
        region: str | None = "",
        variant: str | None = "",
        private_use: str | None = "",
    ) -> Rfc5646Tag:
        """Create a tag entity validated against this engine's registry."""
        return Rfc5646Tag(
            language, script, region, variant, private_use, registry=self._registry, config=self._config,
        )

    def parse_tag(self, tag: str) -> Rfc5646Tag:
        return Rfc5646Tag.parse(tag, registry=self._registry, config=self._config)


@cache
def default_engine() -> IetfLanguageTag:
    """Process-wide engine built from the default configuration."""
    return IetfLanguageTag()
