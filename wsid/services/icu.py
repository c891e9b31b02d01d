"""
ICU locale bridge.

Legacy writing-system data identifies languages with ICU locale ids such as
``en_Latn_US_X_ETIC`` or ``xkal__IPA``. This module decomposes such ids and
converts them to and from BCP 47 tags:

- A 4-letter language starting with "x" is a legacy private-use language;
  the "x" is dropped ("xkal" -> "kal").
- Over-long codes are truncated to 3 letters, except 4-letter codes starting
  with "e", and digits are remapped to letters (0 -> a, ..., 9 -> j). A code
  changed this way is always treated as private use.
- ICU variants map onto BCP 47 variants through a fixed table
  (``X_ETIC`` -> ``fonipa`` + private-use ``etic``, ``X_PY`` -> ``pinyin``, ...).
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from wsid.paths import logger
from wsid.services.conversion import LanguageTagConversionService
from wsid.services.grammar import TagGrammar, is_script_token
from wsid.services.registry import SubtagRegistry
from wsid.subtag_data import (
    ICU_IPA,
    ICU_PHONEMIC,
    ICU_PHONETIC,
    ICU_PINYIN,
    IPA_VARIANT,
    PHONEMIC_PRIVATE_USE,
    PHONETIC_PRIVATE_USE,
    PINYIN_VARIANT,
)
from wsid.types import (
    LanguageSubtag,
    RegionSubtag,
    ScriptSubtag,
    TagConfig,
    UsageError,
    VariantSubtag,
)

ICU_SEPARATOR = "_"
KEYWORD_SEPARATOR = "@"
LEGACY_PRIVATE_USE_PREFIX = "x"
EXTENDED_LANGUAGE_PREFIX = "e"


def _is_country(field: str) -> bool:
    return (len(field) == 2 and field.isascii() and field.isalpha()) or (
        len(field) == 3 and field.isascii() and field.isdigit()
    )


@dataclass(frozen=True)
class IcuLocale:
    """An ICU locale id split into its fields, in canonical case."""

    language: str
    script: str = ""
    country: str = ""
    variant: str = ""

    @classmethod
    def parse(cls, locale_id: str) -> IcuLocale:
        """
        Split ``language[_Script][_COUNTRY][_VARIANT]``; "-" is accepted as a separator
        and "@keywords" are discarded. An empty field keeps the country slot
        ("en__IPA" has no country and variant IPA).
        """
        locale_id = locale_id.split(KEYWORD_SEPARATOR, 1)[0].replace("-", ICU_SEPARATOR)
        fields = locale_id.split(ICU_SEPARATOR)
        language = fields[0].lower()
        rest = fields[1:]

        script = ""
        if rest and is_script_token(rest[0]):
            script = rest.pop(0).title()

        country = ""
        if rest and _is_country(rest[0]):
            country = rest.pop(0).upper()
        elif rest and not rest[0]:
            rest.pop(0)

        variant = ICU_SEPARATOR.join(field for field in rest if field).upper()
        return cls(language, script, country, variant)

    def __str__(self) -> str:
        fields = [self.language]
        if self.script:
            fields.append(self.script)
        if self.country or self.variant:
            fields.append(self.country)
        if self.variant:
            fields.append(self.variant)
        return ICU_SEPARATOR.join(fields)


class IcuLocaleService:
    """Service converting between ICU locale ids and BCP 47 tags."""

    def __init__(
        self,
        config: TagConfig,
        registry: SubtagRegistry,
        conversion: LanguageTagConversionService,
        legacy_grammar: TagGrammar,
    ):
        self._config = config
        self._registry = registry
        self._conversion = conversion
        self._legacy_grammar = legacy_grammar

    def icu_locale_to_language_tag(self, icu_locale: str) -> str:
        """
        Convert an ICU locale id to a BCP 47 tag.

        Dash-separated input that already is a tag comes back unchanged when its
        language is lower case; otherwise it is lower-cased and converted like
        any other ICU id.
        """
        if not icu_locale:
            raise UsageError("ICU locale is empty")

        if "-" in icu_locale and self._legacy_grammar.is_match(icu_locale):
            fields = icu_locale.split("-")
            if fields[0] == fields[0].lower():
                return icu_locale
            icu_locale = icu_locale.lower()

        locale = IcuLocale.parse(icu_locale)
        if not locale.language:
            raise UsageError(f"'{icu_locale}' has no language")

        language = self._language_subtag(locale.language)
        if locale.language == icu_locale:
            return self._conversion.to_language_tag(language)

        return self._conversion.to_language_tag(
            language,
            ScriptSubtag.from_code(locale.script, self._registry),
            RegionSubtag.from_code(locale.country, self._registry),
            self._variant_subtags(self.translate_variant_code(locale.variant)),
        )

    def _language_subtag(self, icu_language: str) -> LanguageSubtag:
        code = icu_language
        if len(code) == 4 and code.startswith(LEGACY_PRIVATE_USE_PREFIX):
            code = code[1:]
        if len(code) > 3 and not (len(code) == 4 and code.startswith(EXTENDED_LANGUAGE_PREFIX)):
            code = code[:3]
        code = code.translate(self._config.legacy_digit_letters)

        if code == icu_language:
            if len(code) == 4 and code.startswith(EXTENDED_LANGUAGE_PREFIX):
                code = code[1:]
            return LanguageSubtag.from_code(code, self._registry)

        if not icu_language.startswith(LEGACY_PRIVATE_USE_PREFIX) or code != icu_language[1:]:
            logger.warning(f"Legacy ICU language '{icu_language}' rewritten as private use language '{code}'")
        return LanguageSubtag(code, is_private_use=True)

    def translate_variant_code(self, variant_code: str | None) -> Iterator[str]:
        """Translate an ICU variant into variant codes; unknown parts pass through lower-cased."""
        if not variant_code:
            return
        translated = self._config.icu_variants.get(variant_code)
        if translated is not None:
            yield from translated
            return
        subcodes = [subcode for subcode in variant_code.split(ICU_SEPARATOR) if subcode]
        if len(subcodes) > 1:
            for subcode in subcodes:
                yield from self.translate_variant_code(subcode)
        else:
            yield variant_code.lower()

    def _variant_subtags(self, codes: Iterable[str]) -> list[VariantSubtag]:
        return [VariantSubtag.from_code(code, self._registry) for code in codes]

    def to_icu_locale(
        self,
        language: LanguageSubtag | None,
        script: ScriptSubtag | None = None,
        region: RegionSubtag | None = None,
        variants: Iterable[VariantSubtag] = (),
    ) -> str:
        """Build ``[x]language[_Script][_Region]`` plus at most one ICU variant."""
        if language is None:
            raise UsageError("a language is required for an ICU locale")

        locale = LEGACY_PRIVATE_USE_PREFIX + language.code if language.is_private_use else language.code
        if script is not None:
            locale += ICU_SEPARATOR + script.code
        if region is not None:
            locale += ICU_SEPARATOR + region.code

        icu_variant = self._icu_variant({variant.code for variant in variants})
        if icu_variant:
            separator = ICU_SEPARATOR if region is not None else ICU_SEPARATOR * 2
            locale += separator + icu_variant
        return locale

    @staticmethod
    def _icu_variant(variant_codes: set[str]) -> str | None:
        if IPA_VARIANT in variant_codes:
            if PHONETIC_PRIVATE_USE in variant_codes:
                return ICU_PHONETIC
            if PHONEMIC_PRIVATE_USE in variant_codes:
                return ICU_PHONEMIC
            return ICU_IPA
        if PINYIN_VARIANT in variant_codes:
            return ICU_PINYIN
        return None

    def codes_to_icu_locale(
        self,
        language: str | None,
        script: str | None = None,
        region: str | None = None,
        variant_codes: str | None = None,
    ) -> str:
        """to_icu_locale for plain codes."""
        if not language:
            raise UsageError("a language is required for an ICU locale")
        variants = self._conversion.try_get_variant_subtags(variant_codes)
        if not variants.success:
            raise UsageError(f"the variant codes '{variant_codes}' are invalid: {variants.error_message}")
        return self.to_icu_locale(*self._conversion.resolve_codes(language, script, region), variants.result)

    def language_tag_to_icu_locale(self, tag: str) -> str:
        """Parse a BCP 47 tag and convert it to an ICU locale id."""
        parsed = self._conversion.try_get_subtags(tag)
        if not parsed.success:
            raise UsageError(f"'{tag}' is not a valid RFC 5646 language tag")
        subtags = parsed.result
        return self.to_icu_locale(subtags.language, subtags.script, subtags.region, subtags.variants)
