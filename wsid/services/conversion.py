"""
Language tag conversion service.

Turns tag strings into typed subtags and back. Custom (unregistered)
languages, scripts and regions cannot appear in their own positions of a
BCP 47 tag, so they are written as the sentinels "qaa", "Qaaa" and "QM" and
their real codes are carried, in that order, at the start of the private-use
section::

    qaa-Qaaa-QM-x-kal-Fake-ZY-etic
"""
from __future__ import annotations

from collections.abc import Iterable

from wsid.services.grammar import SEPARATOR, TagGrammar, is_private_use_token, is_region_token, is_script_token
from wsid.services.registry import SubtagRegistry
from wsid.subtag_data import CHINESE, MAINLAND_CHINA, MANDARIN_ISO3
from wsid.types import (
    ErrorKind,
    LanguageSubtag,
    ParseResult,
    RegionSubtag,
    ScriptSubtag,
    Subtags,
    TagCodes,
    TagConfig,
    UsageError,
    VariantSubtag,
)


class LanguageTagConversionService:
    """Service for parsing tags into subtags and generating tags from subtags."""

    def __init__(self, config: TagConfig, registry: SubtagRegistry, grammar: TagGrammar):
        self._config = config
        self._registry = registry
        self._grammar = grammar
        self._marker = config.private_use_marker

    # ---- parsing ----

    def try_get_subtags(self, tag: str | None) -> ParseResult:
        """
        Parse ``tag`` into Subtags. Never raises.

        Sentinels consume private-use tokens: "qaa" takes the first one when it is
        a well-formed language code, "Qaaa" and "QM" likewise take the next one
        only when it is a well-formed script or region code.
        Tokens left over become private-use variants.
        """
        if not tag:
            return ParseResult.failure("language tag is empty", ErrorKind.USAGE)

        match = self._grammar.match(tag)
        if match is None:
            return ParseResult.failure(f"'{tag}' is not a valid RFC 5646 language tag")

        private_use_codes = match.private_use_codes

        language = None
        if match.language is not None:
            if match.language.lower() == self._config.unlisted_language:
                if private_use_codes and self._grammar.is_language_code(private_use_codes[0]):
                    language = LanguageSubtag(private_use_codes.pop(0), is_private_use=True)
                else:
                    language = self._registry.languages.try_get(match.language)
            else:
                language = self._registry.try_get_language(match.language)
            if language is None:
                return ParseResult.failure(f"'{match.language}' is not a registered language")

        script = None
        if match.script is not None:
            if self._is_sentinel(match.script, self._config.private_use_script, private_use_codes, is_script_token):
                script = ScriptSubtag(private_use_codes.pop(0), is_private_use=True)
            else:
                script = self._registry.scripts.try_get(match.script)
                if script is None:
                    return ParseResult.failure(f"'{match.script}' is not a registered script")

        region = None
        if match.region is not None:
            if self._is_sentinel(match.region, self._config.private_use_region, private_use_codes, is_region_token):
                region = RegionSubtag(private_use_codes.pop(0), is_private_use=True)
            else:
                region = self._registry.regions.try_get(match.region)
                if region is None:
                    return ParseResult.failure(f"'{match.region}' is not a registered region")

        variants = []
        for code in match.variant_codes:
            variant = self._registry.variants.try_get(code)
            if variant is None:
                return ParseResult.failure(f"'{code}' is not a registered variant")
            variants.append(variant)
        variants.extend(self._private_use_variant(code) for code in private_use_codes)

        return ParseResult.success_with(Subtags(language, script, region, tuple(variants)))

    def is_valid(self, tag: str | None) -> bool:
        return self.try_get_subtags(tag).success

    def get_codes(self, tag: str | None) -> ParseResult:
        """Parse ``tag`` into plain codes (TagCodes); variants are rendered by get_variant_codes."""
        return self.try_get_subtags(tag).map(
            lambda subtags: TagCodes(
                language=_code(subtags.language),
                script=_code(subtags.script),
                region=_code(subtags.region),
                variants=self.get_variant_codes(subtags.variants),
            ),
        )

    def try_get_variant_subtags(self, variant_codes: str | None) -> ParseResult:
        """Parse "variants[-x-privateuse]" into a tuple of VariantSubtag. Never raises."""
        if not variant_codes:
            return ParseResult.success_with(())

        standard, private_use = self.split_variant_and_private_use(variant_codes)
        variants = []
        for code in filter(None, standard.split(SEPARATOR)):
            variant = self._registry.variants.try_get(code)
            if variant is None:
                return ParseResult.failure(f"'{code}' is not a registered variant")
            variants.append(variant)
        variants.extend(self._private_use_variant(code) for code in filter(None, private_use.split(SEPARATOR)))
        return ParseResult.success_with(tuple(variants))

    @staticmethod
    def _is_sentinel(code: str, sentinel: str, private_use_codes: list[str], is_well_formed) -> bool:
        """Whether ``code`` is ``sentinel`` and the next private-use token can stand in for it."""
        return code.lower() == sentinel.lower() and bool(private_use_codes) and is_well_formed(private_use_codes[0])

    def _private_use_variant(self, code: str) -> VariantSubtag:
        return self._registry.private_use_variants.try_get(code) or VariantSubtag(code, is_private_use=True)

    # ---- variant strings ----

    def get_variant_codes(self, variants: Iterable[VariantSubtag]) -> str | None:
        """Registered variants first, then private-use variants after a single "x"."""
        variants = list(variants)
        if not variants:
            return None
        standard = [variant.code for variant in variants if not variant.is_private_use]
        private_use = [variant.code for variant in variants if variant.is_private_use]
        if private_use:
            standard += [self._marker, *private_use]
        return SEPARATOR.join(standard)

    def split_variant_and_private_use(self, variant_and_private_use: str) -> tuple[str, str]:
        """Split "1901-x-audio" into ("1901", "audio")."""
        lowered = variant_and_private_use.lower()
        prefix = f"{self._marker}{SEPARATOR}"
        if lowered.startswith(prefix):
            return "", variant_and_private_use[len(prefix):]
        infix = f"{SEPARATOR}{self._marker}{SEPARATOR}"
        index = lowered.find(infix)
        if index >= 0:
            return variant_and_private_use[:index], variant_and_private_use[index + len(infix):]
        return variant_and_private_use, ""

    def concatenate_variant_and_private_use(self, variant: str | None, private_use: str | None) -> str | None:
        """Inverse of split_variant_and_private_use; adds the "x-" marker when missing."""
        if not private_use:
            return variant
        prefix = f"{self._marker}{SEPARATOR}"
        if not private_use.lower().startswith(prefix):
            private_use = prefix + private_use
        if not variant:
            return private_use
        return f"{variant}{SEPARATOR}{private_use}"

    # ---- generation ----

    def to_language_tag(
        self,
        language: LanguageSubtag | None,
        script: ScriptSubtag | None = None,
        region: RegionSubtag | None = None,
        variants: Iterable[VariantSubtag] = (),
    ) -> str:
        """
        Build a tag from typed subtags, the inverse of try_get_subtags.

        A "zh" language whose ``iso3_code`` is "cmn" and that has no region gets
        the region "CN". Registry subtags for "zh" carry no ISO 639-3 code, so
        the caller has to supply it to get this default.

        Raises:
            UsageError: missing language, malformed custom code, or duplicate variant.
        """
        variants = list(variants)
        if language is None and (script is not None or region is not None or any(not v.is_private_use for v in variants)):
            raise UsageError("a language is required when script, region or registered variants are given")
        if language is None and not variants:
            raise UsageError("a language or at least one private use variant is required")

        parts = []
        private_use = []

        if language is not None:
            if language.is_private_use and language.code.lower() != self._config.unlisted_language:
                if not self._grammar.is_language_code(language.code):
                    raise UsageError(f"the private use language code '{language.code}' is invalid")
                parts.append(self._config.unlisted_language)
                private_use.append(language.code)
            else:
                parts.append(language.code)

        if script is not None:
            if script.is_private_use and not self._registry.is_private_use_script_code(script.code):
                if not is_script_token(script.code):
                    raise UsageError(f"the private use script code '{script.code}' is invalid")
                parts.append(self._config.private_use_script)
                private_use.append(script.code)
            else:
                parts.append(script.code)

        if region is not None:
            if region.is_private_use and not self._registry.is_private_use_region_code(region.code):
                if not is_region_token(region.code):
                    raise UsageError(f"the private use region code '{region.code}' is invalid")
                parts.append(self._config.private_use_region)
                private_use.append(region.code)
            else:
                parts.append(region.code)
        elif language is not None and language.code == CHINESE and language.iso3_code == MANDARIN_ISO3:
            parts.append(MAINLAND_CHINA)

        seen = set()
        for variant in variants:
            if variant.is_private_use:
                continue
            if variant.code in seen:
                raise UsageError(f"duplicate variant '{variant.code}'")
            seen.add(variant.code)
            parts.append(variant.code)

        for variant in variants:
            if not variant.is_private_use:
                continue
            if not is_private_use_token(variant.code, self._config.max_private_use_length):
                raise UsageError(f"the private use variant '{variant.code}' is invalid")
            private_use.append(variant.code)

        if private_use:
            parts += [self._marker, *private_use]
        return SEPARATOR.join(parts)

    def codes_to_language_tag(
        self,
        language: str | None,
        script: str | None = None,
        region: str | None = None,
        variant_codes: str | None = None,
    ) -> str:
        """to_language_tag for plain codes; unregistered codes are taken as private use."""
        variants = self.try_get_variant_subtags(variant_codes)
        if not variants.success:
            raise UsageError(f"the variant codes '{variant_codes}' are invalid: {variants.error_message}")
        return self.to_language_tag(*self.resolve_codes(language, script, region), variants.result)

    def resolve_codes(
        self,
        language: str | None,
        script: str | None,
        region: str | None,
    ) -> tuple[LanguageSubtag | None, ScriptSubtag | None, RegionSubtag | None]:
        return (
            self._registry.try_get_language(language) or LanguageSubtag.from_code(language, self._registry),
            ScriptSubtag.from_code(script, self._registry),
            RegionSubtag.from_code(region, self._registry),
        )


def _code(subtag) -> str | None:
    return subtag.code if subtag is not None else None
