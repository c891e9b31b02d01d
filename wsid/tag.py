"""
The RFC 5646 tag entity.

An ``Rfc5646Tag`` owns the five components of a language tag and keeps them
consistent across edits:

- Script, Region and Variant require a Language.
- Language and PrivateUse cannot both be empty.
- Every component fits its grammar and, apart from PrivateUse, is registered.

Every setter and edit validates the complete new state before anything is
stored, so a failed call leaves the tag as it was.

```python
tag = Rfc5646Tag("en", "Latn", "US", "1901", "audio")
tag.complete_tag            # "en-Latn-US-1901-x-audio"
tag.add_to_variant("biske")
tag.variant                 # "1901-biske"
tag.remove_from_private_use("audio")
tag.private_use             # ""
```
"""
from __future__ import annotations

from wsid.services.grammar import TagGrammar, is_language_code, is_region_token, is_script_token
from wsid.services.parts import PartGrammar, PartList
from wsid.services.registry import SubtagRegistry, load_default_registry
from wsid.types import (
    LanguageSubtag,
    RegionSubtag,
    ScriptSubtag,
    TagConfig,
    ValidationError,
    VariantSubtag,
)


class Rfc5646Tag:
    """Mutable language tag whose components are validated on every change."""

    def __init__(
        self,
        language: str | None = "",
        script: str | None = "",
        region: str | None = "",
        variant: str | None = "",
        private_use: str | None = "",
        *,
        registry: SubtagRegistry | None = None,
        config: TagConfig | None = None,
    ):
        self._config = config or TagConfig.create_default()
        self._registry = registry or load_default_registry()
        self._language = ""
        self._script = ""
        self._region = ""
        self._variant = PartList(PartGrammar.variant(self._registry, self._config))
        self._private_use = PartList(PartGrammar.private_use(self._config))
        self._commit(
            language=self._checked_language(language),
            script=self._checked_script(script),
            region=self._checked_region(region),
            variant=self._variant.replace(variant),
            private_use=self._private_use.replace(private_use),
        )

    @classmethod
    def parse(
        cls,
        tag: str,
        *,
        registry: SubtagRegistry | None = None,
        config: TagConfig | None = None,
    ) -> Rfc5646Tag:
        """
        Build a tag from its string form.

        Raises:
            ValidationError: if ``tag`` is not a tag this entity can hold.
        """
        match = TagGrammar.strict(config).match(tag)
        if match is None:
            raise ValidationError(f"'{tag}' is not a valid RFC 5646 language tag")
        if match.extension is not None:
            raise ValidationError(f"extension '{match.extension}' in '{tag}' is not supported")
        return cls(
            match.language,
            match.script,
            match.region,
            match.variant,
            match.private_use,
            registry=registry,
            config=config,
        )

    @classmethod
    def from_subtags(
        cls,
        language: LanguageSubtag | None,
        script: ScriptSubtag | None = None,
        region: RegionSubtag | None = None,
        variants=(),
    ) -> Rfc5646Tag:
        """Build a tag from typed subtags, writing custom codes in private use."""
        from wsid.ietf import default_engine

        engine = default_engine()
        return cls.parse(
            engine.to_language_tag(language, script, region, variants),
            registry=engine.registry,
            config=engine.config,
        )

    # ---- components ----

    @property
    def language(self) -> str:
        return self._language

    @language.setter
    def language(self, value: str | None):
        self._commit(language=self._checked_language(value))

    @property
    def script(self) -> str:
        return self._script

    @script.setter
    def script(self, value: str | None):
        self._commit(script=self._checked_script(value))

    @property
    def region(self) -> str:
        return self._region

    @region.setter
    def region(self, value: str | None):
        self._commit(region=self._checked_region(value))

    @property
    def variant(self) -> str:
        return str(self._variant)

    @variant.setter
    def variant(self, value: str | None):
        self._commit(variant=self._variant.replace(value))

    @property
    def private_use(self) -> str:
        """Private-use tokens with their "x-" marker, or "" when there are none."""
        return str(self._private_use)

    @private_use.setter
    def private_use(self, value: str | None):
        self._commit(private_use=self._private_use.replace(value))

    @property
    def complete_tag(self) -> str:
        parts = [self._language, self._script, self._region, self.variant, self.private_use]
        return "-".join(part for part in parts if part)

    # ---- token edits ----

    def add_to_variant(self, candidate: str):
        self._commit(variant=self._variant.add(candidate))

    def remove_from_variant(self, candidate: str):
        self._commit(variant=self._variant.remove(candidate))

    def variant_contains(self, token: str) -> bool:
        return self._variant.contains(token)

    def add_to_private_use(self, candidate: str):
        self._commit(private_use=self._private_use.add(candidate))

    def remove_from_private_use(self, candidate: str):
        """Remove tokens; raises ValidationError only if the tag would end up empty."""
        self._commit(private_use=self._private_use.remove(candidate))

    def private_use_contains(self, token: str) -> bool:
        return self._private_use.contains(token)

    # ---- typed views ----

    @property
    def language_subtag(self) -> LanguageSubtag | None:
        return self._registry.try_get_language(self._language)

    @property
    def script_subtag(self) -> ScriptSubtag | None:
        return self._registry.scripts.try_get(self._script)

    @property
    def region_subtag(self) -> RegionSubtag | None:
        return self._registry.regions.try_get(self._region)

    @property
    def variant_subtags(self) -> tuple[VariantSubtag, ...]:
        """Registered variants followed by private-use tokens as private-use variants."""
        subtags = [self._registry.variants.try_get(token) for token in self._variant]
        subtags += [
            self._registry.private_use_variants.try_get(token) or VariantSubtag(token, is_private_use=True)
            for token in self._private_use
        ]
        return tuple(subtags)

    # ---- validation ----

    def _checked_language(self, value: str | None) -> str:
        value = value or ""
        if value and not (
            is_language_code(value, self._config.max_language_length, self._config.max_extlangs)
            and self._registry.try_get_language(value) is not None
        ):
            raise ValidationError(f"'{value}' is not a valid language subtag")
        return value

    def _checked_script(self, value: str | None) -> str:
        value = value or ""
        if value and not (is_script_token(value) and value in self._registry.scripts):
            raise ValidationError(f"'{value}' is not a valid script subtag")
        return value

    def _checked_region(self, value: str | None) -> str:
        value = value or ""
        if value and not (is_region_token(value) and value in self._registry.regions):
            raise ValidationError(f"'{value}' is not a valid region subtag")
        return value

    def _commit(self, **changes):
        """Check the state after ``changes`` and store it only if it is consistent."""
        language = changes.get("language", self._language)
        script = changes.get("script", self._script)
        region = changes.get("region", self._region)
        variant = changes.get("variant", self._variant)
        private_use = changes.get("private_use", self._private_use)

        if not language:
            if script or region or variant:
                raise ValidationError("script, region and variant require a language subtag")
            if not private_use:
                raise ValidationError("a tag needs a language subtag or a private use subtag")

        self._language = language
        self._script = script
        self._region = region
        self._variant = variant
        self._private_use = private_use

    # ---- comparison ----

    def __eq__(self, other):
        if not isinstance(other, Rfc5646Tag):
            return NotImplemented
        return self.complete_tag.lower() == other.complete_tag.lower()

    __hash__ = None

    def __str__(self):
        return self.complete_tag

    def __repr__(self):
        return f"Rfc5646Tag({self.complete_tag!r})"
