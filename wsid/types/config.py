"""
Immutable configuration for language tag processing.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace

from wsid.subtag_data import (
    ICU_VARIANTS,
    LEGACY_DIGIT_LETTERS,
    PRIVATE_USE_MARKER,
    PRIVATE_USE_REGION,
    PRIVATE_USE_SCRIPT,
    UNLISTED_LANGUAGE,
)


@dataclass(frozen=True)
class TagConfig:
    """Immutable configuration containing all static data - case class style."""

    # Registry data shipped inside the package
    data_package: str
    registry_file: str

    # Private-use handling
    private_use_marker: str
    unlisted_language: str
    private_use_script: str
    private_use_region: str
    max_private_use_length: int

    # Grammar limits
    max_language_length: int
    max_legacy_language_length: int
    max_extlangs: int

    # ICU bridge tables
    legacy_digit_letters: Mapping[int, str]
    icu_variants: Mapping[str, tuple[str, ...]]

    @classmethod
    def create_default(cls) -> TagConfig:
        """Factory method to create default configuration."""
        return cls(
            data_package="wsid.data",
            registry_file="language-subtag-registry.txt",
            private_use_marker=PRIVATE_USE_MARKER,
            unlisted_language=UNLISTED_LANGUAGE,
            private_use_script=PRIVATE_USE_SCRIPT,
            private_use_region=PRIVATE_USE_REGION,
            max_private_use_length=40,
            max_language_length=8,
            # 2-3 letters, not the 2-8 of a tag language: dash-separated legacy ids
            # such as "xkal-Latn" go through ICU decomposition ("qaa-Latn-x-kal")
            # instead of coming back unchanged.
            max_legacy_language_length=3,
            max_extlangs=3,
            legacy_digit_letters=LEGACY_DIGIT_LETTERS,
            icu_variants=ICU_VARIANTS,
        )

    def with_registry_file(self, registry_file: str, data_package: str | None = None) -> TagConfig:
        """Immutable update method for the registry location."""
        return replace(self, registry_file=registry_file, data_package=data_package or self.data_package)
