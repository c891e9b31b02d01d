"""
Token-list editing for the Variant and PrivateUse fields of a tag.

Both fields are ordered, dash-joined lists of tokens. A PartList is an
immutable snapshot of one of them; every edit returns a new list, so a failed
edit never leaves a half-updated field behind.
"""
from __future__ import annotations

import string
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from wsid.services.grammar import SEPARATOR, is_private_use_token, is_variant_token
from wsid.types import TagConfig, UsageError, ValidationError

TOKEN_ALPHABET = frozenset(string.ascii_letters + string.digits + SEPARATOR)
IGNORED_PREFIX = "_"


@dataclass(frozen=True)
class PartGrammar:
    """What a single token of a field must look like."""

    field_name: str
    accepts: Callable[[str], bool]
    # Leading marker written before the tokens ("x" for private use)
    display_marker: str | None = None
    private_use_marker: str = "x"

    @classmethod
    def variant(cls, registry, config: TagConfig | None = None) -> PartGrammar:
        """Registered variant subtags only."""
        config = config or TagConfig.create_default()
        return cls(
            field_name="variant",
            accepts=lambda token: is_variant_token(token) and token in registry.variants,
            private_use_marker=config.private_use_marker,
        )

    @classmethod
    def private_use(cls, config: TagConfig | None = None) -> PartGrammar:
        config = config or TagConfig.create_default()
        return cls(
            field_name="private use",
            accepts=lambda token: is_private_use_token(token, config.max_private_use_length),
            display_marker=config.private_use_marker,
            private_use_marker=config.private_use_marker,
        )

    def is_marker(self, token: str) -> bool:
        return token.lower() == self.private_use_marker


@dataclass(frozen=True)
class PartList:
    """Immutable, ordered list of tokens of one field."""

    grammar: PartGrammar
    tokens: tuple[str, ...] = ()

    def __str__(self) -> str:
        if not self.tokens:
            return ""
        joined = SEPARATOR.join(self.tokens)
        if self.grammar.display_marker:
            return f"{self.grammar.display_marker}{SEPARATOR}{joined}"
        return joined

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __bool__(self) -> bool:
        return bool(self.tokens)

    def contains(self, token: str) -> bool:
        """Single-token membership test; ``token`` is not split on dashes."""
        if not token:
            return False
        token = token.lower()
        return any(existing.lower() == token for existing in self.tokens)

    def replace(self, text: str | None) -> PartList:
        """Return a list holding only the tokens of ``text``; empty text clears the field."""
        if not text:
            return PartList(self.grammar)
        return PartList(self.grammar).add(text)

    def add(self, candidate: str) -> PartList:
        """
        Append the tokens of ``candidate``.

        Raises:
            UsageError: characters outside ``[A-Za-z0-9-]``, a second private-use
                section, or a token that is already present.
            ValidationError: a token that does not fit the field's grammar.
        """
        if candidate is None or not set(candidate) <= TOKEN_ALPHABET:
            raise UsageError(f"'{candidate}' contains characters not allowed in a {self.grammar.field_name} subtag")

        tokens = candidate.strip(SEPARATOR).split(SEPARATOR)
        if len(tokens) > 1 and self.grammar.is_marker(tokens[0]):
            if any(self.grammar.is_marker(token) for token in tokens[1:]):
                raise UsageError(f"'{candidate}' introduces more than one private use section")
            if self.grammar.display_marker:
                tokens = tokens[1:]

        for token in tokens:
            if not token or self.grammar.is_marker(token) or not self.grammar.accepts(token):
                raise ValidationError(f"'{token}' in '{candidate}' is not a valid {self.grammar.field_name} subtag")

        seen = {existing.lower() for existing in self.tokens}
        for token in tokens:
            if token.lower() in seen:
                raise UsageError(f"'{token}' is already part of the {self.grammar.field_name}")
            seen.add(token.lower())

        return PartList(self.grammar, self.tokens + tuple(tokens))

    def remove(self, candidate: str | None) -> PartList:
        """Drop every token of ``candidate`` that is present; unknown or malformed tokens are ignored."""
        if not candidate:
            return self
        tokens = candidate.strip(SEPARATOR).split(SEPARATOR)
        if self.grammar.display_marker and len(tokens) > 1 and self.grammar.is_marker(tokens[0]):
            tokens = tokens[1:]
        doomed = {token.lower() for token in tokens if token and not token.startswith(IGNORED_PREFIX)}
        if not doomed:
            return self
        return PartList(self.grammar, tuple(token for token in self.tokens if token.lower() not in doomed))
