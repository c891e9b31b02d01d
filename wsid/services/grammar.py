"""
Grammar matcher for RFC 5646 language tags.

A small recursive-descent recognizer over dash-separated tokens. It accepts
either a whole-tag private-use form (``x-abc-def``) or the general form::

    language[-extlang]{0,3}[-script][-region][-variant]*[-extension][-x-privateuse]

Matching is anchored and case-insensitive; the matched text keeps the case of
the input. No subtag is checked against the registry here.
"""
from __future__ import annotations

from dataclasses import dataclass

from wsid.types import TagConfig

SEPARATOR = "-"


def _is_alpha(token: str, min_length: int, max_length: int) -> bool:
    return min_length <= len(token) <= max_length and token.isascii() and token.isalpha()


def _is_alnum(token: str, min_length: int, max_length: int) -> bool:
    return min_length <= len(token) <= max_length and token.isascii() and token.isalnum()


def _is_digits(token: str, length: int) -> bool:
    return len(token) == length and token.isascii() and token.isdigit()


def is_primary_language_token(token: str, max_length: int = 8) -> bool:
    return _is_alpha(token, 2, max_length)


def is_extlang_token(token: str) -> bool:
    return _is_alpha(token, 3, 3)


def is_script_token(token: str) -> bool:
    return _is_alpha(token, 4, 4)


def is_region_token(token: str) -> bool:
    return _is_alpha(token, 2, 2) or _is_digits(token, 3)


def is_variant_token(token: str) -> bool:
    if len(token) == 4:
        return token[0].isdigit() and _is_alnum(token, 4, 4)
    return _is_alnum(token, 5, 8)


def is_singleton_token(token: str, marker: str = "x") -> bool:
    return _is_alpha(token, 1, 1) and token.lower() != marker


def is_extension_token(token: str) -> bool:
    return _is_alnum(token, 2, 8)


def is_private_use_token(token: str, max_length: int = 40) -> bool:
    return _is_alnum(token, 1, max_length)


def is_language_code(code: str, max_length: int = 8, max_extlangs: int = 3) -> bool:
    """Whether ``code`` is a primary language subtag plus optional extended subtags."""
    if not code:
        return False
    primary, *extlangs = code.split(SEPARATOR)
    return (
        is_primary_language_token(primary, max_length)
        and len(extlangs) <= max_extlangs
        and all(is_extlang_token(extlang) for extlang in extlangs)
    )


@dataclass(frozen=True)
class TagMatch:
    """Named groups of a successful match. Absent groups are None."""

    private_use_only: bool
    language: str | None = None
    script: str | None = None
    region: str | None = None
    variant: str | None = None
    extension: str | None = None
    private_use: str | None = None

    @property
    def variant_codes(self) -> list[str]:
        return self.variant.split(SEPARATOR) if self.variant else []

    @property
    def private_use_codes(self) -> list[str]:
        """Private-use tokens without the leading marker."""
        if not self.private_use:
            return []
        return self.private_use.split(SEPARATOR)[1:]


class _TokenCursor:
    def __init__(self, tokens: list[str]):
        self._tokens = tokens
        self._pos = 0

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def peek(self) -> str | None:
        return None if self.at_end else self._tokens[self._pos]

    def take_if(self, predicate) -> str | None:
        token = self.peek()
        if token is not None and predicate(token):
            self._pos += 1
            return token
        return None

    def take_while(self, predicate, limit: int | None = None) -> list[str]:
        taken = []
        while limit is None or len(taken) < limit:
            token = self.take_if(predicate)
            if token is None:
                break
            taken.append(token)
        return taken


@dataclass(frozen=True)
class TagGrammar:
    """One concrete tag grammar; see ``strict`` and ``legacy``."""

    name: str
    max_language_length: int
    max_extlangs: int = 3
    max_private_use_length: int = 40
    marker: str = "x"

    @classmethod
    def strict(cls, config: TagConfig | None = None) -> TagGrammar:
        """BCP 47 grammar used to parse language tags."""
        config = config or TagConfig.create_default()
        return cls(
            name="strict",
            max_language_length=config.max_language_length,
            max_extlangs=config.max_extlangs,
            max_private_use_length=config.max_private_use_length,
            marker=config.private_use_marker,
        )

    @classmethod
    def legacy(cls, config: TagConfig | None = None) -> TagGrammar:
        """
        Grammar used to recognise dash-separated ICU input.

        The primary language is limited to ISO 639 length, so legacy ICU
        private-use languages ("xkal") are left to ICU locale decomposition.
        """
        config = config or TagConfig.create_default()
        return cls(
            name="legacy",
            max_language_length=config.max_legacy_language_length,
            max_extlangs=config.max_extlangs,
            max_private_use_length=config.max_private_use_length,
            marker=config.private_use_marker,
        )

    def is_match(self, tag: str | None) -> bool:
        return self.match(tag) is not None

    def match(self, tag: str | None) -> TagMatch | None:
        """Match the whole of ``tag``; None if it is not a tag in this grammar."""
        if not tag:
            return None
        tokens = tag.split(SEPARATOR)
        if not all(tokens):
            return None
        if tokens[0].lower() == self.marker:
            return self._match_private_use_only(tag, tokens)
        return self._match_language_tag(_TokenCursor(tokens))

    def _match_private_use_only(self, tag: str, tokens: list[str]) -> TagMatch | None:
        if len(tokens) > 1 and all(self._is_private_use_token(token) for token in tokens[1:]):
            return TagMatch(private_use_only=True, private_use=tag)
        return None

    def _match_language_tag(self, cursor: _TokenCursor) -> TagMatch | None:
        language = self._language(cursor)
        if language is None:
            return None
        script = cursor.take_if(is_script_token)
        region = cursor.take_if(is_region_token)
        variants = cursor.take_while(is_variant_token)

        extension = None
        singleton = cursor.take_if(self._is_singleton)
        if singleton is not None:
            extension_tokens = cursor.take_while(is_extension_token)
            if not extension_tokens:
                return None
            extension = SEPARATOR.join([singleton, *extension_tokens])

        private_use = None
        marker = cursor.take_if(lambda token: token.lower() == self.marker)
        if marker is not None:
            private_use_tokens = cursor.take_while(self._is_private_use_token)
            if not private_use_tokens:
                return None
            private_use = SEPARATOR.join([marker, *private_use_tokens])

        if not cursor.at_end:
            return None
        return TagMatch(
            private_use_only=False,
            language=language,
            script=script,
            region=region,
            variant=SEPARATOR.join(variants) or None,
            extension=extension,
            private_use=private_use,
        )

    def _language(self, cursor: _TokenCursor) -> str | None:
        primary = cursor.take_if(lambda token: is_primary_language_token(token, self.max_language_length))
        if primary is None:
            return None
        extlangs = cursor.take_while(is_extlang_token, limit=self.max_extlangs)
        return SEPARATOR.join([primary, *extlangs])

    def _is_singleton(self, token: str) -> bool:
        return is_singleton_token(token, self.marker)

    def _is_private_use_token(self, token: str) -> bool:
        return is_private_use_token(token, self.max_private_use_length)

    def is_language_code(self, code: str) -> bool:
        return is_language_code(code, self.max_language_length, self.max_extlangs)


STRICT = TagGrammar.strict()
LEGACY = TagGrammar.legacy()
