"""
Reader for the "record-jar" format of the IANA language subtag registry.

https://datatracker.ietf.org/doc/html/draft-phillips-record-jar-02
https://www.iana.org/assignments/language-subtag-registry/language-subtag-registry

Records are separated by ``%%`` lines. Each line is ``Field-Name: value``;
a line starting with whitespace continues the previous value.
"""
from __future__ import annotations

from collections.abc import Generator, Iterable
from typing import Any

RECORD_SEPARATOR = "%%"


class Record(dict[str, list[str]]):
    """One registry record. A field may repeat (e.g. Description, Prefix)."""

    def add(self, key: str, val: str):
        """
        Adds a value to a field.
        """
        self.setdefault(key, []).append(val)

    def one(self, key: str) -> str:
        """
        Return the single value of a field.

        Raises
        ------
        ValueError
            If the field has multiple values.
        KeyError
            If the field is missing.
        """
        vals = self[key]
        if len(vals) != 1:
            raise ValueError(f"field '{key}' has {len(vals)} values {vals}")
        return vals[0]

    def get_one(self, key: str, default=None) -> str | None | Any:
        """
        Return the single value of a field, or `default` if it is missing.
        """
        try:
            return self.one(key)
        except KeyError:
            return default

    def first(self, key: str, default=None) -> str | None | Any:
        """Return the first value of a repeatable field, or `default`."""
        vals = self.get(key)
        return vals[0] if vals else default


def parse_record_jar(lines: Iterable[str]) -> Generator[Record, None, None]:
    """
    Yields the non-empty records of an iterable of lines.

    Raises
    ------
    ValueError
        If a line is neither a field, a continuation nor a separator.
    """
    record = Record()
    key = None
    for lineno, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            continue
        if text == RECORD_SEPARATOR:
            if record:
                yield record
            record = Record()
            key = None
        elif line[:1].isspace():
            if key is None:
                raise ValueError(f"line {lineno}: continuation outside of a field")
            record[key][-1] += " " + text
        else:
            if ":" not in text:
                raise ValueError(f"line {lineno}: expected 'Field: value', got {text!r}")
            key, val = text.split(":", 1)
            key = key.strip()
            record.add(key, val.strip())
    if record:
        yield record
