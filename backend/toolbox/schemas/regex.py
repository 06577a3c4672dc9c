from __future__ import annotations

import re

from pydantic import field_validator

from toolbox.models.shared_regex import SharedRegex
from toolbox.schemas.derive import insert_model, record_model


SHARED_REGEX_INSERT_FIELDS = (
    "title",
    "description",
    "pattern",
    "flags",
    "category",
    "author_name",
    "author_email",
    "example_text",
    "is_public",
    "tags",
)

# Flags understood by browser regexes (the patterns are authored for JS).
JS_REGEX_FLAGS = frozenset("dgimsuy")


class SharedRegexCreateRequest(insert_model(SharedRegex, SHARED_REGEX_INSERT_FIELDS)):
    """
    A regex snippet submitted by a contributor.

    `pattern` is stored verbatim; nothing here checks that it compiles.
    Counters (usage_count, likes) and timestamps are server-managed.
    """


class StrictSharedRegexCreateRequest(SharedRegexCreateRequest):
    """
    Adds syntax checks: flags must be known and unique, and the pattern must
    compile with Python's `re`. Python and browser regex syntax differ, so this
    is an approximation.
    """

    @field_validator("flags")
    @classmethod
    def _known_flags(cls, v: str | None):
        if v is None:
            return v
        bad = sorted(set(v) - JS_REGEX_FLAGS)
        if bad:
            raise ValueError(f"Unknown regex flags: {''.join(bad)}")
        if len(set(v)) != len(v):
            raise ValueError("Regex flags must not repeat")
        return v

    @field_validator("pattern")
    @classmethod
    def _pattern_compiles(cls, v: str):
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Pattern does not compile: {e}") from None
        return v


SharedRegexResponse = record_model(SharedRegex, name="SharedRegexResponse")
