"""Size policy thresholds for chunk segmentation."""

from __future__ import annotations

from dataclasses import dataclass, fields
import os
from typing import Mapping

ENV_PREFIX = "LESSONKIT_"

DEFAULT_MAX_CHUNKS = 8
DEFAULT_MIN_CHUNKS = 3
DEFAULT_MAX_WORDS = 500
DEFAULT_MIN_WORDS = 40
DEFAULT_MIN_WORDS_FLAT = 30
DEFAULT_MIN_CHARS = 20
DEFAULT_MIN_CHARS_FLAT = 25
DEFAULT_SUB_RUN_MIN_WORDS = 80
DEFAULT_REMAINDER_MIN_WORDS = 50
DEFAULT_BUCKET_WORDS = 250
DEFAULT_BUCKET_MIN_WORDS = 80
DEFAULT_PARAGRAPH_MIN_CHARS = 50
DEFAULT_MERGE_MAX_WORDS = 500


def _parse_positive_int(*, name: str, raw_value: str, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


@dataclass(frozen=True, slots=True)
class SizePolicy:
    """Validated chunk-size band and split/merge thresholds.

    ``min_words``/``min_chars`` apply when splitting on H2 only; the ``_flat``
    variants apply when H2 and H3 are both split points.
    """

    max_chunks: int = DEFAULT_MAX_CHUNKS
    min_chunks: int = DEFAULT_MIN_CHUNKS
    max_words: int = DEFAULT_MAX_WORDS
    min_words: int = DEFAULT_MIN_WORDS
    min_words_flat: int = DEFAULT_MIN_WORDS_FLAT
    min_chars: int = DEFAULT_MIN_CHARS
    min_chars_flat: int = DEFAULT_MIN_CHARS_FLAT
    sub_run_min_words: int = DEFAULT_SUB_RUN_MIN_WORDS
    remainder_min_words: int = DEFAULT_REMAINDER_MIN_WORDS
    bucket_words: int = DEFAULT_BUCKET_WORDS
    bucket_min_words: int = DEFAULT_BUCKET_MIN_WORDS
    paragraph_min_chars: int = DEFAULT_PARAGRAPH_MIN_CHARS
    merge_max_words: int = DEFAULT_MERGE_MAX_WORDS
    fallback_word_limit: int | None = None

    def __post_init__(self) -> None:
        if self.max_chunks < 1:
            raise ValueError("max_chunks must be >= 1")
        if self.min_chunks > self.max_chunks:
            raise ValueError("min_chunks cannot exceed max_chunks")
        if self.min_words > self.max_words or self.min_words_flat > self.max_words:
            raise ValueError("minimum word thresholds cannot exceed max_words")
        if self.fallback_word_limit is not None and self.fallback_word_limit < 1:
            raise ValueError("fallback_word_limit must be >= 1")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SizePolicy":
        """Build a policy from ``LESSONKIT_<FIELD>`` variables, defaults elsewhere."""

        source: Mapping[str, str] = os.environ if environ is None else environ

        overrides: dict[str, int | None] = {}
        for policy_field in fields(cls):
            name = ENV_PREFIX + policy_field.name.upper()
            raw_value = source.get(name)
            if raw_value is None:
                continue
            raw_value = raw_value.strip()
            if not raw_value:
                raise ValueError(f"{name} cannot be empty")

            if policy_field.name == "fallback_word_limit" and raw_value.lower() in {"none", "off", "0"}:
                overrides[policy_field.name] = None
                continue
            minimum = 0 if policy_field.name in {"min_chars", "min_chars_flat"} else 1
            overrides[policy_field.name] = _parse_positive_int(name=name, raw_value=raw_value, minimum=minimum)

        return cls(**overrides)

    def min_words_for(self, flat: bool) -> int:
        return self.min_words_flat if flat else self.min_words

    def min_chars_for(self, flat: bool) -> int:
        return self.min_chars_flat if flat else self.min_chars
