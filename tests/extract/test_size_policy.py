from __future__ import annotations

import pytest

from lessonkit.extract.config import SizePolicy


def test_defaults_match_target_band() -> None:
    policy = SizePolicy.from_env({})

    assert policy.max_chunks == 8
    assert policy.min_chunks == 3
    assert policy.max_words == 500
    assert policy.min_words_for(False) == 40
    assert policy.min_words_for(True) == 30
    assert policy.min_chars_for(False) == 20
    assert policy.min_chars_for(True) == 25
    assert policy.fallback_word_limit is None


def test_environment_overrides_thresholds() -> None:
    policy = SizePolicy.from_env(
        {
            "LESSONKIT_MAX_CHUNKS": "5",
            "LESSONKIT_MIN_WORDS": " 50 ",
            "LESSONKIT_FALLBACK_WORD_LIMIT": "300",
            "UNRELATED": "x",
        }
    )

    assert policy.max_chunks == 5
    assert policy.min_words == 50
    assert policy.fallback_word_limit == 300


def test_fallback_limit_can_be_disabled() -> None:
    assert SizePolicy.from_env({"LESSONKIT_FALLBACK_WORD_LIMIT": "off"}).fallback_word_limit is None


def test_invalid_values_fail_fast() -> None:
    with pytest.raises(ValueError, match="LESSONKIT_MAX_WORDS"):
        SizePolicy.from_env({"LESSONKIT_MAX_WORDS": "many"})

    with pytest.raises(ValueError, match="LESSONKIT_MAX_CHUNKS"):
        SizePolicy.from_env({"LESSONKIT_MAX_CHUNKS": ""})

    with pytest.raises(ValueError, match="LESSONKIT_BUCKET_WORDS"):
        SizePolicy.from_env({"LESSONKIT_BUCKET_WORDS": "0"})


def test_inconsistent_policy_is_rejected() -> None:
    with pytest.raises(ValueError, match="min_chunks"):
        SizePolicy(max_chunks=2, min_chunks=3)

    with pytest.raises(ValueError, match="max_words"):
        SizePolicy(max_words=20)
