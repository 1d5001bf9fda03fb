"""Tests for the password generator."""

import os
import string
from collections import Counter

import pytest

from core.password_gen import (
    DEFAULT_SPECIAL,
    SIMILAR_CHARS,
    ConfigurationError,
    EmptyPoolError,
    GenerationConfig,
    PasswordGenerator,
    UniquenessError,
    get_character_classes,
    get_character_set,
    minimum_length,
    secure_random_int,
)


NO_CLASSES = dict(
    include_uppercase=False,
    include_lowercase=False,
    include_numbers=False,
    include_special_chars=False,
    include_spaces=False,
)


def only(**flags):
    """Config options with every class off except the ones passed in."""
    options = dict(NO_CLASSES)
    options.update(flags)
    return options


@pytest.fixture
def gen():
    return PasswordGenerator()


class TestSecureRandomInt:
    def test_rejects_values_in_the_partial_block(self, scripted_bytes):
        # For max 3 the accepted range is [0, 4294967295); 2**32 - 1 is thrown away
        source = scripted_bytes([2 ** 32 - 1, 7])
        assert secure_random_int(3, source) == 1
        assert source.calls == 2

    def test_accepts_first_value_below_limit(self, scripted_bytes):
        source = scripted_bytes([10])
        assert secure_random_int(6, source) == 4
        assert source.calls == 1

    def test_power_of_two_never_rejects(self, scripted_bytes):
        source = scripted_bytes([2 ** 32 - 1])
        assert secure_random_int(16, source) == 15

    def test_max_one_is_always_zero(self):
        assert all(secure_random_int(1) == 0 for _ in range(20))

    @pytest.mark.parametrize("bad", [0, -5, 2 ** 32 + 1])
    def test_out_of_range_max_raises(self, bad):
        with pytest.raises(ValueError):
            secure_random_int(bad)

    def test_results_stay_in_range(self):
        assert all(0 <= secure_random_int(7) < 7 for _ in range(500))

    def test_roughly_uniform(self):
        counts = Counter(secure_random_int(10) for _ in range(30000))
        assert set(counts) == set(range(10))
        # Expected 3000 each; the bounds are ~20 standard deviations wide
        assert all(2000 < c < 4000 for c in counts.values())


class TestCharacterSets:
    def test_default_pool(self):
        pool = get_character_set(GenerationConfig())
        assert pool == string.ascii_uppercase + string.ascii_lowercase + string.digits + DEFAULT_SPECIAL

    def test_custom_special_replaces_default(self):
        classes = get_character_classes(GenerationConfig(**only(include_special_chars=True), custom_special_chars="#~"))
        assert classes == ["#~"]

    def test_empty_custom_special_means_default(self):
        classes = get_character_classes(GenerationConfig(**only(include_special_chars=True), custom_special_chars=""))
        assert classes == [DEFAULT_SPECIAL]

    def test_spaces_are_a_single_character_class(self):
        classes = get_character_classes(GenerationConfig(**only(include_spaces=True)))
        assert classes == [" "]

    def test_exclude_similar_filters_every_class(self):
        config = GenerationConfig(include_spaces=True, custom_special_chars="!0l", exclude_similar_chars=True)
        pool = get_character_set(config)
        assert not set(pool) & set(SIMILAR_CHARS)
        assert "!" in pool and " " in pool

    def test_classes_emptied_by_filter_are_dropped(self):
        config = GenerationConfig(
            **only(include_numbers=True, include_special_chars=True),
            custom_special_chars="0O",
            exclude_similar_chars=True,
        )
        assert get_character_classes(config) == ["23456789"]


class TestGenerate:
    def test_returns_count_passwords(self, gen):
        passwords = gen.generate(GenerationConfig(count=5))
        assert len(passwords) == 5
        assert all(isinstance(p, str) for p in passwords)

    def test_correct_length(self, gen):
        for length in (4, 16, 64):
            pw = gen.generate_single(GenerationConfig(length=length))
            assert len(pw) == length

    def test_only_pool_characters(self, gen):
        config = GenerationConfig(length=32, include_spaces=True)
        pool = set(get_character_set(config))
        for _ in range(50):
            assert set(gen.generate_single(config)) <= pool

    def test_every_class_is_covered(self, gen):
        config = GenerationConfig(length=5, include_spaces=True)
        for _ in range(200):
            pw = gen.generate_single(config)
            assert any(c in string.ascii_uppercase for c in pw)
            assert any(c in string.ascii_lowercase for c in pw)
            assert any(c in string.digits for c in pw)
            assert any(c in DEFAULT_SPECIAL for c in pw)
            assert " " in pw

    def test_exclude_similar(self, gen):
        config = GenerationConfig(length=64, exclude_similar_chars=True)
        for _ in range(50):
            assert not set(gen.generate_single(config)) & set(SIMILAR_CHARS)

    def test_custom_special_only(self, gen):
        config = GenerationConfig(**only(include_special_chars=True), length=6, custom_special_chars="#")
        assert gen.generate_single(config) == "######"

    def test_no_duplicates(self, gen):
        config = GenerationConfig(length=60, allow_duplicate_chars=False)
        for _ in range(20):
            pw = gen.generate_single(config)
            assert len(set(pw)) == len(pw) == 60

    def test_no_duplicates_can_use_whole_pool(self, gen):
        config = GenerationConfig(**only(include_numbers=True), length=10, allow_duplicate_chars=False)
        assert sorted(gen.generate_single(config)) == list(string.digits)

    def test_no_duplicates_with_overlapping_classes(self, gen):
        # "abc" is both lowercase and special here, so only 26 distinct characters exist
        config = GenerationConfig(
            **only(include_lowercase=True, include_special_chars=True),
            custom_special_chars="abc",
            length=26,
            allow_duplicate_chars=False,
        )
        for _ in range(20):
            assert sorted(gen.generate_single(config)) == list(string.ascii_lowercase)

    def test_no_duplicates_when_seed_used_up_a_class(self, gen):
        # The lowercase seed is "a" about 1 time in 26, leaving the special class nothing new
        config = GenerationConfig(
            **only(include_lowercase=True, include_special_chars=True),
            custom_special_chars="a",
            length=5,
            allow_duplicate_chars=False,
        )
        for _ in range(500):
            pw = gen.generate_single(config)
            assert len(pw) == 5 and len(set(pw)) == 5

    def test_no_duplicates_skips_seed_deterministically(self, scripted_bytes):
        # Word 0 seeds "a" from lowercase; special "a" is then skipped, fill draws "b"
        source = scripted_bytes([0, 0, 0])
        config = GenerationConfig(
            **only(include_lowercase=True, include_special_chars=True),
            custom_special_chars="a",
            length=2,
            allow_duplicate_chars=False,
        )
        pw = PasswordGenerator(random_bytes=source).generate_single(config)
        assert sorted(pw) == ["a", "b"]
        assert source.calls == 3

    def test_short_unique_password_from_digits(self, gen):
        config = GenerationConfig(**only(include_numbers=True), length=3, allow_duplicate_chars=False)
        pw = gen.generate_single(config)
        assert len(pw) == 3 and len(set(pw)) == 3

    def test_shuffle_moves_seeded_characters(self, gen):
        config = GenerationConfig(**only(include_uppercase=True, include_lowercase=True), length=2)
        first_chars = {gen.generate_single(config)[0].isupper() for _ in range(200)}
        assert first_chars == {True, False}

    def test_uses_injected_random_source(self):
        calls = []

        def source(n):
            calls.append(n)
            return os.urandom(n)

        PasswordGenerator(random_bytes=source).generate(GenerationConfig(length=12))
        assert calls and all(n == 4 for n in calls)

    def test_count_zero_returns_empty_list(self, gen):
        assert gen.generate(GenerationConfig(count=0)) == []

    def test_marginal_frequency_is_uniform(self, gen):
        config = GenerationConfig(**only(include_numbers=True), length=1, count=20000)
        counts = Counter(gen.generate(config))
        assert set(counts) == set(string.digits)
        # Expected 2000 each
        assert all(1400 < c < 2600 for c in counts.values())


class TestErrors:
    def test_empty_pool(self, gen):
        with pytest.raises(EmptyPoolError, match="No character types selected"):
            gen.generate(GenerationConfig(**NO_CLASSES))

    def test_empty_pool_after_filtering(self, gen):
        config = GenerationConfig(
            **only(include_special_chars=True),
            custom_special_chars="1lI",
            exclude_similar_chars=True,
        )
        with pytest.raises(EmptyPoolError):
            gen.generate_single(config)

    def test_length_exceeds_unique_pool(self, gen):
        config = GenerationConfig(**only(include_numbers=True), length=11, allow_duplicate_chars=False)
        with pytest.raises(UniquenessError, match="Only 10 unique characters"):
            gen.generate_single(config)

    def test_pool_counted_by_distinct_characters(self, gen):
        config = GenerationConfig(
            **only(include_special_chars=True),
            custom_special_chars="!!@",
            length=3,
            allow_duplicate_chars=False,
        )
        with pytest.raises(UniquenessError):
            gen.generate_single(config)

    def test_length_shorter_than_class_count(self, gen):
        with pytest.raises(ConfigurationError, match="at least 4"):
            gen.generate_single(GenerationConfig(length=3))

    def test_errors_are_value_errors(self):
        assert issubclass(EmptyPoolError, ValueError)
        assert issubclass(UniquenessError, ConfigurationError)

    def test_batch_fails_as_a_unit(self, gen):
        config = GenerationConfig(**NO_CLASSES, count=3)
        with pytest.raises(EmptyPoolError):
            gen.generate(config)


class TestMinimumLength:
    def test_one_per_enabled_class(self):
        assert minimum_length(GenerationConfig()) == 4
        assert minimum_length(GenerationConfig(include_spaces=True)) == 5
        assert minimum_length(GenerationConfig(**only(include_numbers=True))) == 1

    def test_filtered_out_class_not_counted(self):
        config = GenerationConfig(
            **only(include_numbers=True, include_special_chars=True),
            custom_special_chars="0O",
            exclude_similar_chars=True,
        )
        assert minimum_length(config) == 1

    def test_generating_at_minimum_length(self, gen):
        config = GenerationConfig(include_spaces=True, length=5)
        pw = gen.generate_single(config)
        assert len(pw) == 5 and " " in pw
