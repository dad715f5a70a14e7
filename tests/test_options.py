"""Tests for option generation and the Fisher-Yates shuffle."""
import random

from flag_bot.countries_api.models import Country
from flag_bot.quiz.options import fisher_yates, generate_options


class TestFisherYates:

    def test_is_permutation(self, rng):
        items = list(range(20))
        shuffled = fisher_yates(list(items), rng)

        assert sorted(shuffled) == items

    def test_shuffles_in_place(self, rng):
        items = list(range(10))
        result = fisher_yates(items, rng)

        assert result is items

    def test_same_seed_same_order(self):
        a = fisher_yates(list(range(30)), random.Random(7))
        b = fisher_yates(list(range(30)), random.Random(7))

        assert a == b

    def test_short_lists_untouched(self, rng):
        assert fisher_yates([], rng) == []
        assert fisher_yates(["only"], rng) == ["only"]


class TestGenerateOptions:

    def test_four_distinct_one_correct(self, five_countries):
        for seed in range(50):
            current = five_countries[seed % 5]
            options = generate_options(five_countries, current, random.Random(seed))

            assert len(options) == 4
            assert len(set(options)) == 4
            assert options.count(current.name) == 1
            assert set(options) <= {c.name for c in five_countries}

    def test_correct_answer_position_varies(self, five_countries):
        positions = {
            generate_options(five_countries, five_countries[0], random.Random(seed)).index("A")
            for seed in range(200)
        }

        assert positions == {0, 1, 2, 3}

    def test_fewer_than_four_countries(self, five_countries):
        three = five_countries[:3]

        assert generate_options(three, three[0], random.Random(0)) == []

    def test_exactly_four_countries_uses_all(self, five_countries):
        four = five_countries[:4]
        options = generate_options(four, four[2], random.Random(3))

        assert sorted(options) == ["A", "B", "C", "D"]

    def test_duplicate_names_do_not_hang(self):
        """Four records but only two distinct names besides the correct one."""
        countries = [
            Country(name="A", flag_image_url="a.svg"),
            Country(name="B", flag_image_url="b.svg"),
            Country(name="B", flag_image_url="b2.svg"),
            Country(name="C", flag_image_url="c.svg"),
        ]

        assert generate_options(countries, countries[0], random.Random(0)) == []
