"""Distractor drawing and the Fisher-Yates shuffle used for dataset and options."""
import random
from typing import List, MutableSequence, Sequence

from flag_bot.countries_api.models import Country

OPTION_COUNT = 4


def fisher_yates(items: MutableSequence, rng: random.Random) -> MutableSequence:
    """Shuffle in place, walking from the end and swapping with a random earlier slot."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def generate_options(countries: Sequence[Country], current: Country, rng: random.Random) -> List[str]:
    """Return the correct name plus three random distractors in random order.

    Fewer than four countries gives an empty list and the round cannot be played.
    """
    if len(countries) < OPTION_COUNT:
        return []

    names_pool = [c.name for c in countries]
    correct = current.name

    # The feed may repeat a name; without three other distinct names the draw never ends.
    if len(set(names_pool) - {correct}) < OPTION_COUNT - 1:
        return []

    distractors: List[str] = []
    while len(distractors) < OPTION_COUNT - 1:
        name = names_pool[rng.randrange(len(names_pool))]
        if name != correct and name not in distractors:
            distractors.append(name)

    return fisher_yates([correct, *distractors], rng)
