"""Shared fixtures for flag quiz tests."""
import random
from unittest.mock import AsyncMock

import pytest

from flag_bot.countries_api.models import Country
from flag_bot.quiz import registry


def make_payload(common, official=None, native=None, svg=None, png=None) -> dict:
    """Raw REST Countries entry with only the name and flag fields."""
    name = {"common": common}
    if official is not None:
        name["official"] = official
    if native is not None:
        name["nativeName"] = native
    flags = {}
    if svg is not None:
        flags["svg"] = svg
    if png is not None:
        flags["png"] = png
    return {"name": name, "flags": flags}


def make_client(payload=None, error=None) -> AsyncMock:
    """Stub CountriesClient returning `payload` or raising `error`."""
    client = AsyncMock()
    if error is not None:
        client.fetch_countries.side_effect = error
    else:
        client.fetch_countries.return_value = payload
    return client


@pytest.fixture
def rng():
    """Seeded random source so shuffles repeat between runs."""
    return random.Random(1234)


@pytest.fixture
def five_payloads():
    """Five countries A-E, all with SVG and PNG flags."""
    return [
        make_payload(
            letter,
            official=f"Republic of {letter}",
            svg=f"https://flagcdn.com/{letter.lower()}.svg",
            png=f"https://flagcdn.com/w320/{letter.lower()}.png",
        )
        for letter in "ABCDE"
    ]


@pytest.fixture
def five_countries():
    return [
        Country(name=letter, flag_image_url=f"https://flagcdn.com/{letter.lower()}.svg")
        for letter in "ABCDE"
    ]


@pytest.fixture
def france_payload():
    """Realistic entry with several native names."""
    return make_payload(
        "France",
        official="French Republic",
        native={"fra": {"official": "République française", "common": "France"}},
        svg="https://flagcdn.com/fr.svg",
        png="https://flagcdn.com/w320/fr.png",
    )


@pytest.fixture(autouse=True)
async def clean_registry():
    """Drop sessions (and their pending timers) created by handler tests."""
    yield
    registry.close_all()
