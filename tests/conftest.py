"""
Test configuration and fixtures
"""
import pytest

from app import create_app
from services.pokemon import FetchResult, PokemonDetails, PokemonPage


def make_list_payload(count, names, start_id=1):
    return {
        "count": count,
        "next": None,
        "previous": None,
        "results": [
            {"name": name, "url": f"https://pokeapi.co/api/v2/pokemon/{start_id + i}/"}
            for i, name in enumerate(names)
        ],
    }


PIKACHU_PAYLOAD = {
    "id": 25,
    "name": "pikachu",
    "height": 4,
    "weight": 60,
    "base_experience": 112,
    "sprites": {
        "front_default": "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/25.png",
        "other": {},
    },
    "types": [{"slot": 1, "type": {"name": "electric", "url": "https://pokeapi.co/api/v2/type/13/"}}],
    "stats": [
        {"base_stat": 35, "effort": 0, "stat": {"name": "hp", "url": "https://pokeapi.co/api/v2/stat/1/"}},
        {"base_stat": 90, "effort": 2, "stat": {"name": "speed", "url": "https://pokeapi.co/api/v2/stat/6/"}},
    ],
}


class FakeSource:
    """In-memory stand-in for PokeApiSource.

    `lists` maps offset -> FetchResult, `items` maps id -> FetchResult.
    Unknown keys answer with an error result. Every call is recorded.
    """

    def __init__(self, lists=None, items=None):
        self.lists = lists or {}
        self.items = items or {}
        self.list_calls = []
        self.item_calls = []

    def fetch_list(self, offset=0, limit=20, wait=None):
        self.list_calls.append((offset, limit))
        return self.lists.get(offset, FetchResult.failure("not found"))

    def fetch_item(self, pokemon_id, wait=None):
        self.item_calls.append(pokemon_id)
        return self.items.get(pokemon_id, FetchResult.failure("not found"))


@pytest.fixture
def first_page():
    names = [f"mon-{i}" for i in range(1, 21)]
    return FetchResult.success(PokemonPage.from_json(make_list_payload(1302, names)))


@pytest.fixture
def pikachu():
    return FetchResult.success(PokemonDetails.from_json(PIKACHU_PAYLOAD))


@pytest.fixture
def source(first_page, pikachu):
    return FakeSource(lists={0: first_page}, items={"25": pikachu})


@pytest.fixture
def app(source):
    """Create application for testing"""
    app = create_app(source=source, config={"TESTING": True})
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()
