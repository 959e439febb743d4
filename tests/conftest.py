"""
Shared fixtures for the test suite.
"""
import sys
from pathlib import Path

import pytest

# Ensure project root is importable
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from regiondex.errors import NotFoundError  # noqa: E402
from regiondex.models import ChainLink, Record, SpeciesDescriptor  # noqa: E402

NAMED = {
    1: "bulbasaur",
    2: "ivysaur",
    3: "venusaur",
    4: "charmander",
    5: "charmeleon",
    6: "charizard",
    25: "pikachu",
    26: "raichu",
    133: "eevee",
    134: "vaporeon",
    135: "jolteon",
    136: "flareon",
    152: "chikorita",
    172: "pichu",
    252: "treecko",
}

SPECIES_URL = "https://pokeapi.co/api/v2/pokemon-species/{}/"


def make_payload(pokemon_id, name=None, types=("normal",)):
    """A /pokemon payload trimmed to the fields the app reads."""
    name = name or NAMED.get(pokemon_id, f"mon{pokemon_id}")
    return {
        "id": pokemon_id,
        "name": name,
        "height": 7,
        "weight": 69,
        "base_experience": 64,
        "types": [{"slot": i + 1, "type": {"name": t}} for i, t in enumerate(types)],
        "stats": [
            {"base_stat": 45, "stat": {"name": "hp"}},
            {"base_stat": 49, "stat": {"name": "attack"}},
        ],
        "abilities": [
            {"ability": {"name": "overgrow"}, "is_hidden": False},
            {"ability": {"name": "chlorophyll"}, "is_hidden": True},
        ],
        "moves": [
            {"move": {"name": "tackle"}, "version_group_details": [{"level_learned_at": 1}]},
        ],
        "sprites": {
            "front_default": f"https://img.example/{pokemon_id}.png",
            "other": {"official-artwork": {"front_default": f"https://art.example/{pokemon_id}.png"}},
        },
        "species": {"name": name, "url": SPECIES_URL.format(pokemon_id)},
    }


def make_record(pokemon_id, name=None, types=("normal",)):
    return Record.from_api(make_payload(pokemon_id, name, types))


def chain_link(pokemon_id, *children, details=()):
    return ChainLink(SPECIES_URL.format(pokemon_id), tuple(details), tuple(children))


class FakeDataSource:
    """In-memory DataSource that records every call made to it."""

    def __init__(self, records=None, failures=None, species=None, chains=None):
        self.records = dict(records or {})
        self.failures = dict(failures or {})
        self.species = dict(species or {})
        self.chains = dict(chains or {})
        self.calls = []
        self.on_fetch = None

    def calls_to(self, method):
        return [arg for name, arg in self.calls if name == method]

    def fetch_by_id(self, pokemon_id):
        self.calls.append(("fetch_by_id", pokemon_id))
        if self.on_fetch is not None:
            self.on_fetch(pokemon_id)
        if pokemon_id in self.failures:
            raise self.failures[pokemon_id]
        if pokemon_id in self.records:
            return self.records[pokemon_id]
        raise NotFoundError(pokemon_id)

    def fetch_by_name(self, name):
        self.calls.append(("fetch_by_name", name))
        for record in self.records.values():
            if record.name == name.lower():
                return record
        raise NotFoundError(name)

    def fetch_species(self, pokemon_id):
        self.calls.append(("fetch_species", pokemon_id))
        if pokemon_id in self.species:
            value = self.species[pokemon_id]
            if isinstance(value, Exception):
                raise value
            return value
        return SpeciesDescriptor(pokemon_id, f"mon{pokemon_id}", None)

    def fetch_evolution_chain(self, url):
        self.calls.append(("fetch_evolution_chain", url))
        if url in self.chains:
            return self.chains[url]
        raise NotFoundError(url)


@pytest.fixture
def dex_records():
    """Records for every id of the three regions."""
    return {pid: make_record(pid) for pid in range(1, 387)}


@pytest.fixture
def source(dex_records):
    return FakeDataSource(dex_records)
