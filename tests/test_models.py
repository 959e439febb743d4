"""Unit tests for regiondex.models – payload parsing and shape validation."""
import pytest

from conftest import make_payload
from regiondex.errors import InvalidRecordError, NetworkError
from regiondex.models import (
    ChainLink,
    Record,
    SearchOutcome,
    SpeciesDescriptor,
    id_from_resource_url,
    is_valid_record_payload,
)


class TestRecordFromApi:
    def test_parses_fields(self):
        record = Record.from_api(make_payload(6, "charizard", ("fire", "flying")))
        assert record.id == 6
        assert record.name == "charizard"
        assert record.types == ("fire", "flying")
        assert [s.name for s in record.stats] == ["hp", "attack"]
        assert record.abilities[1].is_hidden
        assert record.moves[0].name == "tackle"
        assert record.moves[0].level_learned_at == 1
        assert record.species_name == "charizard"
        assert record.height == 7

    def test_types_sorted_by_slot(self):
        payload = make_payload(1)
        payload["types"] = [
            {"slot": 2, "type": {"name": "poison"}},
            {"slot": 1, "type": {"name": "grass"}},
        ]
        assert Record.from_api(payload).types == ("grass", "poison")

    def test_derived_helpers(self):
        record = Record.from_api(make_payload(4, "charmander", ("fire",)))
        assert record.display_name == "Charmander"
        assert record.number_label == "#004"
        assert record.primary_type == "fire"
        assert record.color == "#F08030"
        assert record.image_url == "https://art.example/4.png"
        assert record.total_stats == 94

    def test_image_falls_back_to_front_sprite(self):
        payload = make_payload(4)
        payload["sprites"] = {"front_default": "https://img.example/4.png", "other": {}}
        assert Record.from_api(payload).image_url == "https://img.example/4.png"

    @pytest.mark.parametrize("missing", ["id", "name", "types", "sprites", "stats"])
    def test_missing_field_is_invalid(self, missing):
        payload = make_payload(1)
        del payload[missing]
        assert not is_valid_record_payload(payload)
        with pytest.raises(InvalidRecordError):
            Record.from_api(payload)

    def test_empty_types_is_invalid(self):
        payload = make_payload(1)
        payload["types"] = []
        assert not is_valid_record_payload(payload)

    def test_non_mapping_payload(self):
        with pytest.raises(InvalidRecordError):
            Record.from_api(["not", "a", "record"])

    def test_non_numeric_base_stat_is_invalid(self):
        payload = make_payload(1)
        payload["stats"][0]["base_stat"] = "high"
        with pytest.raises(InvalidRecordError):
            Record.from_api(payload)

    def test_stats_not_a_list_is_invalid(self):
        payload = make_payload(1)
        payload["stats"] = 7
        with pytest.raises(InvalidRecordError):
            Record.from_api(payload)

    def test_non_integer_id_is_invalid(self):
        payload = make_payload(1)
        payload["id"] = "abc"
        with pytest.raises(InvalidRecordError):
            Record.from_api(payload)

    def test_invalid_record_counts_as_network_error(self):
        assert issubclass(InvalidRecordError, NetworkError)


class TestSpeciesAndChain:
    def test_species_with_chain(self):
        species = SpeciesDescriptor.from_api(
            {"id": 1, "name": "bulbasaur", "evolution_chain": {"url": "https://x/evolution-chain/1/"}}
        )
        assert species.evolution_chain_url == "https://x/evolution-chain/1/"

    def test_species_without_chain(self):
        species = SpeciesDescriptor.from_api({"id": 1, "name": "bulbasaur", "evolution_chain": None})
        assert species.evolution_chain_url is None

    def test_id_from_url(self):
        assert id_from_resource_url("https://pokeapi.co/api/v2/pokemon-species/133/") == 133
        assert id_from_resource_url("https://pokeapi.co/api/v2/pokemon-species/7") == 7
        with pytest.raises(InvalidRecordError):
            id_from_resource_url("https://pokeapi.co/api/v2/pokemon-species/")

    def test_chain_parsing(self):
        body = {
            "id": 1,
            "chain": {
                "species": {"name": "bulbasaur", "url": "https://x/pokemon-species/1/"},
                "evolution_details": [],
                "evolves_to": [
                    {
                        "species": {"name": "ivysaur", "url": "https://x/pokemon-species/2/"},
                        "evolution_details": [{"min_level": 16}],
                        "evolves_to": [],
                    }
                ],
            },
        }
        root = ChainLink.from_api(body)
        assert root.species_id == 1
        assert len(root.evolves_to) == 1
        assert root.evolves_to[0].species_id == 2
        assert root.evolves_to[0].evolution_details == ({"min_level": 16},)

    def test_chain_link_without_species(self):
        with pytest.raises(InvalidRecordError):
            ChainLink.from_api({"chain": {"evolves_to": []}})

    def test_species_non_integer_id_is_invalid(self):
        with pytest.raises(InvalidRecordError):
            SpeciesDescriptor.from_api({"id": "abc"})

    def test_chain_link_with_scalar_children_is_invalid(self):
        with pytest.raises(InvalidRecordError):
            ChainLink.from_api({"species": {"url": "https://x/pokemon-species/1/"}, "evolves_to": 3})


def test_search_outcome_iterates_records():
    outcome = SearchOutcome.of("x", [])
    assert len(outcome) == 0
    assert list(outcome) == []
    assert outcome.query == "x"
