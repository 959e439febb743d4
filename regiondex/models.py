"""
Immutable values built from PokéAPI payloads.

Record.from_api() is the only place a raw /pokemon payload is interpreted; it
rejects payloads that are missing any of the fields a card needs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Tuple

from .errors import InvalidRecordError

REQUIRED_RECORD_FIELDS: Tuple[str, ...] = ("id", "name", "types", "sprites", "stats")

TYPE_COLORS: Dict[str, str] = {
    "normal": "#A8A878",
    "fire": "#F08030",
    "water": "#6890F0",
    "electric": "#F8D030",
    "grass": "#78C850",
    "ice": "#98D8D8",
    "fighting": "#C03028",
    "poison": "#A040A0",
    "ground": "#E0C068",
    "flying": "#A890F0",
    "psychic": "#F85888",
    "bug": "#A8B820",
    "rock": "#B8A038",
    "ghost": "#705898",
    "dragon": "#7038F8",
    "dark": "#705848",
    "steel": "#B8B8D0",
    "fairy": "#EE99AC",
}
DEFAULT_TYPE_COLOR = "#777777"


def is_valid_record_payload(payload: object) -> bool:
    if not isinstance(payload, Mapping):
        return False
    return all(payload.get(key) for key in REQUIRED_RECORD_FIELDS)


def id_from_resource_url(url: str) -> int:
    # ".../pokemon-species/25/" -> 25
    tail = str(url or "").rstrip("/").rsplit("/", 1)[-1]
    try:
        return int(tail)
    except ValueError as exc:
        raise InvalidRecordError(f"no id in resource url {url!r}") from exc


def _named(value: object) -> str:
    if isinstance(value, Mapping):
        return str(value.get("name") or "")
    return ""


@dataclass(frozen=True)
class StatEntry:
    name: str
    base_stat: int


@dataclass(frozen=True)
class AbilityEntry:
    name: str
    is_hidden: bool = False


@dataclass(frozen=True)
class MoveEntry:
    name: str
    level_learned_at: int | None = None


@dataclass(frozen=True)
class Sprites:
    front_default: str | None = None
    artwork: str | None = None


@dataclass(frozen=True)
class Record:
    id: int
    name: str
    types: Tuple[str, ...]
    stats: Tuple[StatEntry, ...]
    sprites: Sprites
    abilities: Tuple[AbilityEntry, ...] = ()
    moves: Tuple[MoveEntry, ...] = ()
    species_name: str | None = None
    species_url: str | None = None
    height: int | None = None
    weight: int | None = None
    base_experience: int | None = None

    @classmethod
    def from_api(cls, payload: object) -> "Record":
        if not is_valid_record_payload(payload):
            missing = (
                [key for key in REQUIRED_RECORD_FIELDS if not payload.get(key)]
                if isinstance(payload, Mapping)
                else list(REQUIRED_RECORD_FIELDS)
            )
            raise InvalidRecordError(f"record payload missing {', '.join(missing)}")
        try:
            return cls._parse(payload)
        except (TypeError, ValueError, AttributeError) as exc:
            raise InvalidRecordError(f"malformed record payload for {payload.get('id')!r}: {exc}") from exc

    @classmethod
    def _parse(cls, payload: Mapping) -> "Record":
        pokemon_id = int(payload["id"])
        slots = [slot for slot in payload["types"] if isinstance(slot, Mapping)]
        types = tuple(_named(slot.get("type")) for slot in sorted(slots, key=lambda s: s.get("slot", 0)))
        stats = tuple(
            StatEntry(_named(stat.get("stat")), int(stat.get("base_stat") or 0))
            for stat in payload["stats"]
            if isinstance(stat, Mapping)
        )
        abilities = tuple(
            AbilityEntry(_named(ability.get("ability")), bool(ability.get("is_hidden")))
            for ability in payload.get("abilities") or []
            if isinstance(ability, Mapping)
        )
        moves: List[MoveEntry] = []
        for move in payload.get("moves") or []:
            if not isinstance(move, Mapping):
                continue
            details = move.get("version_group_details") or []
            level = details[0].get("level_learned_at") if details and isinstance(details[0], Mapping) else None
            moves.append(MoveEntry(_named(move.get("move")), level))

        raw_sprites = payload["sprites"] if isinstance(payload["sprites"], Mapping) else {}
        official = ((raw_sprites.get("other") or {}).get("official-artwork") or {})
        sprites = Sprites(
            front_default=raw_sprites.get("front_default"),
            artwork=official.get("front_default"),
        )
        species = payload.get("species") if isinstance(payload.get("species"), Mapping) else {}
        return cls(
            id=pokemon_id,
            name=str(payload["name"]),
            types=types,
            stats=stats,
            sprites=sprites,
            abilities=abilities,
            moves=tuple(moves),
            species_name=species.get("name"),
            species_url=species.get("url"),
            height=payload.get("height"),
            weight=payload.get("weight"),
            base_experience=payload.get("base_experience"),
        )

    @property
    def display_name(self) -> str:
        return self.name[:1].upper() + self.name[1:]

    @property
    def number_label(self) -> str:
        return f"#{self.id:03d}"

    @property
    def primary_type(self) -> str:
        return self.types[0] if self.types else "normal"

    @property
    def color(self) -> str:
        return TYPE_COLORS.get(self.primary_type, DEFAULT_TYPE_COLOR)

    @property
    def image_url(self) -> str | None:
        return self.sprites.artwork or self.sprites.front_default

    @property
    def total_stats(self) -> int:
        return sum(stat.base_stat for stat in self.stats)


@dataclass(frozen=True)
class SpeciesDescriptor:
    id: int
    name: str
    evolution_chain_url: str | None = None

    @classmethod
    def from_api(cls, payload: object) -> "SpeciesDescriptor":
        if not isinstance(payload, Mapping) or not payload.get("id"):
            raise InvalidRecordError("species payload missing id")
        chain = payload.get("evolution_chain")
        url = chain.get("url") if isinstance(chain, Mapping) else None
        try:
            species_id = int(payload["id"])
        except (TypeError, ValueError) as exc:
            raise InvalidRecordError(f"species id is not an integer: {payload['id']!r}") from exc
        return cls(id=species_id, name=str(payload.get("name") or ""), evolution_chain_url=url or None)


@dataclass(frozen=True)
class ChainLink:
    species_url: str
    evolution_details: Tuple[object, ...] = ()
    evolves_to: Tuple["ChainLink", ...] = ()

    @property
    def species_id(self) -> int:
        return id_from_resource_url(self.species_url)

    @classmethod
    def from_api(cls, payload: object) -> "ChainLink":
        """Parse an /evolution-chain body (or any link within it)."""
        if isinstance(payload, Mapping) and "chain" in payload:
            payload = payload["chain"]
        if not isinstance(payload, Mapping):
            raise InvalidRecordError("evolution chain payload is not an object")
        species = payload.get("species")
        if not isinstance(species, Mapping) or not species.get("url"):
            raise InvalidRecordError("evolution chain link missing species url")
        try:
            details = tuple(payload.get("evolution_details") or ())
            children = tuple(payload.get("evolves_to") or ())
        except TypeError as exc:
            raise InvalidRecordError(f"malformed evolution chain link: {exc}") from exc
        return cls(
            species_url=str(species["url"]),
            evolution_details=details,
            evolves_to=tuple(cls.from_api(child) for child in children),
        )


@dataclass(frozen=True)
class SearchOutcome:
    query: str
    records: Tuple[Record, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @classmethod
    def of(cls, query: str, records: Sequence[Record]) -> "SearchOutcome":
        return cls(query=query, records=tuple(records))
