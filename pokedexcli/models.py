"""Data types for API responses and the interactive session state."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pokedexcli.cache import Cache

LOCATION_AREA_URL = "https://pokeapi.co/api/v2/location-area"
DEFAULT_CACHE_INTERVAL = 5.0

_T = TypeVar("_T")


def _load(data: Any) -> Mapping[str, Any]:
    if isinstance(data, (bytes, bytearray, str)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _field(data: Mapping[str, Any], key: str, kind: type[_T], default: _T) -> _T:
    value = data.get(key)
    if value is None:
        return default
    if kind is int and isinstance(value, bool):
        raise ValueError(f"field {key!r} must be an integer")
    if not isinstance(value, kind):
        raise ValueError(f"field {key!r} must be of type {kind.__name__}")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string or null")
    return value


def _objects(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    return [_load(item) for item in _field(data, key, list, [])]


def _object(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return {} if value is None else _load(value)


@dataclass(frozen=True)
class NamedResource:
    """A name together with the API URL describing it."""

    name: str = ""
    url: str = ""

    @classmethod
    def from_json(cls, data: Any) -> NamedResource:
        obj = _load(data)
        return cls(name=_field(obj, "name", str, ""), url=_field(obj, "url", str, ""))


@dataclass(frozen=True)
class LocationAreaPage:
    """One page of the paginated location-area listing."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: tuple[NamedResource, ...] = ()

    @classmethod
    def from_json(cls, data: Any) -> LocationAreaPage:
        obj = _load(data)
        return cls(
            count=_field(obj, "count", int, 0),
            next=_optional_str(obj, "next"),
            previous=_optional_str(obj, "previous"),
            results=tuple(NamedResource.from_json(r) for r in _objects(obj, "results")),
        )


@dataclass(frozen=True)
class LocationAreaInfo:
    """Details of a single location area, including the Pokémon met there."""

    id: int = 0
    name: str = ""
    game_index: int = 0
    location: NamedResource = NamedResource()
    pokemon_encounters: tuple[NamedResource, ...] = ()

    @classmethod
    def from_json(cls, data: Any) -> LocationAreaInfo:
        obj = _load(data)
        return cls(
            id=_field(obj, "id", int, 0),
            name=_field(obj, "name", str, ""),
            game_index=_field(obj, "game_index", int, 0),
            location=NamedResource.from_json(_object(obj, "location")),
            pokemon_encounters=tuple(
                NamedResource.from_json(_object(enc, "pokemon"))
                for enc in _objects(obj, "pokemon_encounters")
            ),
        )


@dataclass(frozen=True)
class PokemonStat:
    """A base stat of a Pokémon."""

    name: str = ""
    base_stat: int = 0
    effort: int = 0

    @classmethod
    def from_json(cls, data: Any) -> PokemonStat:
        obj = _load(data)
        return cls(
            name=_field(_object(obj, "stat"), "name", str, ""),
            base_stat=_field(obj, "base_stat", int, 0),
            effort=_field(obj, "effort", int, 0),
        )


@dataclass(frozen=True)
class PokemonInfo:
    """The parts of a Pokémon record that the Pokédex uses."""

    id: int = 0
    name: str = ""
    base_experience: int = 0
    height: int = 0
    weight: int = 0
    order: int = 0
    is_default: bool = False
    stats: tuple[PokemonStat, ...] = ()
    types: tuple[str, ...] = ()
    abilities: tuple[str, ...] = ()

    @classmethod
    def from_json(cls, data: Any) -> PokemonInfo:
        obj = _load(data)
        return cls(
            id=_field(obj, "id", int, 0),
            name=_field(obj, "name", str, ""),
            base_experience=_field(obj, "base_experience", int, 0),
            height=_field(obj, "height", int, 0),
            weight=_field(obj, "weight", int, 0),
            order=_field(obj, "order", int, 0),
            is_default=_field(obj, "is_default", bool, False),
            stats=tuple(PokemonStat.from_json(s) for s in _objects(obj, "stats")),
            types=tuple(
                _field(_object(t, "type"), "name", str, "") for t in _objects(obj, "types")
            ),
            abilities=tuple(
                _field(_object(a, "ability"), "name", str, "")
                for a in _objects(obj, "abilities")
            ),
        )


@dataclass
class Config:
    """State carried between commands of an interactive session."""

    next: str | None
    previous: str | None
    cache: Cache
    exp_cache: Cache
    pokedex: dict[str, PokemonInfo] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        start_url: str = LOCATION_AREA_URL,
        interval: float = DEFAULT_CACHE_INTERVAL,
    ) -> Config:
        """Build a fresh session starting at ``start_url`` with empty caches."""
        return cls(
            next=start_url,
            previous=None,
            cache=Cache(interval),
            exp_cache=Cache(interval),
        )