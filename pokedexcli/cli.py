"""The interactive Pokédex command loop and its commands."""

from __future__ import annotations

import math
import random
import sys
import urllib.error
import urllib.request
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from pokedexcli.cache import Cache
from pokedexcli.models import (
    LOCATION_AREA_URL,
    Config,
    LocationAreaInfo,
    LocationAreaPage,
    PokemonInfo,
)

POKEMON_URL = "https://pokeapi.co/api/v2/pokemon"
PROMPT = "Pokedex >"
_TIMEOUT = 30.0

_K = 1.57569
_ALPHA = 0.014055


def clean_input(text: str) -> list[str]:
    """Lower-case ``text`` and split it into whitespace-separated words."""
    return text.lower().split()


def calc_prob(base_exp: int) -> float:
    """Chance of catching a Pokémon with the given base experience."""
    return _K * math.exp(-_ALPHA * base_exp)


def generate_bernoulli(p: float, rng: random.Random | None = None) -> bool:
    """Return True with probability ``p``."""
    if p < 0 or p > 1:
        raise ValueError("p must be between 0 and 1")
    draw = rng.random() if rng is not None else random.random()
    return draw < p


def fetch(url: str) -> bytes:
    """Download the body at ``url``; an HTTP error status still yields its body."""
    try:
        with urllib.request.urlopen(url, timeout=_TIMEOUT) as resp:
            return resp.read()
    except urllib.error.HTTPError as exc:
        return exc.read() or b""
    except (urllib.error.URLError, OSError) as exc:
        raise ConnectionError(f"Error creating request: {exc}") from exc


def fetch_cached(
    cache: Cache, url: str, fetcher: Callable[[str], bytes] = fetch
) -> bytes:
    """Return the body for ``url`` from ``cache``, fetching and storing it if absent."""
    data = cache.get(url)
    if data is None:
        data = fetcher(url)
        cache.add(url, data)
    return data


def command_exit(config: Config, argument: str) -> None:
    """Say goodbye and end the session."""
    print("Closing the Pokedex... Goodbye!")
    raise SystemExit(0)


def command_help(config: Config, argument: str) -> None:
    """Print the list of commands."""
    print("Welcome to the Pokedex!")
    print("Usage")
    print("")
    for command in get_commands().values():
        print(f"{command.name}: {command.description}")


def _show_page(config: Config, url: str) -> None:
    page = LocationAreaPage.from_json(fetch_cached(config.cache, url))
    for result in page.results:
        print(result.name)
    config.next = page.next
    config.previous = page.previous


def command_map(config: Config, argument: str) -> None:
    """List the next page of location areas."""
    if config.next is None:
        print("you're on the last page")
        return
    _show_page(config, config.next)


def command_mapb(config: Config, argument: str) -> None:
    """List the previous page of location areas."""
    if config.previous is None:
        print("you're on the first page")
        return
    _show_page(config, config.previous)


def command_explore(config: Config, argument: str) -> None:
    """List the Pokémon that can be met in the named location area."""
    print(f"Exploring {argument}...")
    url = f"{LOCATION_AREA_URL}/{argument}"
    info = LocationAreaInfo.from_json(fetch_cached(config.exp_cache, url))
    for pokemon in info.pokemon_encounters:
        print(pokemon.name)


def command_catch(config: Config, argument: str) -> None:
    """Throw a Pokéball at the named Pokémon and record it if caught."""
    print(f"Throwing a Pokeball at {argument}...")
    info = PokemonInfo.from_json(fetch(f"{POKEMON_URL}/{argument}"))
    if generate_bernoulli(calc_prob(info.base_experience)):
        print(f"{argument} was caught!")
        config.pokedex[argument] = info
    else:
        print(f"{argument} escaped!")


def command_inspect(config: Config, argument: str) -> None:
    """Show the details of a caught Pokémon."""
    info = config.pokedex.get(argument)
    if info is None:
        print("you have not caught that pokemon")
        return
    print(f"Name: {info.name}")
    print(f"Height: {info.height}")
    print(f"Weight: {info.weight}")
    print("Stats:")
    for stat in info.stats:
        print(f" -{stat.name}: {stat.base_stat}")
    print("Types:")
    for type_name in info.types:
        print(f" - {type_name} ")


def command_pokedex(config: Config, argument: str) -> None:
    """List every caught Pokémon."""
    print("Your Pokedex:")
    for name in config.pokedex:
        print(f" -{name}")


@dataclass(frozen=True)
class Command:
    """A named command of the interactive loop."""

    name: str
    description: str
    callback: Callable[[Config, str], None]


def get_commands() -> dict[str, Command]:
    """Return every command keyed by its name."""
    commands = [
        Command("exit", "Exit the Pokedex", command_exit),
        Command("help", "Displays a help message", command_help),
        Command("map", "Lists next 20 location areas", command_map),
        Command("mapb", "Lists previous 20 location areas", command_mapb),
        Command("explore", "Explores given location area", command_explore),
        Command("catch", "Try to catch given pokemon", command_catch),
        Command("inspect", "Inspect stats of caught pokemon", command_inspect),
        Command("pokedex", "Displays pokemon filled in Pokedex", command_pokedex),
    ]
    return {command.name: command for command in commands}


def run_repl(config: Config, lines: Iterable[str]) -> None:
    """Prompt for and run commands read from ``lines`` until they run out."""
    commands = get_commands()
    source = iter(lines)
    while True:
        print(PROMPT, end="", flush=True)
        try:
            line = next(source)
        except StopIteration:
            print()
            return
        words = clean_input(line)
        if not words:
            continue
        command = commands.get(words[0])
        if command is None:
            print("Unknown command")
            continue
        try:
            command.callback(config, " ".join(words[1:]))
        except (OSError, ValueError) as exc:
            print(exc)


def main(argv: list[str] | None = None) -> int:
    """Run an interactive session on standard input."""
    config = Config.create()
    try:
        run_repl(config, sys.stdin)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0
    finally:
        config.cache.close()
        config.exp_cache.close()
    return 0