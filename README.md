# pokedexcli

An interactive Pokedex for the terminal. It pages through the location areas
known to the PokeAPI, lists the Pokemon that can be met in an area, and lets
you try to catch them. Caught Pokemon go into your Pokedex for the rest of the
session, where you can inspect their height, weight, stats and types.

## Installation

```
pip install .
```

Python 3.10 or later is required. The package has no third-party
dependencies; HTTP requests are made with the standard library.

## Usage

Start the prompt:

```
pokedexcli
```

You will see a `Pokedex >` prompt. Each line is lower-cased and split on
whitespace. The first word is the command and the remaining words, joined by
single spaces, are its argument. Blank lines are ignored; an unrecognised
command prints `Unknown command`. The session ends on `exit` or at the end of
input.

| Command             | What it does                                 |
|---------------------|----------------------------------------------|
| `help`              | Displays a help message                      |
| `map`               | Lists next 20 location areas                 |
| `mapb`              | Lists previous 20 location areas             |
| `explore <area>`    | Explores given location area                 |
| `catch <pokemon>`   | Try to catch given pokemon                   |
| `inspect <pokemon>` | Inspect stats of caught pokemon              |
| `pokedex`           | Displays pokemon filled in Pokedex           |
| `exit`              | Exit the Pokedex                             |

`map` on the last page prints `you're on the last page`; `mapb` before any
earlier page exists prints `you're on the first page`.

An example session:

```
Pokedex >map
canalave-city-area
eterna-city-area
...
Pokedex >explore canalave-city-area
Exploring canalave-city-area...
tentacool
...
Pokedex >catch tentacool
Throwing a Pokeball at tentacool...
tentacool was caught!
Pokedex >inspect tentacool
Name: tentacool
Height: 9
Weight: 455
Stats:
 -hp: 40
 ...
Types:
 - water 
 - poison 
```

### Catching

The chance of a catch falls as the Pokemon's base experience rises. It is
`1.57569 * exp(-0.014055 * base_experience)`, and a catch attempt is a single
random draw against that probability. For Pokemon with a very low base
experience the formula gives a value above 1; the attempt is then refused and
the prompt prints `p must be between 0 and 1`.

### Errors

Network failures and responses that are not the expected JSON do not end the
session: the error message is printed and the prompt returns. A response with
an HTTP error status is read like any other, so an unknown area or Pokemon
name usually shows up as a JSON decoding error.

### Caching

Responses for `map`, `mapb` and `explore` are kept in in-memory caches (one
for the location-area pages, one for explored areas). A background thread
runs every five seconds and removes entries older than five seconds. A line
is printed whenever a URL is added to a cache or read back from it.
`catch` always fetches afresh.

## What it does not do

The Pokedex lives only in memory: caught Pokemon are lost when the session
ends, and nothing is saved to or loaded from disk.

## Using it as a library

The pieces can be used on their own:

```python
from pokedexcli.cache import Cache
from pokedexcli.cli import clean_input, calc_prob, generate_bernoulli

with Cache(5.0) as cache:
    cache.add("https://example.com", b"data")
    value = cache.get("https://example.com")   # b"data", or None once expired

clean_input("  Charmander PIKACHU ")   # ["charmander", "pikachu"]
calc_prob(64)
generate_bernoulli(0.5)                # True or False
```

`Cache(interval)` raises `ValueError` for an interval that is not positive;
`Cache.reap(now)` removes stale entries on demand and returns how many it
removed, and `Cache.close()` stops the background thread.

`pokedexcli.models` holds the response types (`LocationAreaPage`,
`LocationAreaInfo`, `PokemonInfo`, `PokemonStat`, `NamedResource`), each built
with `from_json` from bytes, a string or an already decoded mapping.

`pokedexcli.cli.run_repl(config, lines)` runs the command loop over any
iterable of input lines. Build its `config` with
`pokedexcli.models.Config.create(start_url, interval)`; both arguments have
defaults (the PokeAPI location-area listing and five seconds).

## Running the tests

```
pip install ".[test]"
pytest
```