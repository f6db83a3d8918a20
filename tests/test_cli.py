import io
import json
import random
import urllib.error
from unittest import mock

import pytest

from pokedexcli import cli
from pokedexcli.cache import Cache
from pokedexcli.models import Config, PokemonInfo

START = "https://pokeapi.co/api/v2/location-area"
PAGE2 = "https://pokeapi.co/api/v2/location-area?offset=20&limit=20"


def _page(names, next_url, previous_url):
    return json.dumps(
        {
            "count": 40,
            "next": next_url,
            "previous": previous_url,
            "results": [{"name": n, "url": f"{START}/{n}/"} for n in names],
        }
    ).encode()


POKEMON = json.dumps(
    {
        "id": 25,
        "name": "pikachu",
        "base_experience": 64,
        "height": 4,
        "weight": 60,
        "stats": [
            {"base_stat": 35, "effort": 0, "stat": {"name": "hp", "url": "u"}},
            {"base_stat": 55, "effort": 0, "stat": {"name": "attack", "url": "u"}},
        ],
        "types": [{"slot": 1, "type": {"name": "electric", "url": "u"}}],
    }
).encode()

AREA = json.dumps(
    {
        "id": 1,
        "name": "canalave-city-area",
        "pokemon_encounters": [
            {"pokemon": {"name": "tentacool", "url": "u"}},
            {"pokemon": {"name": "staryu", "url": "u"}},
        ],
    }
).encode()


class _Server:
    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def __call__(self, url, timeout=None):
        self.calls.append(url)
        return io.BytesIO(self.routes[url])


@pytest.fixture
def config():
    cfg = Config.create(START, 60)
    yield cfg
    cfg.cache.close()
    cfg.exp_cache.close()


@pytest.mark.parametrize(
    "text, expected",
    [
        (" hello world ", ["hello", "world"]),
        ("Charmander Bulbasaur PIKACHU", ["charmander", "bulbasaur", "pikachu"]),
        ("   ", []),
    ],
)
def test_clean_input(text, expected):
    assert cli.clean_input(text) == expected


def test_calc_prob_values():
    assert cli.calc_prob(0) == pytest.approx(1.57569)
    assert cli.calc_prob(100) < cli.calc_prob(50) < cli.calc_prob(0)


@pytest.mark.parametrize("p", [-0.1, 1.5])
def test_generate_bernoulli_rejects_out_of_range(p):
    with pytest.raises(ValueError, match="between 0 and 1"):
        cli.generate_bernoulli(p)


def test_generate_bernoulli_extremes():
    rng = random.Random(1)
    assert all(cli.generate_bernoulli(1.0, rng) for _ in range(50))
    assert not any(cli.generate_bernoulli(0.0, rng) for _ in range(50))


def test_generate_bernoulli_seeded_is_reproducible():
    first = [cli.generate_bernoulli(0.5, random.Random(7)) for _ in range(5)]
    second = [cli.generate_bernoulli(0.5, random.Random(7)) for _ in range(5)]
    assert first == second


def test_fetch_returns_body():
    server = _Server({"https://example.com/a": b"payload"})
    with mock.patch("urllib.request.urlopen", side_effect=server):
        assert cli.fetch("https://example.com/a") == b"payload"


def test_fetch_http_error_returns_body():
    err = urllib.error.HTTPError(
        "https://example.com/x", 404, "Not Found", {}, io.BytesIO(b"Not Found")
    )
    with mock.patch("urllib.request.urlopen", side_effect=err):
        assert cli.fetch("https://example.com/x") == b"Not Found"


def test_fetch_connection_failure():
    with mock.patch(
        "urllib.request.urlopen", side_effect=urllib.error.URLError("refused")
    ):
        with pytest.raises(ConnectionError, match="Error creating request"):
            cli.fetch("https://example.com/x")


def test_fetch_cached_fetches_once():
    calls = []

    def fetcher(url):
        calls.append(url)
        return b"data"

    with Cache(60) as cache:
        assert cli.fetch_cached(cache, "https://example.com", fetcher) == b"data"
        assert cli.fetch_cached(cache, "https://example.com", fetcher) == b"data"
    assert calls == ["https://example.com"]


def test_map_and_mapb(config, capsys):
    server = _Server(
        {
            START: _page(["canalave-city-area", "eterna-city-area"], PAGE2, None),
            PAGE2: _page(["pastoria-city-area"], None, START),
        }
    )
    with mock.patch("urllib.request.urlopen", side_effect=server):
        cli.command_map(config, "")
        assert config.next == PAGE2
        assert config.previous is None
        cli.command_map(config, "")
        assert config.next is None
        assert config.previous == START
        cli.command_mapb(config, "")
    out = capsys.readouterr().out
    assert "canalave-city-area\neterna-city-area\n" in out
    assert "pastoria-city-area\n" in out
    assert f"url : {START} Retrieved from Cache" in out
    assert server.calls == [START, PAGE2]


def test_mapb_on_first_page(config, capsys):
    cli.command_mapb(config, "")
    assert capsys.readouterr().out == "you're on the first page\n"


def test_explore_lists_pokemon(config, capsys):
    url = f"{START}/canalave-city-area"
    server = _Server({url: AREA})
    with mock.patch("urllib.request.urlopen", side_effect=server):
        cli.command_explore(config, "canalave-city-area")
    out = capsys.readouterr().out
    assert out.startswith("Exploring canalave-city-area...\n")
    assert "tentacool\nstaryu\n" in out
    assert url in config.exp_cache


def test_catch_success_and_inspect(config, capsys):
    server = _Server({f"{cli.POKEMON_URL}/pikachu": POKEMON})
    with mock.patch("urllib.request.urlopen", side_effect=server), mock.patch(
        "random.random", return_value=0.0
    ):
        cli.command_catch(config, "pikachu")
    assert "pikachu" in config.pokedex
    cli.command_inspect(config, "pikachu")
    out = capsys.readouterr().out
    assert "Throwing a Pokeball at pikachu...\npikachu was caught!\n" in out
    assert (
        "Name: pikachu\nHeight: 4\nWeight: 60\nStats:\n -hp: 35\n -attack: 55\n"
        "Types:\n - electric \n"
    ) in out


def test_catch_escape(config, capsys):
    server = _Server({f"{cli.POKEMON_URL}/pikachu": POKEMON})
    with mock.patch("urllib.request.urlopen", side_effect=server), mock.patch(
        "random.random", return_value=0.99
    ):
        cli.command_catch(config, "pikachu")
    assert config.pokedex == {}
    assert "pikachu escaped!" in capsys.readouterr().out


def test_catch_probability_above_one_is_error(config):
    body = json.dumps({"name": "weak", "base_experience": 0}).encode()
    server = _Server({f"{cli.POKEMON_URL}/weak": body})
    with mock.patch("urllib.request.urlopen", side_effect=server):
        with pytest.raises(ValueError):
            cli.command_catch(config, "weak")


def test_inspect_uncaught(config, capsys):
    cli.command_inspect(config, "mew")
    assert capsys.readouterr().out == "you have not caught that pokemon\n"


def test_pokedex_lists_caught(config, capsys):
    config.pokedex["pidgey"] = PokemonInfo(name="pidgey")
    config.pokedex["rattata"] = PokemonInfo(name="rattata")
    cli.command_pokedex(config, "")
    assert capsys.readouterr().out == "Your Pokedex:\n -pidgey\n -rattata\n"


def test_exit_raises_system_exit(config, capsys):
    with pytest.raises(SystemExit) as info:
        cli.command_exit(config, "")
    assert info.value.code == 0
    assert capsys.readouterr().out == "Closing the Pokedex... Goodbye!\n"


def test_get_commands_names():
    commands = cli.get_commands()
    assert list(commands) == [
        "exit", "help", "map", "mapb", "explore", "catch", "inspect", "pokedex",
    ]
    assert commands["map"].description == "Lists next 20 location areas"
    assert commands["catch"].callback is cli.command_catch


def test_help_lists_commands(config, capsys):
    cli.command_help(config, "")
    out = capsys.readouterr().out
    assert out.startswith("Welcome to the Pokedex!\nUsage\n\n")
    assert "explore: Explores given location area\n" in out


def test_run_repl_dispatch(config, capsys):
    cli.run_repl(config, ["", "FLY away", "INSPECT Mew"])
    out = capsys.readouterr().out
    assert out.count(cli.PROMPT) == 4
    assert "Unknown command\n" in out
    assert "you have not caught that pokemon\n" in out


def test_run_repl_prints_errors(config, capsys):
    url = f"{START}/nowhere"
    err = urllib.error.HTTPError(url, 404, "Not Found", {}, io.BytesIO(b"Not Found"))
    with mock.patch("urllib.request.urlopen", side_effect=err):
        cli.run_repl(config, ["explore nowhere"])
    out = capsys.readouterr().out
    assert "Exploring nowhere...\n" in out
    assert "Expecting value" in out


def test_run_repl_exit(config):
    with pytest.raises(SystemExit):
        cli.run_repl(config, ["exit", "help"])


def test_main_exit(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("help\nexit\n"))
    assert cli.main() == 0
    out = capsys.readouterr().out
    assert "Welcome to the Pokedex!" in out
    assert "Closing the Pokedex... Goodbye!" in out