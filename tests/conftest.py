import random
from types import SimpleNamespace

import pytest

from pokebet.core.errors import FetchError

API = "https://pokeapi.test/api/v2"


def type_record(name, **relations):
    rel = {k: [] for k in ("double_damage_from", "double_damage_to", "half_damage_from",
                           "half_damage_to", "no_damage_from", "no_damage_to")}
    for k, names in relations.items():
        rel[k] = [{"name": n, "url": f"{API}/type/{n}/"} for n in names]
    return {"id": 1, "name": name, "damage_relations": rel}


def move_record(name, type_name="normal", power=40, accuracy=100, pp=35, damage_class="physical"):
    return {"id": 1, "name": name, "power": power, "accuracy": accuracy, "pp": pp,
            "type": {"name": type_name, "url": f"{API}/type/{type_name}/"},
            "damage_class": {"name": damage_class, "url": f"{API}/move-damage-class/1/"}}


def entity_record(entity_id, name, types, moves, base=None):
    base = base or {"hp": 100, "attack": 100, "defense": 100,
                    "special-attack": 100, "special-defense": 100, "speed": 100}
    return {
        "id": entity_id,
        "name": name,
        "stats": [{"base_stat": v, "effort": 0, "stat": {"name": k, "url": f"{API}/stat/{k}/"}}
                  for k, v in base.items()],
        "types": [{"slot": i + 1, "type": {"name": t, "url": f"{API}/type/{t}/"}}
                  for i, t in enumerate(types)],
        "moves": [{"move": {"name": m, "url": f"{API}/move/{m}/"}} for m in moves],
    }


class FakeProvider:
    """In-memory DataProvider keyed the same way PokeApiProvider is."""

    def __init__(self, entities=(), moves=(), types=()):
        self.entities = {e["id"]: e for e in entities}
        self.moves = {f"{API}/move/{m['name']}/": m for m in moves}
        self.types = {f"{API}/type/{t['name']}/": t for t in types}
        self.calls = []

    def fetch_entity(self, entity_id):
        self.calls.append(("entity", entity_id))
        if entity_id not in self.entities:
            raise FetchError(f"{API}/pokemon/{entity_id}", "404 Not Found")
        return self.entities[entity_id]

    def fetch_move(self, ref):
        self.calls.append(("move", ref))
        if ref not in self.moves:
            raise FetchError(ref, "404 Not Found")
        return self.moves[ref]

    def fetch_type(self, ref):
        self.calls.append(("type", ref))
        if ref not in self.types:
            raise FetchError(ref, "404 Not Found")
        return self.types[ref]


class ScriptedRandom(random.Random):
    """Random whose ``random()`` replays a fixed script and counts ``choice`` draws."""

    def __init__(self):
        super().__init__(0)
        self.values = []
        self.choices = 0

    # Random.__init_subclass__ routes _randbelow (choice/shuffle/randint) through random()
    # when a subclass overrides random() alone; defining getrandbits keeps them off the script
    def getrandbits(self, k):
        return super().getrandbits(k)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return super().random()

    def choice(self, seq):
        self.choices += 1
        return super().choice(seq)


@pytest.fixture
def rec():
    return SimpleNamespace(type=type_record, move=move_record, entity=entity_record, API=API)


@pytest.fixture
def provider_cls():
    return FakeProvider


@pytest.fixture
def scripted_rng():
    def make(values=()):
        rng = ScriptedRandom()
        rng.values = list(values)
        return rng
    return make
