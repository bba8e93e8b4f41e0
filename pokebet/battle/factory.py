"""Factory helpers for constructing Combatant instances from provider records.

Stats are scaled to a fixed level-100 profile (IV 31, EV 252 in every stat),
elements are resolved from their type records and a random loadout of up to
four damaging moves is drawn from the entity's move list.
"""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Tuple
import random
import threading

from pokebet.core.errors import ParseError
from pokebet.core.logging import logger
from pokebet.data.provider import DataProvider, RawRecord
from pokebet.data.schema import ENTITY_SCHEMA, MOVE_SCHEMA, RELATION_KEYS, TYPE_SCHEMA, validate_record
from .core import Combatant, Element, Move, LEVEL, PHYSICAL, SPECIAL

IV = 31
EV = 252
LOADOUT_SIZE = 4
STAT_NAMES = ("hp", "attack", "defense", "special-attack", "special-defense", "speed")
MAX_ENTITY_ID = 898  # last id of the generation 8 dex

def derive_stat(name: str, base: int, level: int = LEVEL) -> int:
    scaled = ((2 * base + IV + EV // 4) * level) // 100
    if name == "hp":
        return scaled + level + 10
    return scaled + 5

def derive_stats(base: Dict[str, int], level: int = LEVEL) -> Dict[str, int]:
    return {k: derive_stat(k, v, level) for k, v in base.items()}

def element_from_record(raw: RawRecord, ref: str = "type record") -> Element:
    validate_record(raw, TYPE_SCHEMA, ref)
    rel = raw["damage_relations"]
    names = {k: tuple(t["name"] for t in rel[k]) for k in RELATION_KEYS}
    return Element(name=raw["name"], **names)

def move_from_record(raw: RawRecord, ref: str = "move record") -> Optional[Move]:
    """Build a Move, or None when the record lacks accuracy or power.

    Raises ParseError when a required field is missing or mistyped.
    """
    validate_record(raw, MOVE_SCHEMA, ref)
    if raw.get("accuracy") is None or raw.get("power") is None:
        return None
    category = SPECIAL if raw["damage_class"]["name"] == SPECIAL else PHYSICAL
    return Move(
        name=raw["name"],
        type=raw["type"]["name"],
        category=category,
        power=int(raw["power"]),
        accuracy=int(raw["accuracy"]),
        pp=int(raw["pp"]),
    )

def select_loadout(candidates: List[Move], rng: random.Random, count: int = LOADOUT_SIZE) -> List[Move]:
    if len(candidates) <= count:
        return list(candidates)
    pool = list(candidates)
    rng.shuffle(pool)
    return pool[:count]

def random_entity_id(rng: random.Random, max_entity_id: int = MAX_ENTITY_ID) -> int:
    return rng.randint(1, max_entity_id)

class EntityBuilder:
    def __init__(self, provider: DataProvider, rng: Optional[random.Random] = None,
                 move_candidate_cap: int = 10):
        self.provider = provider
        self.rng = rng or random.Random()
        self.move_candidate_cap = move_candidate_cap
        # Elements are immutable, so one instance per type reference is shared by all combatants
        self._elements: Dict[str, Element] = {}
        self._elements_lock = threading.Lock()

    def build(self, entity_id: int, rng: Optional[random.Random] = None) -> Combatant:
        logger.debug("FetchEntity", id=entity_id)
        raw = self.provider.fetch_entity(entity_id)
        return self.from_record(raw, rng)

    def from_record(self, raw: RawRecord, rng: Optional[random.Random] = None) -> Combatant:
        rng = rng or self.rng
        ref = f"entity {raw.get('id')}" if isinstance(raw, dict) else "entity record"
        validate_record(raw, ENTITY_SCHEMA, ref)
        base = {s["stat"]["name"]: int(s["base_stat"]) for s in raw["stats"]}
        missing = [n for n in STAT_NAMES if n not in base]
        if missing:
            raise ParseError(ref, f"missing stats {', '.join(missing)}")
        stats = derive_stats({n: base[n] for n in STAT_NAMES})
        types = tuple(self._element(t["type"]["url"]) for t in raw["types"])
        candidates = self._candidate_moves(raw)
        moves = select_loadout(candidates, rng)
        combatant = Combatant(id=int(raw["id"]), name=raw["name"], stats=stats, types=types, moves=moves)
        logger.info("CombatantBuilt", id=combatant.id, name=combatant.name,
                    types="/".join(combatant.type_names), moves=len(moves), candidates=len(candidates))
        return combatant

    def build_pair(self, first_id: int, second_id: int) -> Tuple[Combatant, Combatant]:
        """Build two combatants concurrently; either failure aborts the pair."""
        # Child RNGs are drawn up front so a seeded builder stays reproducible across threads
        rngs = [random.Random(self.rng.getrandbits(64)) for _ in range(2)]
        with ThreadPoolExecutor(max_workers=2) as executor:
            first = executor.submit(self.build, first_id, rngs[0])
            second = executor.submit(self.build, second_id, rngs[1])
            return first.result(), second.result()

    def _element(self, ref: str) -> Element:
        with self._elements_lock:
            cached = self._elements.get(ref)
        if cached is not None:
            return cached
        element = element_from_record(self.provider.fetch_type(ref), ref)
        with self._elements_lock:
            return self._elements.setdefault(ref, element)

    def _candidate_moves(self, raw: RawRecord) -> List[Move]:
        candidates: List[Move] = []
        for entry in raw["moves"]:
            if len(candidates) >= self.move_candidate_cap:
                break
            url = entry["move"]["url"]
            move = move_from_record(self.provider.fetch_move(url), url)
            if move is None:
                logger.debug("MoveSkipped", move=entry["move"]["name"])
                continue
            candidates.append(move)
        return candidates

__all__ = ["EntityBuilder", "derive_stat", "derive_stats", "element_from_record",
           "move_from_record", "select_loadout", "random_entity_id", "LOADOUT_SIZE", "MAX_ENTITY_ID"]
