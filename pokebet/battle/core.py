"""Battle core: combatant model, damage mechanics and single-turn resolution.

All randomness (move draw, critical hit, damage variance) is taken from the
``random.Random`` handed to :class:`BattleCore`, so a seeded instance makes a
battle reproducible.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple, Dict, Callable, List
import math
import random

LEVEL = 100
CRIT_CHANCE = 1 / 24
CRIT_MULTIPLIER = 2.0
STAB_MULTIPLIER = 1.5
VARIANCE_MIN = 0.85
MAX_MOVE_DRAWS = 10

PHYSICAL = "physical"
SPECIAL = "special"

# Defensive relations in the order they are applied, with their multipliers
_DEFENSIVE_RELATIONS: Tuple[Tuple[str, float, str], ...] = (
    ("no_damage_from", 0.0, "It has no effect on {name}"),
    ("half_damage_from", 0.5, "It's not very effective on {name}"),
    ("double_damage_from", 2.0, "It's super effective on {name}"),
)

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Element:
    name: str
    double_damage_from: Tuple[str, ...] = ()
    double_damage_to: Tuple[str, ...] = ()
    half_damage_from: Tuple[str, ...] = ()
    half_damage_to: Tuple[str, ...] = ()
    no_damage_from: Tuple[str, ...] = ()
    no_damage_to: Tuple[str, ...] = ()

    def populated_relations(self) -> List[Tuple[str, Tuple[str, ...]]]:
        """(relation, names) pairs for every non-empty relation, in display order."""
        order = ("double_damage_from", "double_damage_to", "half_damage_from",
                 "half_damage_to", "no_damage_from", "no_damage_to")
        return [(r, getattr(self, r)) for r in order if getattr(self, r)]

@dataclass
class Move:
    name: str
    type: str
    category: str = PHYSICAL  # physical | special
    power: int = 0
    accuracy: Optional[int] = 100  # stored for display; never rolled
    pp: int = 0

    def use(self):
        self.pp = max(0, self.pp - 1)

@dataclass
class Combatant:
    id: int
    name: str
    stats: Dict[str, int]
    types: Tuple[Element, ...] = ()
    moves: List[Move] = field(default_factory=list)

    def __post_init__(self):
        # Duplicate elements would double-count effectiveness and STAB
        seen: Dict[str, Element] = {}
        for t in self.types:
            seen.setdefault(t.name, t)
        self.types = tuple(seen.values())

    @property
    def type_names(self) -> Tuple[str, ...]:
        return tuple(t.name for t in self.types)

    def current_hp(self) -> int:
        return max(0, self.stats.get("hp", 0))

    def is_fainted(self) -> bool:
        return self.stats.get("hp", 0) <= 0

    def has_usable_move(self) -> bool:
        return any(m.pp > 0 for m in self.moves)

@dataclass
class TurnResult:
    attacker: Combatant
    defender: Combatant
    move: Optional[Move] = None
    damage: int = 0

    @property
    def forfeited(self) -> bool:
        return self.move is None

class BattleCore:
    def __init__(self, rng: Optional[random.Random] = None, message_cb: Optional[Callable[[str], None]] = None):
        self.rng = rng or random.Random()
        self.message_cb = message_cb

    def _msg(self, text: str):
        if self.message_cb: self.message_cb(text)
        else: print(text)

    # ------------------------------------------------------------------
    # Mechanics
    # ------------------------------------------------------------------
    def get_effectiveness(self, move_type: str, target: Combatant) -> float:
        """Multiplier of a ``move_type`` attack against every element of ``target``.

        Every matching relation on every element applies, so a double and a
        half match cancel out to 1.0.
        """
        mult = 1.0
        for element in target.types:
            for relation, factor, text in _DEFENSIVE_RELATIONS:
                for name in getattr(element, relation):
                    if name == move_type:
                        mult *= factor
                        self._msg(text.format(name=target.name))
        return mult

    def roll_crit(self) -> bool:
        return self.rng.random() < CRIT_CHANCE

    def roll_variance(self) -> float:
        return self.rng.random() * (1.0 - VARIANCE_MIN) + VARIANCE_MIN

    def calc_modifier(self, user: Combatant, move: Move, target: Combatant) -> float:
        modifier = 1.0
        if move.type in user.type_names:
            modifier *= STAB_MULTIPLIER
        modifier *= self.get_effectiveness(move.type, target)
        if self.roll_crit():
            modifier *= CRIT_MULTIPLIER
            self._msg("A critical hit!")
        modifier *= self.roll_variance()
        return modifier

    def calc_damage(self, user: Combatant, move: Move, target: Combatant) -> int:
        if move.category == SPECIAL:
            atk_val = user.stats.get("special-attack", 0)
            def_val = target.stats.get("special-defense", 0)
        else:
            atk_val = user.stats.get("attack", 0)
            def_val = target.stats.get("defense", 0)
        modifier = self.calc_modifier(user, move, target)
        base = ((2 * LEVEL // 5 + 2) * move.power * atk_val // max(1, def_val)) // 50 + 2
        return max(0, math.floor(base * modifier))

    def apply_damage(self, target: Combatant, amount: int):
        # Stored HP is allowed to drop below zero; only reporting clamps it
        target.stats["hp"] = target.stats.get("hp", 0) - int(amount)
        self._msg(f"{target.name} takes {amount} damage")
        if target.is_fainted():
            self._msg(f"{target.name} fainted!")

    # ------------------------------------------------------------------
    # Turn resolution
    # ------------------------------------------------------------------
    def select_move(self, user: Combatant) -> Optional[Move]:
        """Draw a random move with PP left, giving up after ``MAX_MOVE_DRAWS`` draws."""
        if not user.moves:
            return None
        for _ in range(MAX_MOVE_DRAWS):
            move = self.rng.choice(user.moves)
            if move.pp > 0:
                return move
        return None

    def run_turn(self, user: Combatant, target: Combatant) -> TurnResult:
        result = TurnResult(attacker=user, defender=target)
        if user.is_fainted():
            return result
        move = self.select_move(user)
        if move is None:
            self._msg(f"{user.name} has no moves left")
            return result
        self._msg(f"{user.name} uses {move.name}")
        move.use()
        damage = self.calc_damage(user, move, target)
        self.apply_damage(target, damage)
        result.move = move
        result.damage = damage
        return result

__all__ = ["BattleCore", "Combatant", "Element", "Move", "TurnResult",
           "LEVEL", "MAX_MOVE_DRAWS", "PHYSICAL", "SPECIAL"]
