"""Higher-level battle session orchestration for 1v1 battles.

The first combatant always opens and turns alternate strictly; speed is never
consulted. The battle ends as soon as the side that was just attacked faints.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional
from pokebet.core.logging import logger
from .core import BattleCore, Combatant, TurnResult

ONGOING = "ONGOING"
TERMINAL = "TERMINAL"
STALEMATE = "STALEMATE"

@dataclass
class BattleOutcome:
    state: str
    winner: Optional[Combatant]
    loser: Optional[Combatant]
    turns: int

class BattleSession:
    def __init__(self, first: Combatant, second: Combatant, core: Optional[BattleCore] = None,
                 *, on_message: Optional[Callable[[str], None]] = None):
        self.first = first
        self.second = second
        self.core = core or BattleCore()
        self.turn_counter = 0
        self.log: List[str] = []
        self.turns: List[TurnResult] = []
        self.winner: Optional[Combatant] = None
        self.loser: Optional[Combatant] = None
        self._attacker, self._defender = first, second

        def _capture(msg: str):
            self.log.append(msg)
            if on_message:
                on_message(msg)
        self.core.message_cb = _capture

    @property
    def state(self) -> str:
        if self.loser is not None:
            return TERMINAL
        # Nobody can deal damage any more, so alternation would never end
        if not self.first.has_usable_move() and not self.second.has_usable_move():
            return STALEMATE
        return ONGOING

    def is_over(self) -> bool:
        return self.state != ONGOING

    def step(self) -> Optional[TurnResult]:
        if self.is_over():
            return None
        attacker, defender = self._attacker, self._defender
        result = self.core.run_turn(attacker, defender)
        self.turns.append(result)
        self.turn_counter += 1
        if defender.is_fainted():
            self.winner, self.loser = attacker, defender
        self._attacker, self._defender = defender, attacker
        return result

    def run(self) -> BattleOutcome:
        logger.debug("BattleStart", first=self.first.name, second=self.second.name)
        while not self.is_over():
            self.step()
        outcome = self.outcome()
        logger.info("BattleOver", state=outcome.state, turns=outcome.turns,
                    winner=outcome.winner.name if outcome.winner else None)
        return outcome

    def outcome(self) -> BattleOutcome:
        return BattleOutcome(state=self.state, winner=self.winner, loser=self.loser, turns=self.turn_counter)

__all__ = ["BattleSession", "BattleOutcome", "ONGOING", "TERMINAL", "STALEMATE"]
