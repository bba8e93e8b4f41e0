"""
Battle system package.
- core.py (Combatant, Move, Element, damage & effectiveness, turn resolution)
- factory.py (building combatants from provider records)
- session.py (alternating 1v1 battle loop)
"""
from .core import BattleCore, Combatant, Element, Move
from .factory import EntityBuilder
from .session import BattleSession, BattleOutcome
__all__ = ["BattleCore", "Combatant", "Element", "Move", "EntityBuilder", "BattleSession", "BattleOutcome"]
