import random

from pokebet.battle.core import BattleCore, Combatant, Element, Move
from pokebet.battle.session import BattleSession, ONGOING, TERMINAL, STALEMATE


class FixedDamageCore(BattleCore):
    def calc_damage(self, user, move, target):
        return 10


def combatant(name, hp, moves):
    return Combatant(id=1, name=name, types=(Element("normal"),), moves=moves,
                     stats={"hp": hp, "attack": 100, "defense": 100,
                            "special-attack": 100, "special-defense": 100, "speed": 100})


def test_fixed_damage_battle_ends_after_six_attacker_turns():
    attacker = combatant("first", 50, [Move(name="jab", type="normal", power=40, pp=10_000)])
    defender = combatant("second", 60, [])
    session = BattleSession(attacker, defender, FixedDamageCore(random.Random(0)))
    outcome = session.run()
    assert outcome.state == TERMINAL
    assert outcome.winner is attacker and outcome.loser is defender
    attacker_turns = [t for t in session.turns if t.attacker is attacker]
    assert len(attacker_turns) == 6
    assert outcome.turns == 11  # defender's five forfeits interleave
    assert defender.stats["hp"] == 0
    assert attacker.stats["hp"] == 50


def test_turns_alternate_strictly_regardless_of_speed():
    slow = combatant("slow", 500, [Move(name="a", type="normal", power=10, pp=50)])
    fast = combatant("fast", 500, [Move(name="b", type="normal", power=10, pp=50)])
    slow.stats["speed"], fast.stats["speed"] = 1, 999
    session = BattleSession(slow, fast, FixedDamageCore(random.Random(0)))
    for _ in range(6):
        session.step()
    assert [t.attacker.name for t in session.turns] == ["slow", "fast"] * 3
    assert session.state == ONGOING


def test_second_combatant_can_win():
    weak = combatant("weak", 10, [])
    strong = combatant("strong", 100, [Move(name="b", type="normal", power=10, pp=50)])
    outcome = BattleSession(weak, strong, FixedDamageCore(random.Random(0))).run()
    assert outcome.winner is strong and outcome.loser is weak
    assert outcome.turns == 2


def test_no_steps_after_terminal():
    a = combatant("a", 100, [Move(name="x", type="normal", power=10, pp=50)])
    b = combatant("b", 5, [])
    session = BattleSession(a, b, FixedDamageCore(random.Random(0)))
    session.run()
    assert session.step() is None
    assert session.turn_counter == 1


def test_both_sides_out_of_pp_is_a_stalemate():
    a = combatant("a", 100, [Move(name="x", type="normal", power=10, pp=1)])
    b = combatant("b", 100, [Move(name="y", type="normal", power=10, pp=1)])
    outcome = BattleSession(a, b, FixedDamageCore(random.Random(0))).run()
    assert outcome.state == STALEMATE
    assert outcome.winner is None
    assert outcome.turns == 2


def test_log_captures_narration_and_forwards_it():
    seen = []
    a = combatant("pikachu", 100, [Move(name="thunder-shock", type="electric", power=40, pp=30)])
    b = combatant("geodude", 20, [])
    session = BattleSession(a, b, FixedDamageCore(random.Random(0)), on_message=seen.append)
    session.run()
    assert "pikachu uses thunder-shock" in session.log
    assert "geodude has no moves left" in session.log
    assert session.log[-1] == "geodude fainted!"
    assert seen == session.log


def test_real_damage_battle_terminates():
    rng = random.Random(42)
    a = combatant("a", 361, [Move(name="x", type="normal", power=80, pp=15)])
    b = combatant("b", 361, [Move(name="y", type="fire", power=80, pp=15, category="special")])
    outcome = BattleSession(a, b, BattleCore(rng)).run()
    assert outcome.state == TERMINAL
    assert outcome.loser.is_fainted()
    assert not outcome.winner.is_fainted()
