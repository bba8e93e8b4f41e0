from __future__ import annotations
import argparse
import random
from typing import Callable, List, Optional

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.rule import Rule

from pokebet.battle.core import BattleCore, Combatant
from pokebet.battle.factory import MAX_ENTITY_ID, EntityBuilder, random_entity_id
from pokebet.battle.session import BattleSession, TERMINAL
from pokebet.core.errors import PokebetError
from pokebet.core.logging import logger
from pokebet.data.provider import PokeApiProvider
from pokebet.system.settings import Settings
from pokebet.ui.render import combatant_panel, display_name

ABORT = 0

def prompt_bet(console: Console, first: Combatant, second: Combatant,
               ask: Optional[Callable[[str], str]] = None) -> int:
    """Ask which side to back until the answer is 1, 2 or 0 (quit)."""
    ask = ask or (lambda prompt: Prompt.ask(prompt, console=console))
    console.print("[bold]Place your bets![/bold]")
    while True:
        console.print(f"1 for {display_name(first.name)}", markup=False)
        console.print(f"2 for {display_name(second.name)}", markup=False)
        answer = ask("Your pick (0 to quit)").strip()
        if answer in {"1", "2"}:
            return int(answer)
        if answer == "0":
            return ABORT
        console.print("Invalid choice")

def play_round(builder: EntityBuilder, console: Console, rng: random.Random, *,
               max_entity_id: int = MAX_ENTITY_ID, ask: Optional[Callable[[str], str]] = None) -> Optional[str]:
    """Build a match, take the bet and fight it out.

    Returns "win", "lose" or "stalemate" for the bettor, or None when the
    player quits at the betting prompt. Build failures propagate.
    """
    first_id = random_entity_id(rng, max_entity_id)
    second_id = random_entity_id(rng, max_entity_id)
    first, second = builder.build_pair(first_id, second_id)
    console.print(combatant_panel(first, title="1"))
    console.print(combatant_panel(second, title="2"))
    bet = prompt_bet(console, first, second, ask)
    if bet == ABORT:
        return None

    console.print(Rule(f"{display_name(first.name)} VS {display_name(second.name)}"))
    session = BattleSession(first, second, BattleCore(rng),
                            on_message=lambda m: console.print(m, markup=False, highlight=False))
    outcome = session.run()
    console.print(Rule())
    if outcome.state != TERMINAL or outcome.winner is None:
        console.print(f"Neither side can attack any more after {outcome.turns} turns. It's a draw!")
        return "stalemate"
    console.print(f"[bold]{display_name(outcome.winner.name)} wins![/bold]")
    backed = first if bet == 1 else second
    if outcome.winner is backed:
        console.print("[green]You win![/green]")
        return "win"
    console.print("[red]You lose![/red]")
    return "lose"

def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pokebet", description="Bet on random Pokémon battles")
    parser.add_argument("--seed", type=int, default=None, help="Seed the RNG for a reproducible session")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)

def run(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    settings = Settings.load()
    if not settings.path.exists():
        # First run: write the defaults out so they can be edited
        settings.save()
    if args.seed is not None:
        settings.data.seed = args.seed
    if args.debug:
        settings.data.debug = True
        settings.data.log_level = "DEBUG"
    settings.apply_log_level()
    data = settings.data

    console = Console()
    rng = random.Random(data.seed)
    provider = PokeApiProvider(data.api_base_url, timeout=data.request_timeout)
    builder = EntityBuilder(provider, rng, move_candidate_cap=data.move_candidate_cap)
    try:
        while True:
            try:
                result = play_round(builder, console, rng, max_entity_id=data.max_entity_id)
            except PokebetError as e:
                logger.error("BuildFailed", error=str(e))
                if Confirm.ask("Could not set up the match. Try another one?", console=console):
                    continue
                return 1
            if result is None:
                break
    except (KeyboardInterrupt, EOFError):
        console.print()
    console.print("Goodbye!")
    return 0

if __name__ == "__main__":
    raise SystemExit(run())
