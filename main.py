#!/usr/bin/env python3
"""
Pokébet - bet on random Pokémon battles.

Thin wrapper around :func:`pokebet.cli.run`. Two random Pokémon are fetched
from PokeAPI, you back one of them and the fight is simulated turn by turn.

To run: python main.py [--seed N] [--debug]
"""

from pokebet.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
