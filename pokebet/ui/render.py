"""Combatant summaries: plain text for logs/tests and a rich Panel for the console."""
from __future__ import annotations
from typing import List

from rich.panel import Panel
from rich.table import Table
from rich.box import ROUNDED

from pokebet.battle.core import Combatant
from pokebet.battle.factory import STAT_NAMES
from pokebet.core.types import type_markup, format_types

def _relation_label(relation: str) -> str:
    return relation.replace("_", " ").capitalize()

def display_name(name: str) -> str:
    return name.title()

def format_combatant(c: Combatant) -> str:
    lines: List[str] = [f"Name: {display_name(c.name)}", "Stats:"]
    for stat in STAT_NAMES:
        if stat in c.stats:
            lines.append(f"  {stat}: {c.stats[stat]}")
    lines.append("Types:")
    for t in c.types:
        lines.append(f"  {t.name}")
        # Empty relations are left out
        for relation, names in t.populated_relations():
            lines.append(f"    {_relation_label(relation)}: {', '.join(names)}")
    lines.append("Moves:")
    for m in c.moves:
        lines.append(f"  {m.name}")
        lines.append(f"    Accuracy: {m.accuracy}")
        lines.append(f"    Power: {m.power}")
        lines.append(f"    Pp: {m.pp}")
        lines.append(f"    Type: {m.type}")
    return "\n".join(lines) + "\n"

def combatant_panel(c: Combatant, *, title: str = "") -> Panel:
    stats = Table(show_header=False, box=None, padding=(0, 1))
    stats.add_column("stat", style="bold")
    stats.add_column("value", justify="right")
    for stat in STAT_NAMES:
        if stat in c.stats:
            stats.add_row(stat, str(c.stats[stat]))

    moves = Table(box=ROUNDED, show_lines=False)
    moves.add_column("Move")
    moves.add_column("Type")
    moves.add_column("Cat.")
    moves.add_column("Pow", justify="right")
    moves.add_column("Acc", justify="right")
    moves.add_column("PP", justify="right")
    for m in c.moves:
        moves.add_row(m.name, type_markup(m.type, m.type), m.category[:4],
                      str(m.power), str(m.accuracy), str(m.pp))

    grid = Table.grid(padding=(0, 2))
    grid.add_row(stats, moves)
    relations = []
    for t in c.types:
        for relation, names in t.populated_relations():
            coloured = ", ".join(type_markup(n, n) for n in names)
            relations.append(f"{type_markup(t.name, t.name)} {_relation_label(relation).lower()}: {coloured}")
    body = Table.grid()
    body.add_row(grid)
    if not c.moves:
        body.add_row("[dim]No usable moves[/dim]")
    for line in relations:
        body.add_row(line)
    heading = f"{display_name(c.name)} #{c.id} {format_types(c.type_names)}"
    if title:
        heading = f"{title}: {heading}"
    return Panel(body, title=heading, box=ROUNDED, expand=False)

__all__ = ["format_combatant", "combatant_panel", "display_name"]
