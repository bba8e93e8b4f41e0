"""
Lightweight event logger used across the project.
One colored line per event on stderr, so it never mixes with the battle narration.
"""
from __future__ import annotations
import sys
from datetime import datetime, timezone
from typing import Literal, Any, TextIO, Optional

from colorama import Fore, Style, init as colorama_init

colorama_init()

Level = Literal["DEBUG","INFO","WARN","ERROR"]

COLORS = {
    "DEBUG": Fore.BLUE,
    "INFO": Fore.GREEN,
    "WARN": Fore.YELLOW,
    "ERROR": Fore.RED
}
RESET = Style.RESET_ALL

def _format_value(value: Any) -> str:
    # Error details and move names can contain spaces; quote so key=value stays parseable
    text = str(value)
    if not text or any(ch.isspace() for ch in text) or '"' in text:
        return '"' + text.replace('"', '\\"') + '"'
    return text

class Logger:
    _order = {"DEBUG":10,"INFO":20,"WARN":30,"ERROR":40}

    def __init__(self, level: Level = "INFO", stream: Optional[TextIO] = None):
        self.set_level(level)
        self.stream = stream

    def set_level(self, level: Level):
        if level not in self._order:
            raise ValueError(f"unknown log level {level!r}")
        self.level = level
        self.threshold = self._order[level]

    def enabled(self, lvl: Level) -> bool:
        return self._order[lvl] >= self.threshold

    def _emit(self, lvl: Level, event: str, **fields: Any):
        if not self.enabled(lvl):
            return
        ts = datetime.now(timezone.utc).isoformat(timespec="seconds")
        line = f"{ts} [{lvl}] {event}"
        if fields:
            line += " " + " ".join(f"{k}={_format_value(v)}" for k, v in fields.items())
        out = self.stream or sys.stderr
        out.write(f"{COLORS[lvl]}{line}{RESET}\n")

    def debug(self, event: str, **kw): self._emit("DEBUG", event, **kw)
    def info(self, event: str, **kw): self._emit("INFO", event, **kw)
    def warn(self, event: str, **kw): self._emit("WARN", event, **kw)
    def error(self, event: str, **kw): self._emit("ERROR", event, **kw)

logger = Logger("INFO")
