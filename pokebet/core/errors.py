"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class PokebetError(Exception):
    pass

class FetchError(PokebetError):
    def __init__(self, ref: str, detail: str):
        super().__init__(f"Failed to fetch {ref}: {detail}")
        self.ref = ref
        self.detail = detail

class ParseError(PokebetError):
    def __init__(self, ref: str, detail: str):
        super().__init__(f"Malformed record {ref}: {detail}")
        self.ref = ref
        self.detail = detail
