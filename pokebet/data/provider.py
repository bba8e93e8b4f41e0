"""Data provider boundary: raw entity, move and type records.

``DataProvider`` is the protocol the builder depends on; ``PokeApiProvider``
is the HTTP implementation backed by the public PokeAPI.
"""
from __future__ import annotations
from typing import Any, Dict, Optional, Protocol

import requests

from pokebet.core.errors import FetchError, ParseError
from pokebet.core.logging import logger
from .schema import ENTITY_SCHEMA, MOVE_SCHEMA, TYPE_SCHEMA, validate_record

RawRecord = Dict[str, Any]

class DataProvider(Protocol):
    def fetch_entity(self, entity_id: int) -> RawRecord: ...
    def fetch_move(self, ref: str) -> RawRecord: ...
    def fetch_type(self, ref: str) -> RawRecord: ...

class PokeApiProvider:
    def __init__(self, base_url: str = "https://pokeapi.co/api/v2", timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_entity(self, entity_id: int) -> RawRecord:
        url = f"{self.base_url}/pokemon/{entity_id}"
        return validate_record(self._get_json(url), ENTITY_SCHEMA, url)

    def fetch_move(self, ref: str) -> RawRecord:
        return validate_record(self._get_json(ref), MOVE_SCHEMA, ref)

    def fetch_type(self, ref: str) -> RawRecord:
        return validate_record(self._get_json(ref), TYPE_SCHEMA, ref)

    def _get_json(self, url: str) -> Any:
        logger.debug("Fetch", url=url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(url, f"invalid JSON: {e}") from e

__all__ = ["DataProvider", "PokeApiProvider", "RawRecord"]
