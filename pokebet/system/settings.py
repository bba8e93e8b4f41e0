from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional
from pokebet.battle.factory import MAX_ENTITY_ID
from pokebet.core.logging import logger

SETTINGS_FILENAME = ".pokebet_settings.json"

@dataclass
class SettingsData:
    api_base_url: str = "https://pokeapi.co/api/v2"
    request_timeout: float = 10.0  # seconds per HTTP request
    log_level: str = "INFO"        # DEBUG / INFO / WARN / ERROR
    debug: bool = False            # Verbose build/battle logging
    max_entity_id: int = MAX_ENTITY_ID  # Highest id drawn for a random combatant
    move_candidate_cap: int = 10   # Usable moves collected before picking a loadout
    seed: Optional[int] = None     # Fixed RNG seed; None draws a fresh one

    def normalize(self):
        if self.log_level not in {"DEBUG","INFO","WARN","ERROR"}:
            self.log_level = "INFO"
        self.api_base_url = self.api_base_url.rstrip("/")
        if not isinstance(self.request_timeout, (int, float)) or self.request_timeout <= 0:
            self.request_timeout = 10.0
        if not isinstance(self.max_entity_id, int) or self.max_entity_id < 1:
            self.max_entity_id = MAX_ENTITY_ID
        if not isinstance(self.move_candidate_cap, int) or self.move_candidate_cap < 1:
            self.move_candidate_cap = 10
        if self.seed is not None and not isinstance(self.seed, int):
            self.seed = None

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Unknown keys are dropped, missing ones fall back to defaults
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2))
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def apply_log_level(self):
        # Without debug, INFO chatter is hidden so the battle narration stays readable
        if not self.data.debug and self.data.log_level in {"INFO","DEBUG"}:
            logger.set_level("WARN")
        else:
            logger.set_level(self.data.log_level)
