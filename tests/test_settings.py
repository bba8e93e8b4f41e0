import json

from pokebet.core.logging import logger
from pokebet.battle.factory import MAX_ENTITY_ID
from pokebet.system.settings import Settings, SettingsData


def test_defaults_when_file_missing(tmp_path):
    s = Settings.load(tmp_path / "settings.json")
    assert s.data == SettingsData()
    assert s.data.move_candidate_cap == 10
    assert s.data.max_entity_id == MAX_ENTITY_ID
    assert s.data.seed is None


def test_roundtrip_and_backfill(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"seed": 7, "debug": True, "obsolete_key": 1}))
    s = Settings.load(path)
    assert s.data.seed == 7 and s.data.debug is True
    assert s.data.api_base_url == "https://pokeapi.co/api/v2"
    s.data.request_timeout = 2.5
    s.save()
    assert Settings.load(path).data.request_timeout == 2.5


def test_normalize_repairs_bad_values(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"log_level": "LOUD", "request_timeout": -1, "move_candidate_cap": 0,
                                "max_entity_id": "many", "seed": "abc",
                                "api_base_url": "https://example.test/api/"}))
    data = Settings.load(path).data
    assert data.log_level == "INFO"
    assert data.request_timeout == 10.0
    assert data.move_candidate_cap == 10
    assert data.max_entity_id == MAX_ENTITY_ID
    assert data.seed is None
    assert data.api_base_url == "https://example.test/api"


def test_unreadable_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert Settings.load(path).data == SettingsData()


def test_apply_log_level(tmp_path):
    s = Settings.load(tmp_path / "settings.json")
    try:
        s.apply_log_level()
        assert logger.threshold == logger._order["WARN"]
        s.data.debug = True
        s.data.log_level = "DEBUG"
        s.apply_log_level()
        assert logger.threshold == logger._order["DEBUG"]
    finally:
        logger.set_level("INFO")
