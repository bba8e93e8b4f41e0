from io import StringIO

import pytest

from pokebet.core.logging import Logger, RESET


def test_event_line_has_level_name_and_fields():
    out = StringIO()
    Logger("DEBUG", stream=out).info("CombatantBuilt", id=6, name="charizard")
    line = out.getvalue()
    assert "[INFO] CombatantBuilt id=6 name=charizard" in line
    assert line.endswith(RESET + "\n")


def test_values_with_spaces_are_quoted():
    out = StringIO()
    Logger(stream=out).error("BuildFailed", error="entity 7: missing stats speed")
    assert 'error="entity 7: missing stats speed"' in out.getvalue()


def test_threshold_filters_lower_levels():
    out = StringIO()
    log = Logger("WARN", stream=out)
    log.info("FetchEntity", id=1)
    log.debug("MoveSkipped", move="growl")
    assert out.getvalue() == ""
    log.warn("SettingsParseFailedUsingDefaults")
    assert "[WARN]" in out.getvalue()


def test_unknown_level_is_rejected():
    log = Logger()
    with pytest.raises(ValueError):
        log.set_level("LOUD")
    assert log.level == "INFO"
