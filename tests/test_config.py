"""Configuration sanity checks."""

from config.config import ENGINE_CONFIG, ROUNDING_CONFIG, validate_config


def test_validate_config_passes(capsys):
    validate_config()
    assert "validated" in capsys.readouterr().out


def test_defaults():
    assert ENGINE_CONFIG["empty_expression_value"] == 0
    assert ROUNDING_CONFIG["default_places"] == 0
