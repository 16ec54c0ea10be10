"""
Tests for loading the rule constants from YAML
"""
import pytest
from wiega.config import load_config
from wiega.models import GameSettings, VesselSize


def test_load_partial_override_keeps_defaults(tmp_path):
    path = tmp_path / "game.yaml"
    path.write_text("elimination_tolerance: 40\n", encoding="utf-8")
    settings = load_config(str(path))
    assert settings.elimination_tolerance == 40
    assert settings.final_round_drop(VesselSize.SMALL) == 278


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_load_rejects_missing_vessel_preset(tmp_path):
    """Overriding final_round_drops must keep every vessel size"""
    path = tmp_path / "game.yaml"
    path.write_text("final_round_drops:\n  large: 445\n", encoding="utf-8")
    with pytest.raises(ValueError, match="small"):
        load_config(str(path))


def test_settings_reject_missing_vessel_preset():
    with pytest.raises(ValueError, match="small"):
        GameSettings(final_round_drops={"large": 445})
