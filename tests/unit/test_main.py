"""Tests for the command-line entry point"""
import json
import pytest

from endurance_rpg import config as config_module
from endurance_rpg.main import main
from endurance_rpg.models.game import ProgressionSnapshot

MONDAY_NOW = "2024-06-17T09:00:00Z"


@pytest.fixture(autouse=True)
def default_process_config(monkeypatch):
    monkeypatch.setattr(config_module, "GAME_CONFIG_PATH", None)
    monkeypatch.setattr(config_module, "LOG_LEVEL", "INFO")


@pytest.fixture
def activity_file(tmp_path):
    """Monday morning 5 km run in Strava's format"""
    path = tmp_path / "activity.json"
    path.write_text(json.dumps({
        "id": 987654321,
        "type": "Run",
        "distance": 5000.0,
        "moving_time": 1500,
        "total_elevation_gain": 12.0,
        "start_date": "2024-06-17T08:00:00Z",
    }))
    return path


def test_new_profile(activity_file, capsys):
    exit_code = main([str(activity_file), "--now", MONDAY_NOW])

    assert exit_code == 0
    result = json.loads(capsys.readouterr().out)
    assert result["award"]["base_xp"] == 524
    assert result["award"]["quest_bonus_xp"] == 150
    assert result["award"]["total_awarded_xp"] == 674
    assert result["game"]["total_xp"] == 674
    assert result["rejected"] is False
    assert result["leveled_up"] is False


def test_write_profile_and_resume(activity_file, tmp_path, capsys):
    profile = tmp_path / "profile.json"

    assert main([str(activity_file), "--profile", str(profile), "--now", MONDAY_NOW, "--write"]) == 0
    assert ProgressionSnapshot.model_validate_json(profile.read_text()).total_xp == 674

    assert main([str(activity_file), "--profile", str(profile), "--now", MONDAY_NOW, "--write"]) == 0
    stored = ProgressionSnapshot.model_validate_json(profile.read_text())

    # Distance Runner was already completed today
    assert stored.total_xp == 674 + 524
    assert stored.level == 2
    capsys.readouterr()


def test_custom_config(activity_file, tmp_path, capsys):
    config_path = tmp_path / "game.json"
    config_path.write_text(json.dumps({"daily_xp_cap": 300}))

    assert main([str(activity_file), "--config", str(config_path), "--now", MONDAY_NOW]) == 0

    result = json.loads(capsys.readouterr().out)
    assert result["award"]["total_awarded_xp"] == 300
    assert result["award"]["was_capped"] is True


def test_invalid_activity(tmp_path, capsys):
    path = tmp_path / "activity.json"
    path.write_text(json.dumps({"id": 1, "type": "Run", "distance": 5000, "moving_time": 1500}))

    exit_code = main([str(path)])

    assert exit_code == 1
    assert "ValidationError" in capsys.readouterr().err


def test_unreadable_activity(tmp_path, capsys):
    exit_code = main([str(tmp_path / "missing.json")])

    assert exit_code == 1
    assert "StorageError" in capsys.readouterr().err
