import builtins
import json

import numpy as np
import pytest

from multipole_orbits import cli
from multipole_orbits.config import settings
from multipole_orbits.simulation.runner import run_simulation, describe_energy


def _answers(monkeypatch, answers):
    it = iter(answers)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr(builtins, "input", fake_input)


def test_settings_are_consistent():
    settings.validate_settings()


def test_clamps():
    assert settings.clamp_final_time(5000) == settings.FINAL_TIME_MAX
    assert settings.clamp_final_time(None) == 100.0
    assert settings.clamp_attractor_radius(0.0) == settings.POINT_ATTRACTOR_RADIUS
    assert settings.clamp_component(-42) == -10.0


def test_get_preset_returns_copies():
    p = settings.get_preset("quadrupole")
    assert p["initial_position"] == (3.0, 1.0, 0.0)
    assert p["final_time"] == 500.0
    with pytest.raises(ValueError):
        settings.get_preset("octupole")


def test_run_simulation_complete():
    result = run_simulation({"final_time": 10.0})
    assert result["points"] == 101
    assert result["expected_points"] == 101
    assert result["complete"] is True
    assert result["fallback"] is False
    assert result["classification"] == "bound"


def test_run_simulation_fallback():
    result = run_simulation({"final_time": 10.0, "initial_velocity": (0.0, 0.0, 0.0)})
    assert result["fallback"] is True
    assert result["complete"] is False
    assert result["energy"] == 0.0
    assert result["classification"] == "unbound"


def test_run_simulation_collision_is_incomplete():
    result = run_simulation({
        "final_time": 20.0,
        "initial_position": (5.0, 0.0, 0.0),
        "initial_velocity": (-1.0, 0.0, 0.0),
        "attractor_radius": 1.0,
    })
    assert result["fallback"] is False
    assert result["complete"] is False
    assert 2 < result["points"] < result["expected_points"]


def test_describe_energy():
    assert describe_energy(-3.47474) == "-3.4747 (Bound)"
    assert describe_energy(0.5) == "0.5000 (Unbound)"


def test_position_helpers():
    assert cli.is_valid_position((1.0, 0.0, 0.0), 1.0)
    assert not cli.is_valid_position((0.5, 0.0, 0.0), 1.0)
    assert cli.project_outside_attractor((0.5, 0.0, 0.0), 2.0) == pytest.approx([2.0, 0.0, 0.0])
    assert cli.project_outside_attractor((3.0, 4.0, 0.0), 2.0) == pytest.approx([3.0, 4.0, 0.0])
    assert cli.project_outside_attractor((0.0, 0.0, 0.0), 2.0) == pytest.approx([2.0, 0.0, 0.0])


def test_get_float_retries_and_defaults(monkeypatch):
    _answers(monkeypatch, ["abc", "2.5"])
    assert cli.get_float("? ", default=1.0) == 2.5
    _answers(monkeypatch, [""])
    assert cli.get_float("? ", default=1.0) == 1.0
    _answers(monkeypatch, [])
    assert cli.get_float("? ", default=3.0) == 3.0


def test_run_cli_non_interactive_uses_default_preset(monkeypatch):
    _answers(monkeypatch, [])
    params = cli.run_cli()
    assert params["preset"] == "default"
    assert params["final_time"] == 100.0
    assert params["attractor_radius"] == 1.0
    assert params["initial_position"].tolist() == [5.0, 0.0, 0.0]
    assert params["initial_velocity"].tolist() == [0.0, 3.0, 0.0]


def test_run_cli_pushes_position_out_of_large_attractor(monkeypatch):
    _answers(monkeypatch, ["3", "", "n", "5"])
    params = cli.run_cli()
    assert params["preset"] == "quadrupole"
    assert params["final_time"] == 500.0
    assert params["attractor_radius"] == 5.0
    assert np.linalg.norm(params["initial_position"]) == pytest.approx(5.0)
    assert params["initial_velocity"].tolist() == [0.0, 4.0, 2.0]


def test_run_cli_point_attractor(monkeypatch):
    _answers(monkeypatch, ["2", "", "y"])
    params = cli.run_cli()
    assert params["preset"] == "monopole"
    assert params["attractor_radius"] == settings.POINT_ATTRACTOR_RADIUS


def test_run_cli_clamps_components(monkeypatch):
    _answers(monkeypatch, ["1", "", "n", "", "50", "", ""])
    params = cli.run_cli()
    assert params["initial_position"].tolist() == [10.0, 0.0, 0.0]


def test_report_is_json_serialisable(monkeypatch, tmp_path):
    from multipole_orbits import main

    monkeypatch.setattr(settings, "OUTPUT_DIR", str(tmp_path))
    result = run_simulation({"final_time": 1.0})
    path = main.save_json(main.build_report(result), "orbit")
    with open(path) as f:
        data = json.load(f)
    assert data["points"] == 11
    assert data["trajectory"][0] == [5.0, 0.0, 0.0]
    assert data["params"]["initial_position"] == [5.0, 0.0, 0.0]
