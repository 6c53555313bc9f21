from __future__ import annotations

import pytest

from weather_dashboard.main import parse_args


def test_defaults():
    args = parse_args([])

    assert args.config == "config.yaml"
    assert args.location is None
    assert args.units is None


def test_overrides():
    args = parse_args(["--config", "/tmp/dash.yaml", "--location", "Lisbon", "--units", "imperial"])

    assert (args.config, args.location, args.units) == ("/tmp/dash.yaml", "Lisbon", "imperial")


def test_rejects_unknown_units():
    with pytest.raises(SystemExit):
        parse_args(["--units", "kelvin"])
