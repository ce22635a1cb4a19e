"""Readers for the rota's flat-file inputs."""

from oncallrota.loaders.files import (
    RotaInputs,
    load_dates,
    load_inputs,
    load_team,
    load_unavailability,
    parse_date,
)

__all__ = [
    "RotaInputs",
    "load_dates",
    "load_inputs",
    "load_team",
    "load_unavailability",
    "parse_date",
]
