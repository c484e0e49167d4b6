"""Project file loader.

A project file (YAML or JSON) describes one installation:

    name: Residência Silva
    inverter_current_a: 30
    connection_type: monofásico
    generator_power_w: 5500
    location: {longitude: -46.6333, latitude: -23.5505}
    hsp: {jan: 5.6, fev: 5.8, ...}     # or a list of 12 values
    grid_voltage_v: 220                 # optional
    standard_breaker_a: 50              # optional
"""
import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .errors import SizingError
from .generation import MONTHS, hsp_from_mapping
from .models import ConnectionType, GeoCoordinate, ProjectConfig


class ConfigError(ValueError):
    """Raised when a project file cannot be parsed into a ProjectConfig."""


_REQUIRED_KEYS = {"name", "inverter_current_a", "connection_type", "generator_power_w"}


def _load_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            raw = yaml.safe_load(text) or {}
        elif path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raise ConfigError(f"Unsupported config extension: {path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not parse {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError("Project file must contain a mapping at the top level")
    return raw


def _parse_location(raw: Any) -> GeoCoordinate:
    if not isinstance(raw, dict):
        raise ConfigError("location must be a mapping with longitude and latitude")
    try:
        return GeoCoordinate(longitude=float(raw["longitude"]), latitude=float(raw["latitude"]))
    except KeyError as exc:
        raise ConfigError(f"Missing location field: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid location: {exc}") from exc


def _parse_hsp(raw: Any) -> tuple:
    if isinstance(raw, dict):
        unknown = set(raw) - set(MONTHS)
        if unknown:
            raise ConfigError(f"Unknown months in hsp: {sorted(unknown)}")
        try:
            return tuple(hsp_from_mapping(raw))
        except SizingError as exc:
            raise ConfigError(str(exc)) from exc
    if isinstance(raw, (list, tuple)):
        if len(raw) != 12:
            raise ConfigError(f"hsp list must have 12 values, got {len(raw)}")
        try:
            return tuple(float(v) for v in raw)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid hsp value: {exc}") from exc
    raise ConfigError("hsp must be a list of 12 values or a jan..dez mapping")


def _optional_float(raw: Dict[str, Any], key: str):
    if raw.get(key) is None:
        return None
    try:
        return float(raw[key])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a number") from exc


def parse_project(raw: Dict[str, Any]) -> ProjectConfig:
    missing = _REQUIRED_KEYS - raw.keys()
    if missing:
        raise ConfigError(f"Missing project fields: {sorted(missing)}")
    try:
        current = float(raw["inverter_current_a"])
        power = float(raw["generator_power_w"])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid numeric field: {exc}") from exc
    if current <= 0:
        raise ConfigError("inverter_current_a must be positive")
    if power <= 0:
        raise ConfigError("generator_power_w must be positive")
    try:
        connection = ConnectionType.parse(raw["connection_type"])
    except SizingError as exc:
        raise ConfigError(str(exc)) from exc

    return ProjectConfig(
        name=str(raw["name"]),
        inverter_current_a=current,
        connection_type=connection,
        generator_power_w=power,
        location=_parse_location(raw["location"]) if raw.get("location") is not None else None,
        hsp=_parse_hsp(raw["hsp"]) if raw.get("hsp") is not None else None,
        grid_voltage_v=_optional_float(raw, "grid_voltage_v"),
        standard_breaker_a=_optional_float(raw, "standard_breaker_a"),
    )


def load_project(path: Union[str, Path]) -> ProjectConfig:
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    return parse_project(_load_raw(path))
