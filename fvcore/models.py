import math
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from fvcore.errors import InvalidInputError


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


class ConnectionType(Enum):
    SINGLE_PHASE = "single-phase"
    THREE_PHASE = "three-phase"

    @classmethod
    def parse(cls, value: Any) -> "ConnectionType":
        """Accepts an enum member, its value, or the Portuguese labels used on inverter datasheets."""
        if isinstance(value, cls):
            return value
        text = _strip_accents(str(value)).strip().lower().replace("_", "-").replace(" ", "-")
        aliases = {
            "single-phase": cls.SINGLE_PHASE,
            "singlephase": cls.SINGLE_PHASE,
            "monofasico": cls.SINGLE_PHASE,
            "1": cls.SINGLE_PHASE,
            "three-phase": cls.THREE_PHASE,
            "threephase": cls.THREE_PHASE,
            "trifasico": cls.THREE_PHASE,
            "3": cls.THREE_PHASE,
        }
        if text not in aliases:
            raise InvalidInputError(f"Unknown connection type: {value!r}")
        return aliases[text]

    @property
    def phases(self) -> int:
        return 1 if self is ConnectionType.SINGLE_PHASE else 3

    @property
    def breaker_poles(self) -> int:
        return 1 if self is ConnectionType.SINGLE_PHASE else 3

    @property
    def breaker_type(self) -> str:
        return "Monopolar" if self is ConnectionType.SINGLE_PHASE else "Tripolar"

    @property
    def conductor_configuration(self) -> str:
        if self is ConnectionType.SINGLE_PHASE:
            return "1 phase + 1 neutral"
        return "3 phases + 1 neutral"


@dataclass(frozen=True)
class Breaker:
    rating: int  # Amps
    poles: int
    type_label: str = "Monopolar"


@dataclass(frozen=True)
class Conductor:
    cross_section: int  # mm2
    configuration: str
    ampacity: float = 0.0


@dataclass(frozen=True)
class SizingResult:
    nominal_current: float
    corrected_current: float
    breaker: Breaker
    conductor: Conductor
    connection_type: ConnectionType

    def to_dict(self) -> Dict[str, Any]:
        return {
            "breaker": {"rating": self.breaker.rating, "poles": self.breaker.poles},
            "conductor": {
                "crossSection": self.conductor.cross_section,
                "configuration": self.conductor.configuration,
            },
            "connectionType": self.connection_type.value,
            "nominalCurrent": self.nominal_current,
            "correctedCurrent": round(self.corrected_current, 2),
            "ampacity": self.conductor.ampacity,
        }


@dataclass(frozen=True)
class GeoCoordinate:
    longitude: float
    latitude: float

    def __post_init__(self):
        if not (math.isfinite(self.longitude) and math.isfinite(self.latitude)):
            raise InvalidInputError("Coordinates must be finite numbers")
        if not (-90.0 <= self.latitude <= 90.0):
            raise InvalidInputError("Latitude must be between -90 and 90 degrees")
        if not (-180.0 <= self.longitude <= 180.0):
            raise InvalidInputError("Longitude must be between -180 and 180 degrees")


@dataclass(frozen=True)
class UtmCoordinate:
    easting: int
    northing: int
    zone: int
    hemisphere: str  # 'N' or 'S'

    @property
    def zone_label(self) -> str:
        return f"{self.zone}{self.hemisphere}"


@dataclass(frozen=True)
class ProjectConfig:
    name: str
    inverter_current_a: float
    connection_type: ConnectionType
    generator_power_w: float
    location: Optional[GeoCoordinate] = None
    hsp: Optional[tuple] = None  # 12 monthly values, jan..dez
    grid_voltage_v: Optional[float] = None
    standard_breaker_a: Optional[float] = None
