import logging
import math
from typing import Union

from fvcore.calculator import CircuitSizingCalculator
from fvcore.errors import InvalidInputError, OutOfRangeError
from fvcore.models import ConnectionType, SizingResult
from fvstandards.nbr5410_tables import (
    AMPACITY,
    BREAKER_RATINGS,
    CROSS_SECTIONS,
    GROUPING_FACTOR,
    TEMPERATURE_FACTOR,
)

logger = logging.getLogger(__name__)


class NBR5410Sizer(CircuitSizingCalculator):
    BREAKER_RATINGS = BREAKER_RATINGS
    CROSS_SECTIONS = CROSS_SECTIONS
    AMPACITY = AMPACITY
    TEMPERATURE_FACTOR = TEMPERATURE_FACTOR
    GROUPING_FACTOR = GROUPING_FACTOR

    def select_breaker(self, nominal_current: float) -> int:
        ib = self.validate_current(nominal_current)
        # Select first rating > Ib (strict)
        for rating in self.BREAKER_RATINGS:
            if rating > ib:
                logger.debug("Breaker for Ib=%.2fA: %dA", ib, rating)
                return rating
        raise OutOfRangeError(
            f"Nominal current {ib}A has no standard breaker above it (max {self.BREAKER_RATINGS[-1]}A)"
        )

    def corrected_current(self, nominal_current: float, connection_type: ConnectionType) -> float:
        ib = self.validate_current(nominal_current)
        conn = ConnectionType.parse(connection_type)
        return ib / (self.TEMPERATURE_FACTOR * self.GROUPING_FACTOR[conn])

    def select_conductor(self, corrected_current: float, connection_type: ConnectionType) -> int:
        conn = ConnectionType.parse(connection_type)
        if not math.isfinite(corrected_current) or corrected_current <= 0:
            raise InvalidInputError(f"Corrected current must be positive, got {corrected_current!r}")
        table = self.AMPACITY[conn]
        for section in self.CROSS_SECTIONS:
            if table[section] >= corrected_current:
                logger.debug("Conductor for Icorr=%.2fA (%s): %dmm2", corrected_current, conn.value, section)
                return section
        largest = self.CROSS_SECTIONS[-1]
        raise OutOfRangeError(
            f"Corrected current {corrected_current:.2f}A exceeds {largest}mm2 ampacity ({table[largest]}A)"
        )

    def ampacity(self, cross_section: int, connection_type: ConnectionType) -> float:
        return self.AMPACITY[ConnectionType.parse(connection_type)][cross_section]


_default_sizer = NBR5410Sizer()


def select_breaker(nominal_current: float) -> int:
    return _default_sizer.select_breaker(nominal_current)


def corrected_current(nominal_current: float, connection_type: Union[ConnectionType, str]) -> float:
    return _default_sizer.corrected_current(nominal_current, connection_type)


def select_conductor(corrected: float, connection_type: Union[ConnectionType, str]) -> int:
    return _default_sizer.select_conductor(corrected, connection_type)


def size_circuit(nominal_current: float, connection_type: Union[ConnectionType, str]) -> SizingResult:
    return _default_sizer.size_circuit(nominal_current, connection_type)
