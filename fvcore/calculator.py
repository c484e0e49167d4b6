import logging
import math
from abc import ABC, abstractmethod
from typing import Union

from .errors import InvalidInputError, InvalidSizingSequenceError
from .models import Breaker, Conductor, ConnectionType, SizingResult

logger = logging.getLogger(__name__)


class CircuitSizingCalculator(ABC):

    @abstractmethod
    def select_breaker(self, nominal_current: float) -> int:
        """Selects the standard breaker rating for the given nominal current. Returns Amps."""
        pass

    @abstractmethod
    def corrected_current(self, nominal_current: float, connection_type: ConnectionType) -> float:
        """Applies the installation derating factors to the nominal current. Returns Amps."""
        pass

    @abstractmethod
    def select_conductor(self, corrected_current: float, connection_type: ConnectionType) -> int:
        """Selects the standard cross-section able to carry the corrected current. Returns mm2."""
        pass

    @abstractmethod
    def ampacity(self, cross_section: int, connection_type: ConnectionType) -> float:
        """Tabulated ampacity for a cross-section. Returns Amps."""
        pass

    @staticmethod
    def validate_current(value: float) -> float:
        try:
            current = float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Current must be a number, got {value!r}") from exc
        if not math.isfinite(current) or current <= 0:
            raise InvalidInputError(f"Current must be a positive finite number, got {value!r}")
        return current

    def size_circuit(self, nominal_current: float, connection_type: Union[ConnectionType, str]) -> SizingResult:
        """Performs the full parametrization of the inverter AC circuit. Returns a SizingResult."""
        conn = ConnectionType.parse(connection_type)
        i_nom = self.validate_current(nominal_current)

        rating = self.select_breaker(i_nom)
        i_corr = self.corrected_current(i_nom, conn)
        section = self.select_conductor(i_corr, conn)
        iz = self.ampacity(section, conn)

        # Discrimination rule: Ib < In < Iz
        if not (i_nom < rating < iz):
            raise InvalidSizingSequenceError(
                f"Sizing sequence violated: Ib={i_nom}A, In={rating}A, Iz={iz}A ({section}mm2)"
            )

        logger.debug(
            "Sized %s circuit: Ib=%.2fA Icorr=%.2fA In=%dA S=%dmm2 Iz=%sA",
            conn.value, i_nom, i_corr, rating, section, iz,
        )
        return SizingResult(
            nominal_current=i_nom,
            corrected_current=i_corr,
            breaker=Breaker(rating=rating, poles=conn.breaker_poles, type_label=conn.breaker_type),
            conductor=Conductor(cross_section=section, configuration=conn.conductor_configuration, ampacity=iz),
            connection_type=conn,
        )
