import math
import re
from typing import Union

from .errors import InvalidInputError
from .models import ConnectionType


def convert_power_unit(val: float, unit: str) -> float:
    """Returns power in Watts."""
    unit = unit.strip().upper()
    if unit in ["W", "WP"]: return float(val)
    if unit in ["KW", "KWP"]: return val * 1000.0
    if unit in ["MW", "MWP"]: return val * 1000000.0
    raise InvalidInputError(f"Unknown power unit: {unit!r}")


def available_power_kw(connection_type: Union[ConnectionType, str], voltage_v: float, breaker_a: float) -> float:
    """Power made available by the consumer unit's standard breaker (kW)."""
    conn = ConnectionType.parse(connection_type)
    if voltage_v <= 0 or breaker_a <= 0:
        raise InvalidInputError("Voltage and breaker current must be positive")
    factor = math.sqrt(3) if conn is ConnectionType.THREE_PHASE else 1.0
    return factor * voltage_v * breaker_a / 1000.0


def format_decimal_input(value: str, decimal_places: int = 2) -> str:
    """Cleans a typed decimal: digits and a single '.', truncated to decimal_places."""
    cleaned = re.sub(r"[^0-9.]", "", value)
    parts = cleaned.split(".")
    if len(parts) > 2:
        cleaned = parts[0] + "." + "".join(parts[1:])
    if len(parts) > 1 and len(parts[1]) > decimal_places:
        cleaned = parts[0] + "." + parts[1][:decimal_places]
    return cleaned


LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def format_decimal_on_blur(value: str, decimal_places: int = 2) -> str:
    """Fixed decimals from the value's leading number ("12abc" -> "12.00"), else unchanged."""
    match = LEADING_NUMBER.match(value or "")
    if not match:
        return value
    number = float(match.group(1))
    if not math.isfinite(number):
        return value
    return f"{number:.{decimal_places}f}"


def format_br(value: float, decimal_places: int = 2) -> str:
    # Brazilian documents use a decimal comma
    return f"{value:.{decimal_places}f}".replace(".", ",")
