import math
from typing import Dict, Iterable, List, Optional

import pandas as pd

from .errors import InvalidInputError

MONTHS = ("jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez")

DAYS_PER_MONTH = 30
PERFORMANCE_RATIO = 0.80


def _check_power(power_rating_w: float) -> float:
    power = float(power_rating_w)
    if not math.isfinite(power) or power <= 0:
        raise InvalidInputError(f"Power rating must be a positive number of watts, got {power_rating_w!r}")
    return power


def monthly_generation(hsp: float, power_rating_w: float) -> float:
    """Estimated energy for one month (kWh): HSP x 30 days x kWp x 0.80, rounded to 2 places."""
    value = float(hsp)
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(f"HSP must be a non-negative number, got {hsp!r}")
    power = _check_power(power_rating_w)
    return round(value * DAYS_PER_MONTH * (power / 1000.0) * PERFORMANCE_RATIO, 2)


def generation_series(hsp_series: Iterable[float], power_rating_w: float) -> List[float]:
    return [monthly_generation(hsp, power_rating_w) for hsp in hsp_series]


def annual_generation(series: Iterable[float]) -> float:
    return round(sum(series), 2)


def hsp_from_mapping(mapping: Dict[str, Optional[float]]) -> List[float]:
    """Orders a {jan..dez} mapping into a 12-item list. Missing or blank months count as 0."""
    values = []
    for month in MONTHS:
        raw = mapping.get(month)
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            values.append(0.0)
            continue
        try:
            values.append(float(raw))
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Invalid HSP for {month}: {raw!r}") from exc
    return values


def generation_table(hsp_series: Iterable[float], power_rating_w: float) -> pd.DataFrame:
    hsp = list(hsp_series)
    kwh = generation_series(hsp, power_rating_w)
    labels = [MONTHS[i].capitalize() if i < len(MONTHS) else str(i + 1) for i in range(len(hsp))]
    return pd.DataFrame({"Mês": labels, "HSP": hsp, "Geração (kWh)": kwh})
