from types import MappingProxyType

from fvcore.models import ConnectionType

# Standard thermomagnetic breaker ratings offered for the inverter AC output (Amps)
BREAKER_RATINGS = (20, 25, 32, 40, 50, 63, 70, 80, 100, 125)

# Standard copper conductor cross-sections (mm2)
CROSS_SECTIONS = (4, 6, 10, 16, 25, 35, 50, 70)

# NBR 5410 Table 36 - PVC insulated copper, 70C, reference method B1
# Single-phase: 2 loaded conductors. Three-phase: 3 loaded conductors.
# Format: {ConnectionType: {mm2: Amps}}
AMPACITY = MappingProxyType({
    ConnectionType.SINGLE_PHASE: MappingProxyType({
        4: 32, 6: 41, 10: 57, 16: 76, 25: 101, 35: 125, 50: 151, 70: 192,
    }),
    ConnectionType.THREE_PHASE: MappingProxyType({
        4: 28, 6: 36, 10: 50, 16: 68, 25: 89, 35: 110, 50: 134, 70: 171,
    }),
})

# NBR 5410 Table 40 - ambient temperature correction (35C, PVC)
TEMPERATURE_FACTOR = 0.94

# NBR 5410 Table 42 - grouping correction per connection type
GROUPING_FACTOR = MappingProxyType({
    ConnectionType.SINGLE_PHASE: 0.65,
    ConnectionType.THREE_PHASE: 0.85,
})


def get_derating(connection_type: ConnectionType) -> float:
    return TEMPERATURE_FACTOR * GROUPING_FACTOR[connection_type]
