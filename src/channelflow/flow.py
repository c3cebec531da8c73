from dataclasses import dataclass, replace
from .units import UnitSystem, SI, unit_system


@dataclass(frozen=True)
class FlowParameters:
    """Steady flow through a prismatic channel.

    Args:
        discharge (float): Flow rate Q.
        bed_slope (float): Longitudinal bed slope S.
        roughness (float): Manning's roughness coefficient n.
        units (UnitSystem, optional): Supplies g and k. Defaults to SI.
    """
    discharge: float
    bed_slope: float
    roughness: float
    units: UnitSystem = SI

    def __post_init__(self):
        if not isinstance(self.units, UnitSystem):
            object.__setattr__(self, 'units', unit_system(self.units))

    @property
    def g(self) -> float:
        return self.units.g

    @property
    def k(self) -> float:
        return self.units.k

    def with_slope(self, bed_slope: float) -> 'FlowParameters':
        return replace(self, bed_slope=bed_slope)

    def validate(self) -> None:
        if not (self.bed_slope > 0 and self.roughness > 0 and self.discharge > 0):
            raise ValueError("Slope, n, and Q must be positive.")
