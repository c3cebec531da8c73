from dataclasses import dataclass

FT_PER_M = 3.28084
CFS_PER_CMS = 35.3147


@dataclass(frozen=True)
class UnitSystem:
    """Gravitational acceleration and Manning coefficient of a unit system.

    Args:
        name (str): 'SI' or 'Imperial'.
        g (float): Gravitational acceleration.
        k (float): Manning's unit coefficient (1.0 in SI, 1.486 in Imperial).
    """
    name: str
    g: float
    k: float


SI = UnitSystem(name='SI', g=9.81, k=1.0)
IMPERIAL = UnitSystem(name='Imperial', g=32.2, k=1.486)


def unit_system(name: str) -> UnitSystem:
    """Returns the unit system called `name` (case-insensitive)."""
    if isinstance(name, UnitSystem):
        return name

    key = str(name).strip().lower()
    if key == 'si':
        return SI
    elif key == 'imperial':
        return IMPERIAL
    else:
        raise ValueError(f"Invalid unit system: {name}.")


def convert_inputs(params: dict, source: UnitSystem, target: UnitSystem) -> dict:
    """Converts discharge and lengths of an input dictionary between unit systems.

    Slope, roughness and side slope are dimensionless and are copied unchanged.

    Args:
        params (dict): Inputs with any of 'discharge', 'width', 'diameter', 'depth'.
        source (UnitSystem): Unit system of `params`.
        target (UnitSystem): Requested unit system.

    Returns:
        dict: A converted copy.
    """
    converted = dict(params)
    if source.name == target.name:
        return converted

    if target.name == 'Imperial':
        length_factor, flow_factor = FT_PER_M, CFS_PER_CMS
    else:
        length_factor, flow_factor = 1.0 / FT_PER_M, 1.0 / CFS_PER_CMS

    if converted.get('discharge') is not None:
        converted['discharge'] = converted['discharge'] * flow_factor

    for key in ('width', 'diameter', 'depth', 'length'):
        if converted.get(key) is not None:
            converted[key] = converted[key] * length_factor

    return converted
