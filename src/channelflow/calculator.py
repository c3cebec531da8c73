import numpy as np
import pandas as pd
from dataclasses import dataclass
from . import hydraulics
from .cross_section import CrossSection
from .depths import normal_depth, critical_depth
from .flow import FlowParameters
from .hydraulics import CRITICAL


@dataclass(frozen=True)
class CalculationResult:
    """Uniform-flow summary of a single channel.

    Callers must check `error` before trusting the numbers: invalid
    inputs give a zeroed result with a descriptive message.

    `converged` is False when a depth search missed its tolerance. This
    includes a pipe that cannot carry the discharge: the normal depth is
    then the diameter, the top width is close to zero and the Froude
    number and regime describe a full conduit, not open-channel flow.
    """
    normal_depth: float = 0.0
    critical_depth: float = 0.0
    velocity: float = 0.0
    froude_number: float = 0.0
    flow_regime: str = CRITICAL
    critical_velocity: float = 0.0
    error: str = None
    converged: bool = False


@dataclass(frozen=True)
class SectionProperties:
    depth: float
    area: float
    perimeter: float
    hydraulic_radius: float
    top_width: float
    specific_energy: float
    specific_force: float
    velocity: float


def calculate_section_properties(section: CrossSection, depth: float, flow: FlowParameters) -> SectionProperties:
    """Computes the hydraulic properties of a section at an arbitrary depth.

    Args:
        section (CrossSection): Channel cross-section.
        depth (float): Flow depth.
        flow (FlowParameters): Discharge and units (slope and n are not used).

    Returns:
        SectionProperties: A, P, R, T, E, M and V at the depth.
    """
    Q, g = flow.discharge, flow.g
    geom = section.properties(depth)

    return SectionProperties(depth=depth,
                             area=geom.area,
                             perimeter=geom.wetted_perimeter,
                             hydraulic_radius=geom.hydraulic_radius,
                             top_width=geom.top_width,
                             specific_energy=hydraulics.specific_energy(depth, geom.area, Q, g),
                             specific_force=hydraulics.specific_force(geom.area, geom.centroid_depth, Q, g),
                             velocity=hydraulics.velocity(Q, geom.area))


def calculate_flow(section: CrossSection, flow: FlowParameters) -> CalculationResult:
    """Computes normal and critical depth and classifies the flow regime.

    Never raises for invalid numeric input; the message is returned in
    `CalculationResult.error` instead.
    """
    try:
        flow.validate()
        section.validate()

        yn = normal_depth(section, flow)
        yc = critical_depth(section, flow)

        geom_n = section.properties(yn.root)
        if geom_n.area <= 0.0 or geom_n.top_width <= 0.0:
            raise ValueError("Normal depth could not be determined.")

        V = flow.discharge / geom_n.area
        Fr = hydraulics.froude_num(T=geom_n.top_width, A=geom_n.area, Q=flow.discharge, g=flow.g)

        A_c = section.area(yc.root)
        Vc = flow.discharge / A_c if A_c > 0.0 else 0.0

        return CalculationResult(normal_depth=yn.root,
                                 critical_depth=yc.root,
                                 velocity=V,
                                 froude_number=Fr,
                                 flow_regime=hydraulics.classify_regime(Fr),
                                 critical_velocity=Vc,
                                 converged=yn.converged and yc.converged)

    except ValueError as e:
        return CalculationResult(error=str(e))


def analysis_depth(mode: str, result: CalculationResult, custom_depth: float = None) -> float:
    """Selects the depth at which section properties are reported.

    Args:
        mode (str): 'Normal', 'Critical' or 'Custom'.
        result (CalculationResult): Result of `calculate_flow`.
        custom_depth (float, optional): Depth used in 'Custom' mode.

    Returns:
        float: The depth, or 0.0 if it is undefined.
    """
    if mode == 'Normal':
        depth = result.normal_depth
    elif mode == 'Critical':
        depth = result.critical_depth
    elif mode == 'Custom':
        depth = custom_depth
    else:
        raise ValueError("Invalid analysis mode.")

    if depth is None or np.isnan(depth):
        return 0.0
    return depth


def specific_energy_curve(section: CrossSection, flow: FlowParameters, depths=None, n_points: int = 50) -> pd.DataFrame:
    """Tabulates specific energy and specific force against depth.

    Args:
        section (CrossSection): Channel cross-section.
        flow (FlowParameters): Discharge and units.
        depths (array-like, optional): Depths to evaluate. Defaults to
            `n_points` values between 0.1*yc and 3*max(yc, yn).
        n_points (int, optional): Number of default depths. Defaults to 50.

    Returns:
        pd.DataFrame: Columns depth, specific_energy, specific_force.
    """
    if depths is None:
        yc = critical_depth(section, flow).root
        yn = normal_depth(section, flow).root
        y_max = 3 * max(yc, yn) if not np.isnan(yn) else 3 * yc
        if section.depth_limit is not None:
            y_max = min(y_max, section.depth_limit)
        depths = np.linspace(0.1 * yc, y_max, n_points)

    rows = [calculate_section_properties(section, float(y), flow) for y in np.asarray(depths, dtype=np.float64)]

    return pd.DataFrame({
        'depth': [r.depth for r in rows],
        'specific_energy': [r.specific_energy for r in rows],
        'specific_force': [r.specific_force for r in rows],
    })
