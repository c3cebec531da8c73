import numpy as np
from scipy.optimize import brentq
from . import hydraulics
from .bisection import Solution, bisect, expand_bracket
from .cross_section import CrossSection
from .flow import FlowParameters
from .hydraulics import SUBCRITICAL, SUPERCRITICAL

OPEN_CHANNEL_BOUND = 50.0

ENERGY_MAX_ITER = 50
ENERGY_TOLERANCE = 1e-4


def _bracket(section: CrossSection, f, target: float) -> tuple:
    """Initial search interval for an increasing function of depth."""
    if section.depth_limit is not None:
        return 0.0, section.depth_limit

    return expand_bracket(f, 0.0, OPEN_CHANNEL_BOUND, target=target)


def normal_depth(section: CrossSection, flow: FlowParameters) -> Solution:
    """Computes the normal depth by solving Manning's equation.

    Searches for the depth whose uniform-flow discharge equals Q.

    Args:
        section (CrossSection): Channel cross-section.
        flow (FlowParameters): Discharge, slope, roughness and units.

    Returns:
        Solution: Normal depth. The root is NaN for a non-positive slope,
        where uniform flow does not exist. A closed conduit that cannot
        carry Q runs full: the root is then its diameter and the solution
        is not converged.
    """
    if not flow.bed_slope > 0:
        return Solution(root=float('nan'), converged=False, iterations=0)

    def f(y):
        geom = section.properties(y)
        if geom.area <= 0.0:
            return 0.0
        return hydraulics.normal_flow(flow.bed_slope,
                                      area=geom.area,
                                      roughness=flow.roughness,
                                      hydraulic_radius=geom.hydraulic_radius,
                                      k=flow.k)

    lower, upper = _bracket(section, f, flow.discharge)
    return bisect(f, lower, upper, target=flow.discharge)


def critical_depth(section: CrossSection, flow: FlowParameters) -> Solution:
    """Computes the critical depth, where g * A^3 = Q^2 * T (Fr = 1)."""
    g = flow.g
    Q2 = flow.discharge**2

    def f(y):
        geom = section.properties(y)
        return g * geom.area**3 - Q2 * geom.top_width

    lower, upper = _bracket(section, f, 0.0)
    return bisect(f, lower, upper, target=0.0)


def critical_energy(section: CrossSection, flow: FlowParameters, yc: float = None) -> tuple:
    """Returns (yc, Ec), the critical depth and the minimum specific energy."""
    if yc is None:
        yc = critical_depth(section, flow).root
    A = section.area(yc)
    return yc, hydraulics.specific_energy(yc, A, flow.discharge, flow.g)


def depth_from_energy(section: CrossSection, flow: FlowParameters, energy: float, regime: str) -> Solution:
    """Finds the depth with the given specific energy on one branch of the E-y curve.

    If the energy is below the critical minimum the section chokes and the
    critical depth is returned.

    Args:
        section (CrossSection): Channel cross-section.
        flow (FlowParameters): Discharge and units.
        energy (float): Target specific energy.
        regime (str): 'Subcritical' (y >= yc) or 'Supercritical' (y <= yc).

    Returns:
        Solution: The depth on the requested branch.
    """
    if regime not in [SUBCRITICAL, SUPERCRITICAL]:
        raise ValueError("Invalid flow regime.")

    yc, Ec = critical_energy(section, flow)
    if energy < Ec:
        return Solution(root=yc, converged=True, iterations=0)

    def E(y):
        return hydraulics.specific_energy(y, section.area(y), flow.discharge, flow.g)

    if regime == SUPERCRITICAL:
        # E falls as y rises towards yc
        return bisect(E, 0.0, yc, target=energy, tolerance=ENERGY_TOLERANCE,
                      max_iter=ENERGY_MAX_ITER, increasing=False)

    upper = max(5 * yc, 1.5 * energy)
    return bisect(E, yc, upper, target=energy, tolerance=ENERGY_TOLERANCE,
                  max_iter=ENERGY_MAX_ITER, increasing=True)


def conjugate_depth(section: CrossSection, flow: FlowParameters, depth: float) -> float:
    """Computes the sequent depth of a hydraulic jump.

    The conjugate depth lies on the other side of the critical depth and
    has the same specific force as `depth`.

    Args:
        section (CrossSection): Channel cross-section.
        flow (FlowParameters): Discharge and units.
        depth (float): Depth on one side of the jump.

    Returns:
        float: The conjugate depth. For a closed conduit whose full-bore
        specific force is too small, the diameter is returned.
    """
    if depth <= 0:
        raise ValueError("Depth must be positive.")

    Q, g = flow.discharge, flow.g

    def M(y):
        geom = section.properties(y)
        return hydraulics.specific_force(geom.area, geom.centroid_depth, Q, g)

    yc = critical_depth(section, flow).root
    M1 = M(depth)

    def f(y):
        return M(y) - M1

    if np.isclose(depth, yc):
        return yc

    if depth < yc:
        if section.depth_limit is not None:
            lower, upper = yc, section.depth_limit
        else:
            lower, upper = expand_bracket(M, yc, max(2 * yc, 1.0), target=M1)
    else:
        lower, upper = yc / 2, yc
        for _ in range(60):
            if M(lower) >= M1:
                break
            lower /= 2

    try:
        return float(brentq(f, lower, upper))
    except ValueError:
        # No sign change: the pipe cannot supply enough force
        if section.depth_limit is not None and depth < yc:
            return section.depth_limit
        raise
