import numpy as np

SUBCRITICAL = 'Subcritical'
CRITICAL = 'Critical'
SUPERCRITICAL = 'Supercritical'


def conveyance(A: float, n: float, R: float, k: float = 1.0) -> float:
    """Computes conveyance.

    Args:
        A (float): Flow area.
        n (float): Roughness.
        R (float): Hydraulic radius.
        k (float): Manning's unit coefficient.

    Returns:
        float: K
    """
    return k * A * R**(2/3) / n


def normal_flow(bed_slope, area: float = None, roughness: float = None, hydraulic_radius: float = None, K: float = None, k: float = 1.0):
    if K is None:
        K = conveyance(A=area, n=roughness, R=hydraulic_radius, k=k)

    Q = K * np.abs(bed_slope)**0.5

    if bed_slope < 0:
        Q = -Q

    return float(Q)


def Sf(Q: float, A: float = None, n: float = None, R: float = None, K: float = None, k: float = 1.0) -> float:
    """Computes friction slope using Manning's equation.

    Args:
        Q (float): Flow rate
        A (float): Cross-sectional flow area.
        n (float): Manning's roughness coefficient.
        R (float): Hydraulic radius.
        K (float): Conveyance, used instead of A, n and R if given.
        k (float): Manning's unit coefficient.

    Returns:
        float: Friction slope.
    """
    if K is None:
        K = conveyance(A=A, n=n, R=R, k=k)

    return Q * np.abs(Q) / K**2


def froude_num(T: float, A: float, Q: float, g: float):
    """Computes the Froude number.

    Args:
        T (float): Top width.
        A (float): Flow area.
        Q (float): Flow rate.
        g (float): Gravitational acceleration.

    Returns:
        float: The Froude number.
    """
    V = Q/A
    D = A/T
    return float(V / np.sqrt(g*D))


def velocity(Q: float, A: float) -> float:
    return Q / A if A > 0.0 else 0.0


def specific_energy(y: float, A: float, Q: float, g: float) -> float:
    """Depth plus velocity head, E = y + V^2 / 2g."""
    V = velocity(Q, A)
    return y + V**2 / (2 * g)


def specific_force(A: float, centroid_depth: float, Q: float, g: float) -> float:
    """Momentum function M = Q^2 / (g A) + A * centroid depth."""
    if A <= 0.0:
        return 0.0
    return Q**2 / (g * A) + A * centroid_depth


def classify_regime(Fr: float) -> str:
    # deadband around Fr = 1 absorbs solver noise
    if Fr < 0.99:
        return SUBCRITICAL
    elif Fr > 1.01:
        return SUPERCRITICAL
    return CRITICAL
