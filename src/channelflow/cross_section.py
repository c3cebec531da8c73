import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Geometry:
    """Wetted geometry of a section at one depth."""
    area: float = 0.0
    wetted_perimeter: float = 0.0
    top_width: float = 0.0
    centroid_depth: float = 0.0

    @property
    def hydraulic_radius(self) -> float:
        return self.area / self.wetted_perimeter if self.wetted_perimeter > 0.0 else 0.0

    @property
    def hydraulic_depth(self) -> float:
        return self.area / self.top_width if self.top_width > 0.0 else 0.0


DRY = Geometry()


class CrossSection(ABC):
    """
    Abstract base class for prismatic channel cross-sections.

    Each subclass carries only the parameters of its own shape and
    implements `_wetted(y)` for a strictly positive depth. Depths at or
    below zero always give a dry (all-zero) geometry.
    """
    shape: str = None

    ## ------------------------------------------------------------------
    ## Abstract Methods (Must be implemented by subclasses)
    ## ------------------------------------------------------------------

    @abstractmethod
    def _wetted(self, y: float) -> Geometry:
        """Return the geometry for a depth y > 0."""
        pass

    @abstractmethod
    def validate(self) -> None:
        """Raise ValueError if the shape parameters are not usable."""
        pass

    ## ------------------------------------------------------------------
    ## Concrete Methods (Shared functionality)
    ## ------------------------------------------------------------------

    @property
    def depth_limit(self) -> float:
        """Largest physically meaningful depth, or None for open shapes."""
        return None

    def properties(self, y: float) -> Geometry:
        """Return the Geometry (A, P, T, centroid depth) at depth y."""
        y = float(y)
        if y <= 0.0:
            return DRY
        return self._wetted(y)

    def area(self, y: float) -> float:
        """Return wetted area (A)."""
        return self.properties(y).area

    def wetted_perimeter(self, y: float) -> float:
        """Return wetted perimeter (P)."""
        return self.properties(y).wetted_perimeter

    def hydraulic_radius(self, y: float) -> float:
        """Return hydraulic radius (R)."""
        return self.properties(y).hydraulic_radius

    def top_width(self, y: float) -> float:
        """Return top width (T)."""
        return self.properties(y).top_width

    def centroid_depth(self, y: float) -> float:
        """Return depth of the area centroid below the water surface."""
        return self.properties(y).centroid_depth

    def parameters(self) -> dict:
        return {}

    def __repr__(self):
        args = ', '.join(f'{k}={v}' for k, v in self.parameters().items())
        return f'{type(self).__name__}({args})'


class RectangularSection(CrossSection):
    shape = 'Rectangular'

    def __init__(self, width: float):
        self.width = float(width)

    def validate(self):
        if self.width <= 0:
            raise ValueError("Width must be positive.")

    def parameters(self):
        return {'width': self.width}

    def _wetted(self, y):
        b = self.width
        return Geometry(area=b * y,
                        wetted_perimeter=b + 2.0 * y,
                        top_width=b,
                        centroid_depth=y / 2.0)


class TrapezoidalSection(CrossSection):
    """
    Trapezoid with bottom width b and side slope z (horizontal : vertical).

    A zero side slope gives a rectangle and a zero bottom width a triangle.
    """
    shape = 'Trapezoidal'

    def __init__(self, width: float, side_slope: float):
        self.width = float(width)
        self.side_slope = float(side_slope)

    def validate(self):
        if self.width < 0 or self.side_slope < 0:
            raise ValueError("Width and side slope must not be negative.")
        if self.width == 0 and self.side_slope == 0:
            raise ValueError("Width or side slope must be positive.")

    def parameters(self):
        return {'width': self.width, 'side_slope': self.side_slope}

    def _wetted(self, y):
        b, z = self.width, self.side_slope
        T = b + 2.0 * z * y
        A = (b + z * y) * y
        P = b + 2.0 * y * np.sqrt(1.0 + z**2)

        # Centroid height above the bed, measured for a trapezoid of widths b and T
        y_bar = (y / 3.0) * (2.0 * T + b) / (T + b)
        return Geometry(area=float(A),
                        wetted_perimeter=float(P),
                        top_width=float(T),
                        centroid_depth=float(y - y_bar))


class TriangularSection(CrossSection):
    shape = 'Triangular'

    def __init__(self, side_slope: float):
        self.side_slope = float(side_slope)

    def validate(self):
        if self.side_slope <= 0:
            raise ValueError("Side slope must be positive.")

    def parameters(self):
        return {'side_slope': self.side_slope}

    def _wetted(self, y):
        z = self.side_slope
        return Geometry(area=z * y**2,
                        wetted_perimeter=float(2.0 * y * np.sqrt(1.0 + z**2)),
                        top_width=2.0 * z * y,
                        centroid_depth=y / 3.0)


class CircularSection(CrossSection):
    """
    Circular conduit of diameter D flowing partly full.

    Depths above D are clamped to D (pipe running full).
    """
    shape = 'Circular'

    def __init__(self, diameter: float):
        self.diameter = float(diameter)

    def validate(self):
        if self.diameter <= 0:
            raise ValueError("Diameter must be positive.")

    def parameters(self):
        return {'diameter': self.diameter}

    @property
    def depth_limit(self):
        return self.diameter

    def _wetted(self, y):
        D = self.diameter
        if D <= 0.0:
            return DRY

        h = min(y, D)
        r = D / 2.0
        theta = 2.0 * np.arccos(np.clip(1.0 - 2.0 * h / D, -1.0, 1.0))
        segment = theta - np.sin(theta)

        A = D**2 / 8.0 * segment
        P = D / 2.0 * theta
        T = D * np.sin(theta / 2.0)

        # Distance from the circle centre to the centroid of the wetted segment
        centroid_from_centre = 2.0 * D * np.sin(theta / 2.0)**3 / (3.0 * segment) if segment > 0.0 else 0.0

        return Geometry(area=float(A),
                        wetted_perimeter=float(P),
                        top_width=float(T),
                        centroid_depth=float((h - r) + centroid_from_centre))


SECTION_TYPES = {
    'rectangular': RectangularSection,
    'trapezoidal': TrapezoidalSection,
    'triangular': TriangularSection,
    'circular': CircularSection,
}


def make_section(shape: str, width: float = None, side_slope: float = None, diameter: float = None, **ignored) -> CrossSection:
    """Creates a cross-section of the given shape.

    Only the parameters of the requested shape are used; others are ignored.

    Args:
        shape (str): 'Rectangular', 'Trapezoidal', 'Triangular' or 'Circular'.
        width (float, optional): Bottom width. Defaults to None.
        side_slope (float, optional): Side slope z (H:V). Defaults to None.
        diameter (float, optional): Conduit diameter. Defaults to None.

    Returns:
        CrossSection: The section object.
    """
    key = str(shape).strip().lower()
    if key not in SECTION_TYPES:
        raise ValueError(f"Invalid channel shape: {shape}.")

    if key == 'rectangular':
        if width is None:
            raise ValueError("Width must be specified.")
        return RectangularSection(width=width)

    elif key == 'trapezoidal':
        if width is None or side_slope is None:
            raise ValueError("Width and side slope must be specified.")
        return TrapezoidalSection(width=width, side_slope=side_slope)

    elif key == 'triangular':
        if side_slope is None:
            raise ValueError("Side slope must be specified.")
        return TriangularSection(side_slope=side_slope)

    else:
        if diameter is None:
            raise ValueError("Diameter must be specified.")
        return CircularSection(diameter=diameter)
