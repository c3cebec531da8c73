from .units import UnitSystem, SI, IMPERIAL, unit_system, convert_inputs
from .cross_section import (Geometry, CrossSection, RectangularSection, TrapezoidalSection,
                            TriangularSection, CircularSection, make_section)
from .flow import FlowParameters
from .bisection import Solution, bisect
from .depths import normal_depth, critical_depth, depth_from_energy, conjugate_depth
from .calculator import (CalculationResult, SectionProperties, calculate_flow,
                         calculate_section_properties, analysis_depth, specific_energy_curve)
from .reach import Reach
from .boundary import BoundaryCondition
from .config import ProfileSettings, DEFAULT_PARAMS, load_case, load_settings
from .profile import ProfilePoint, TransitionEvent, ProfileEngine, compute_profile, reconcile_bed_elevations

__version__ = '0.1.0'
