from dataclasses import dataclass, fields
from pathlib import Path
import yaml
from .boundary import BoundaryCondition
from .cross_section import CrossSection, make_section
from .flow import FlowParameters
from .reach import Reach
from .units import unit_system


@dataclass
class ProfileSettings:
    # Integration
    steps_per_reach: int = 20
    max_steps_per_reach: int = 10000

    # Depth clamps applied after every step
    min_depth: float = 0.01
    max_depth: float = 100.0

    # |1 - Fr^2| below this is treated as near-critical
    critical_threshold: float = 0.05

    # Largest depth change of a near-critical step, as a fraction of depth
    critical_step_fraction: float = 0.1

    # Node-0 bed elevation when no reach carries elevations
    datum: float = 100.0


DEFAULT_PARAMS = {
    'Rectangular': {'discharge': 10.0, 'bed_slope': 0.001, 'roughness': 0.013, 'width': 5.0},
    'Trapezoidal': {'discharge': 10.0, 'bed_slope': 0.001, 'roughness': 0.013, 'width': 3.0, 'side_slope': 2.0},
    'Triangular': {'discharge': 5.0, 'bed_slope': 0.005, 'roughness': 0.013, 'side_slope': 1.5},
    'Circular': {'discharge': 2.0, 'bed_slope': 0.002, 'roughness': 0.013, 'diameter': 2.0},
}


@dataclass
class Case:
    """Everything needed to compute one water-surface profile."""
    section: CrossSection
    flow: FlowParameters
    reaches: list
    boundary: BoundaryCondition
    settings: ProfileSettings


def _update(settings: ProfileSettings, values: dict, source) -> ProfileSettings:
    known = {f.name for f in fields(settings)}
    for key, value in (values or {}).items():
        if key in known:
            setattr(settings, key, value)
        else:
            print(f"Warning: Unknown configuration key '{key}' in {source}")
    return settings


def load_settings(config_path: Path) -> ProfileSettings:
    """Loads numerical settings from a YAML file into the dataclass."""
    with open(config_path, 'r') as f:
        config_dict = yaml.safe_load(f) or {}

    return _update(ProfileSettings(), config_dict, config_path)


def _reach_from_dict(values: dict) -> Reach:
    values = dict(values)
    if 'mode' not in values:
        has_elevations = 'upstream_elevation' in values or 'downstream_elevation' in values
        values['mode'] = 'elevation' if has_elevations else 'slope'
    return Reach(**values)


def case_from_dict(config_dict: dict, source='<dict>') -> Case:
    """Builds a Case from a dictionary with the layout of a case file.

    Expected keys: 'units', 'channel' (shape and its parameters), 'flow'
    (discharge, roughness, optional bed_slope), 'boundary' (location,
    condition, value), 'reaches' (list) and optional 'settings'.
    """
    for key in ['channel', 'flow', 'boundary', 'reaches']:
        if key not in config_dict:
            raise ValueError(f"Missing '{key}' in {source}.")

    units = unit_system(config_dict.get('units', 'SI'))

    section = make_section(**config_dict['channel'])

    reaches = [_reach_from_dict(r) for r in config_dict['reaches']]
    if not reaches:
        raise ValueError(f"No reaches defined in {source}.")

    flow_dict = config_dict['flow']
    flow = FlowParameters(discharge=flow_dict['discharge'],
                          bed_slope=flow_dict.get('bed_slope', reaches[0].slope),
                          roughness=flow_dict['roughness'],
                          units=units)

    boundary = BoundaryCondition(**config_dict['boundary'])

    settings = _update(ProfileSettings(), config_dict.get('settings'), source)

    return Case(section=section, flow=flow, reaches=reaches, boundary=boundary, settings=settings)


def load_case(config_path: Path) -> Case:
    """Loads a complete profile case from a YAML file."""
    with open(config_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not isinstance(config_dict, dict):
        raise ValueError(f"Invalid case file: {config_path}.")

    return case_from_dict(config_dict, source=config_path)
