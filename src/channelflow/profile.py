import os
import time
import numpy as np
import pandas as pd
from dataclasses import dataclass, asdict, fields
from . import hydraulics
from .boundary import BoundaryCondition
from .config import ProfileSettings
from .cross_section import CrossSection
from .depths import normal_depth, critical_depth, critical_energy, depth_from_energy
from .flow import FlowParameters
from .hydraulics import SUBCRITICAL, SUPERCRITICAL
from .reach import Reach
from .utility import create_directory_if_not_exists, format_seconds


@dataclass(frozen=True)
class ProfilePoint:
    distance: float
    bed_elevation: float
    water_elevation: float
    depth: float
    normal_depth_elevation: float
    critical_depth_elevation: float
    reach_index: int


@dataclass(frozen=True)
class TransitionEvent:
    """Something the integrator had to intervene on.

    kind is one of 'near_critical' (step denominator clamped), 'dry_out'
    (depth hit the floor, reach integration stopped) or 'choke' (junction
    energy below the critical minimum, depth set to critical).
    """
    reach_index: int
    distance: float
    kind: str
    froude_number: float


def reconcile_bed_elevations(reaches: list, datum: float = 100.0) -> np.ndarray:
    """Computes bed elevations at the reach boundaries (nodes).

    Nodes of elevation-specified reaches take their given values; the rest
    are filled forward (downstream) and then backward from known nodes
    using each reach's slope. Without any elevation data node 0 is set to
    `datum`.

    Args:
        reaches (list): Reaches in upstream-to-downstream order.
        datum (float, optional): Fallback elevation of node 0. Defaults to 100.0.

    Returns:
        np.ndarray: len(reaches) + 1 bed elevations.
    """
    n = len(reaches)
    z = np.full(n + 1, np.nan, dtype=np.float64)

    for i, reach in enumerate(reaches):
        if reach.has_elevations:
            z[i] = reach.upstream_elevation
            z[i + 1] = reach.downstream_elevation

    if np.all(np.isnan(z)):
        z[0] = datum

    for i in range(n):
        if np.isnan(z[i + 1]) and not np.isnan(z[i]):
            z[i + 1] = z[i] - reaches[i].slope * reaches[i].length

    for i in reversed(range(n)):
        if np.isnan(z[i]) and not np.isnan(z[i + 1]):
            z[i] = z[i + 1] + reaches[i].slope * reaches[i].length

    return z


class ProfileEngine:
    """
    Steady gradually-varied flow profile through a chain of reaches.

    The boundary condition sets the direction of computation: a downstream
    control is swept from the last reach to the first with subcritical
    junction transitions, an upstream control from the first to the last
    with supercritical ones. Each reach is integrated with the standard-step
    form of dy/dx = (S - Sf) / (1 - Fr^2), junction depths come from an
    energy balance, and bed elevations are reconciled once all reaches are done.
    """
    def __init__(self,
                 section: CrossSection,
                 flow: FlowParameters,
                 reaches: list,
                 boundary: BoundaryCondition,
                 steps_per_reach: int = None,
                 settings: ProfileSettings = None):
        """Initializes the engine.

        Args:
            section (CrossSection): Cross-section shared by all reaches.
            flow (FlowParameters): Discharge, roughness and units. The bed
                slope is taken from each reach instead.
            reaches (list): Reach objects, upstream to downstream.
            boundary (BoundaryCondition): The controlling boundary.
            steps_per_reach (int, optional): Sub-steps per reach. Defaults to settings.steps_per_reach.
            settings (ProfileSettings, optional): Numerical settings. Defaults to ProfileSettings().
        """
        self.section = section
        self.flow = flow
        self.reaches: list[Reach] = list(reaches)
        self.boundary = boundary
        self.settings = ProfileSettings() if settings is None else settings
        self.steps_per_reach = self.settings.steps_per_reach if steps_per_reach is None else steps_per_reach

        self.points: list[ProfilePoint] = None
        self.events: list[TransitionEvent] = []
        self.normal_depths = None
        self.critical_depths = None
        self.bed_nodes = None
        self.run_duration = 0.0

        self._verbose = 0
        self._deadline = None

    def validate(self) -> None:
        if not self.reaches:
            raise ValueError("At least one reach is required.")

        if not 1 <= self.steps_per_reach <= self.settings.max_steps_per_reach:
            raise ValueError(f"Steps per reach must be between 1 and {self.settings.max_steps_per_reach}.")

        if not (self.flow.discharge > 0 and self.flow.roughness > 0):
            raise ValueError("n and Q must be positive.")

        self.section.validate()

    @property
    def offsets(self) -> np.ndarray:
        """Chainage of the upstream end of every reach."""
        lengths = np.array([r.length for r in self.reaches], dtype=np.float64)
        return np.concatenate(([0.0], np.cumsum(lengths)[:-1]))

    def reach_flow(self, i: int) -> FlowParameters:
        return self.flow.with_slope(self.reaches[i].slope)

    def run(self, verbose: int = 0, timeout: float = None) -> list:
        """Computes the profile.

        Args:
            verbose (int, optional): 0 silent, 1 warnings and completion, 2 per-reach progress. Defaults to 0.
            timeout (float, optional): Wall-clock limit in seconds. Defaults to None.

        Returns:
            list[ProfilePoint]: Points sorted by ascending distance.
        """
        self.validate()

        started = time.perf_counter()
        self._verbose = verbose
        self._deadline = None if timeout is None else started + timeout
        self.events = []

        n = len(self.reaches)
        self.normal_depths = [normal_depth(self.section, self.reach_flow(i)).root for i in range(n)]
        self.critical_depths = [critical_depth(self.section, self.reach_flow(i)).root for i in range(n)]

        upstream_sweep = self.boundary.sweeps_upstream
        order = range(n - 1, -1, -1) if upstream_sweep else range(n)
        regime = SUBCRITICAL if upstream_sweep else SUPERCRITICAL

        local_points = {}
        previous = None
        depth = None

        for i in order:
            if previous is None:
                depth = self.boundary.initial_depth(self.normal_depths[i], self.critical_depths[i])
            else:
                depth = self._junction_depth(previous, i, depth, regime, upstream_sweep)

            if verbose >= 2:
                print(f'> Reach #{i}: entry depth = {depth:.4f}, '
                      f'yn = {self.normal_depths[i]:.4f}, yc = {self.critical_depths[i]:.4f}')

            local_points[i] = self._integrate_reach(i, depth, upstream_sweep)
            depth = local_points[i][-1][1]
            previous = i

        self.bed_nodes = reconcile_bed_elevations(self.reaches, datum=self.settings.datum)
        self.points = self._assemble(local_points)
        self.run_duration = time.perf_counter() - started

        if verbose >= 1:
            print("Profile computed successfully.")

        return self.points

    def _record(self, i: int, x_local: float, kind: str, Fr: float) -> None:
        event = TransitionEvent(reach_index=i,
                                distance=float(self.offsets[i] + x_local),
                                kind=kind,
                                froude_number=Fr)
        self.events.append(event)

        if self._verbose >= 1:
            print(f"Warning: {kind.replace('_', ' ')} in reach #{i} at distance {event.distance:.2f} (Fr={Fr:.2f}).")

    def _junction_depth(self, previous: int, current: int, depth: float, regime: str, upstream_sweep: bool) -> float:
        """Carries the total head across a reach junction.

        The bed step is only applied when both adjoining ends have known elevations.
        """
        if upstream_sweep:
            z_prev = self.reaches[previous].end_elevation('upstream')
            z_curr = self.reaches[current].end_elevation('downstream')
        else:
            z_prev = self.reaches[previous].end_elevation('downstream')
            z_curr = self.reaches[current].end_elevation('upstream')

        step = z_prev - z_curr if z_prev is not None and z_curr is not None else 0.0

        A = self.section.area(depth)
        E_required = hydraulics.specific_energy(depth, A, self.flow.discharge, self.flow.g) + step

        flow = self.reach_flow(current)
        yc, Ec = critical_energy(self.section, flow, yc=self.critical_depths[current])

        if E_required < Ec:
            x_local = self.reaches[current].length if upstream_sweep else 0.0
            self._record(current, x_local, 'choke', 1.0)
            return yc

        return depth_from_energy(self.section, flow, E_required, regime).root

    def _integrate_reach(self, i: int, y: float, upstream_sweep: bool) -> list:
        """Standard-step integration over one reach.

        Returns:
            list: (local distance, depth) pairs in order of computation,
            starting with the entry point.
        """
        reach = self.reaches[i]
        n_steps = self.steps_per_reach
        S = reach.slope
        Q, n, g, k = self.flow.discharge, self.flow.roughness, self.flow.g, self.flow.k
        threshold = self.settings.critical_threshold

        dx = reach.length / n_steps * (-1 if upstream_sweep else 1)
        x = reach.length if upstream_sweep else 0.0
        points = [(x, y)]

        for step in range(n_steps):
            if self._deadline is not None and time.perf_counter() > self._deadline:
                raise TimeoutError("Profile computation timed out.")

            geom = self.section.properties(y)
            if geom.area <= 0.0 or geom.top_width <= 0.0:
                break

            V = Q / geom.area
            Sf = hydraulics.Sf(Q=Q, A=geom.area, n=n, R=geom.hydraulic_radius, k=k)
            Fr2 = V**2 / (g * geom.hydraulic_depth)

            Fr = float(np.sqrt(Fr2))

            denominator = 1 - Fr2
            near_critical = abs(denominator) < threshold
            if near_critical:
                # Keep to the branch the sweep direction assumes
                denominator = threshold if upstream_sweep else -threshold
                self._record(i, x, 'near_critical', Fr)

            dy = (S - Sf) / denominator * dx
            if near_critical:
                limit = self.settings.critical_step_fraction * y
                dy = min(max(dy, -limit), limit)

            y = y + dy

            fraction = (step + 1) / n_steps
            x = reach.length * (1 - fraction) if upstream_sweep else reach.length * fraction

            dry = y <= self.settings.min_depth
            y = float(min(max(y, self.settings.min_depth), self.settings.max_depth))
            points.append((x, y))

            if dry:
                self._record(i, x, 'dry_out', Fr)
                break

        return points

    def _assemble(self, local_points: dict) -> list:
        offsets = self.offsets
        points = []

        for i, reach in enumerate(self.reaches):
            yn, yc = self.normal_depths[i], self.critical_depths[i]
            z_start = self.bed_nodes[i]

            for x, depth in local_points.get(i, []):
                bed = float(z_start - reach.slope * x)
                points.append(ProfilePoint(distance=float(offsets[i] + x),
                                           bed_elevation=bed,
                                           water_elevation=bed + depth,
                                           depth=depth,
                                           normal_depth_elevation=bed + yn,
                                           critical_depth_elevation=bed + yc,
                                           reach_index=i))

        points.sort(key=lambda p: (p.distance, p.reach_index))
        return points

    def to_dataframe(self) -> pd.DataFrame:
        if self.points is None:
            raise RuntimeError("Profile has not been computed.")

        columns = [f.name for f in fields(ProfilePoint)]
        return pd.DataFrame([asdict(p) for p in self.points], columns=columns)

    def reaches_dataframe(self) -> pd.DataFrame:
        if self.points is None:
            raise RuntimeError("Profile has not been computed.")

        offsets = self.offsets
        return pd.DataFrame({
            'reach_index': range(len(self.reaches)),
            'start_distance': offsets,
            'length': [r.length for r in self.reaches],
            'mode': [r.mode for r in self.reaches],
            'slope': [r.slope for r in self.reaches],
            'upstream_bed_elevation': self.bed_nodes[:-1],
            'downstream_bed_elevation': self.bed_nodes[1:],
            'normal_depth': self.normal_depths,
            'critical_depth': self.critical_depths,
        })

    def save_results(self, folder_path):
        """
        Save the profile to an Excel workbook and a text summary.
        """
        df_profile = self.to_dataframe()
        create_directory_if_not_exists(folder_path)
        filename = os.path.join(folder_path, "results.xlsx")

        columns = [f.name for f in fields(TransitionEvent)]
        df_events = pd.DataFrame([asdict(e) for e in self.events], columns=columns)

        with pd.ExcelWriter(filename, engine="openpyxl") as writer:
            df_profile.to_excel(writer, sheet_name="Profile", index=False)
            self.reaches_dataframe().to_excel(writer, sheet_name="Reaches", index=False)
            df_events.to_excel(writer, sheet_name="Events", index=False)

        first, last = self.points[0], self.points[-1]
        near_critical = sum(1 for e in self.events if e.kind == 'near_critical')

        with open(os.path.join(folder_path, 'Data.txt'), 'w') as output_file:
            output_file.write(f'Unit system = {self.flow.units.name}\n')
            output_file.write(f'Discharge = {self.flow.discharge}\n')
            output_file.write(f'Section = {self.section!r}\n')
            output_file.write(f'Boundary = {self.boundary!r}\n')
            output_file.write(f'Steps per reach = {self.steps_per_reach}\n')
            output_file.write(f'Total length = {last.distance - first.distance:.2f}\n')
            output_file.write(f'Upstream water level = {first.water_elevation:.4f}\n')
            output_file.write(f'Downstream water level = {last.water_elevation:.4f}\n')
            output_file.write(f'Near-critical steps = {near_critical}\n')
            output_file.write(f'Computation time = {format_seconds(self.run_duration)}\n')


def compute_profile(section: CrossSection,
                    flow: FlowParameters,
                    reaches: list,
                    boundary: BoundaryCondition,
                    steps_per_reach: int = None,
                    settings: ProfileSettings = None,
                    timeout: float = None) -> list:
    """Computes a multi-reach water-surface profile in one call."""
    engine = ProfileEngine(section=section,
                           flow=flow,
                           reaches=reaches,
                           boundary=boundary,
                           steps_per_reach=steps_per_reach,
                           settings=settings)
    return engine.run(timeout=timeout)
