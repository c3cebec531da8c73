import numpy as np


class BoundaryCondition:
    """Controls the water-surface profile from one end of the channel.
    """
    def __init__(self,
                 location: str,
                 condition: str,
                 value: float = None):
        """Initializes a boundary condition.

        Args:
            location (str): 'upstream' or 'downstream'. A downstream control
                is swept upstream (backwater), an upstream control downstream.
            condition (str): 'fixed_depth', 'normal_depth' or 'critical_depth'.
            value (float, optional): Depth for 'fixed_depth' conditions. Defaults to None.
        """
        if location not in ['upstream', 'downstream']:
            raise ValueError("Invalid boundary location.")

        if condition not in ['fixed_depth', 'normal_depth', 'critical_depth']:
            raise ValueError("Invalid boundary condition.")

        if condition == 'fixed_depth':
            if value is None:
                raise ValueError("Insufficient arguments for boundary condition.")
            if value <= 0:
                raise ValueError("Boundary depth must be positive.")

        self.location = location
        self.condition = condition
        self.value = None if value is None else float(value)

    @property
    def sweeps_upstream(self) -> bool:
        """True when computation runs from the last reach to the first."""
        return self.location == 'downstream'

    def initial_depth(self, yn: float, yc: float) -> float:
        """Depth at the controlled end given the reach's normal and critical depths."""
        if self.condition == 'normal_depth':
            if yn is None or np.isnan(yn):
                raise ValueError("Normal depth is undefined for a non-positive bed slope.")
            return yn
        elif self.condition == 'critical_depth':
            return yc
        return self.value

    def __repr__(self):
        return f'BoundaryCondition(location={self.location}, condition={self.condition}, value={self.value})'
