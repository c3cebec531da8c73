class Reach:
    """
    A length of prismatic channel with constant bed slope.

    The slope is either given directly ('slope' mode) or derived from the
    bed elevations at both ends ('elevation' mode).
    """
    def __init__(self,
                 length: float,
                 mode: str = 'slope',
                 slope: float = None,
                 upstream_elevation: float = None,
                 downstream_elevation: float = None):
        """Initializes a Reach object.

        Args:
            length (float): Reach length, measured along the channel.
            mode (str, optional): 'slope' or 'elevation'. Defaults to 'slope'.
            slope (float, optional): Bed slope, used in 'slope' mode. Defaults to None.
            upstream_elevation (float, optional): Bed elevation at the upstream end ('elevation' mode). Defaults to None.
            downstream_elevation (float, optional): Bed elevation at the downstream end ('elevation' mode). Defaults to None.
        """
        if mode not in ['slope', 'elevation']:
            raise ValueError("Invalid reach mode.")

        if length is None or length <= 0:
            raise ValueError("Reach length must be positive.")

        if mode == 'slope':
            if slope is None:
                raise ValueError("Bed slope must be specified.")
        elif upstream_elevation is None or downstream_elevation is None:
            raise ValueError("Upstream and downstream elevations must be specified.")

        self.length = float(length)
        self.mode = mode
        self._slope = None if slope is None else float(slope)
        self.upstream_elevation = None if upstream_elevation is None else float(upstream_elevation)
        self.downstream_elevation = None if downstream_elevation is None else float(downstream_elevation)

    @property
    def has_elevations(self) -> bool:
        return self.mode == 'elevation'

    @property
    def slope(self) -> float:
        if self.mode == 'elevation':
            return (self.upstream_elevation - self.downstream_elevation) / self.length
        return self._slope

    def end_elevation(self, end: str) -> float:
        """Bed elevation at the 'upstream' or 'downstream' end, or None if unknown."""
        if not self.has_elevations:
            return None
        if end == 'upstream':
            return self.upstream_elevation
        elif end == 'downstream':
            return self.downstream_elevation
        raise ValueError("Invalid reach end.")

    def __repr__(self):
        if self.has_elevations:
            return (f'Reach(length={self.length}, mode=elevation, '
                    f'upstream_elevation={self.upstream_elevation}, downstream_elevation={self.downstream_elevation})')
        return f'Reach(length={self.length}, mode=slope, slope={self.slope})'
