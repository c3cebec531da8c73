import pytest
from channelflow.cross_section import RectangularSection, TrapezoidalSection, TriangularSection, CircularSection
from channelflow.flow import FlowParameters
from channelflow.units import SI


@pytest.fixture
def rectangle():
    return RectangularSection(width=5.0)


@pytest.fixture
def mild_flow():
    return FlowParameters(discharge=10.0, bed_slope=0.001, roughness=0.013, units=SI)


@pytest.fixture
def steep_flow():
    return FlowParameters(discharge=10.0, bed_slope=0.02, roughness=0.013, units=SI)


# (section, flow) pairs built from the default inputs of each shape
SHAPE_CASES = [
    (RectangularSection(width=5.0), FlowParameters(discharge=10.0, bed_slope=0.001, roughness=0.013)),
    (TrapezoidalSection(width=3.0, side_slope=2.0), FlowParameters(discharge=10.0, bed_slope=0.001, roughness=0.013)),
    (TriangularSection(side_slope=1.5), FlowParameters(discharge=5.0, bed_slope=0.005, roughness=0.013)),
    (CircularSection(diameter=2.0), FlowParameters(discharge=2.0, bed_slope=0.002, roughness=0.013)),
]


@pytest.fixture(params=SHAPE_CASES, ids=lambda case: case[0].shape)
def shape_case(request):
    return request.param
