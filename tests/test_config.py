import pytest
import yaml
from channelflow.boundary import BoundaryCondition
from channelflow.config import ProfileSettings, case_from_dict, load_case, load_settings
from channelflow.cross_section import TrapezoidalSection
from channelflow.reach import Reach
from channelflow.units import SI, IMPERIAL, unit_system, convert_inputs


CASE = {
    'units': 'Imperial',
    'channel': {'shape': 'trapezoidal', 'width': 10.0, 'side_slope': 1.5},
    'flow': {'discharge': 300.0, 'roughness': 0.025},
    'boundary': {'location': 'downstream', 'condition': 'normal_depth'},
    'reaches': [
        {'length': 1000, 'upstream_elevation': 50.0, 'downstream_elevation': 49.0},
        {'length': 500, 'slope': 0.002},
    ],
    'settings': {'steps_per_reach': 40, 'critical_threshold': 0.02},
}


def write_yaml(path, data):
    with open(path, 'w') as f:
        yaml.safe_dump(data, f)
    return path


def test_load_case(tmp_path):
    case = load_case(write_yaml(tmp_path / 'case.yaml', CASE))

    assert isinstance(case.section, TrapezoidalSection)
    assert case.flow.units == IMPERIAL
    assert case.flow.k == 1.486
    assert case.flow.bed_slope == pytest.approx(0.001)
    assert [r.mode for r in case.reaches] == ['elevation', 'slope']
    assert case.boundary.condition == 'normal_depth'
    assert case.settings.steps_per_reach == 40
    assert case.settings.critical_threshold == 0.02
    assert case.settings.min_depth == ProfileSettings().min_depth


def test_units_default_to_si():
    data = {key: value for key, value in CASE.items() if key != 'units'}

    assert case_from_dict(data).flow.units == SI


def test_explicit_bed_slope_is_kept():
    data = dict(CASE, flow={'discharge': 300.0, 'roughness': 0.025, 'bed_slope': 0.004})

    assert case_from_dict(data).flow.bed_slope == 0.004


def test_unknown_key_warns(capsys):
    data = dict(CASE, settings={'steps_per_reach': 10, 'relaxation': 0.5})
    case = case_from_dict(data, source='case.yaml')

    assert case.settings.steps_per_reach == 10
    assert "Warning: Unknown configuration key 'relaxation' in case.yaml" in capsys.readouterr().out


@pytest.mark.parametrize("missing", ['channel', 'flow', 'boundary', 'reaches'])
def test_missing_section(missing):
    data = {key: value for key, value in CASE.items() if key != missing}

    with pytest.raises(ValueError, match=missing):
        case_from_dict(data)


def test_empty_reach_list():
    with pytest.raises(ValueError):
        case_from_dict(dict(CASE, reaches=[]))


def test_invalid_case_file(tmp_path):
    path = tmp_path / 'case.yaml'
    path.write_text('- just\n- a list\n')

    with pytest.raises(ValueError):
        load_case(path)


def test_load_settings(tmp_path):
    settings = load_settings(write_yaml(tmp_path / 'settings.yaml', {'min_depth': 0.001, 'datum': 0.0}))

    assert settings.min_depth == 0.001
    assert settings.datum == 0.0
    assert settings.steps_per_reach == 20


def test_load_empty_settings(tmp_path):
    path = tmp_path / 'settings.yaml'
    path.write_text('')

    assert load_settings(path) == ProfileSettings()


@pytest.mark.parametrize("name, expected", [('SI', SI), ('si', SI), (' Imperial ', IMPERIAL), (IMPERIAL, IMPERIAL)])
def test_unit_system_lookup(name, expected):
    assert unit_system(name) is expected


def test_unknown_unit_system():
    with pytest.raises(ValueError):
        unit_system('cgs')


def test_convert_inputs():
    params = {'discharge': 10.0, 'width': 5.0, 'side_slope': 2.0, 'bed_slope': 0.001, 'roughness': 0.013}

    imperial = convert_inputs(params, SI, IMPERIAL)
    assert imperial['discharge'] == pytest.approx(353.147)
    assert imperial['width'] == pytest.approx(16.4042)
    assert imperial['side_slope'] == 2.0
    assert imperial['bed_slope'] == 0.001

    back = convert_inputs(imperial, IMPERIAL, SI)
    assert back['discharge'] == pytest.approx(10.0)
    assert back['width'] == pytest.approx(5.0)
    assert convert_inputs(params, SI, SI) == params


@pytest.mark.parametrize("kwargs", [
    {'length': 0, 'slope': 0.001},
    {'length': 100},
    {'length': 100, 'mode': 'elevation', 'upstream_elevation': 10.0},
    {'length': 100, 'mode': 'bed', 'slope': 0.001},
])
def test_invalid_reach(kwargs):
    with pytest.raises(ValueError):
        Reach(**kwargs)


def test_reach_slope_from_elevations():
    reach = Reach(length=200, mode='elevation', upstream_elevation=12.0, downstream_elevation=11.0)

    assert reach.slope == pytest.approx(0.005)
    assert reach.end_elevation('upstream') == 12.0
    assert Reach(length=200, slope=0.005).end_elevation('downstream') is None


@pytest.mark.parametrize("kwargs", [
    {'location': 'midstream', 'condition': 'normal_depth'},
    {'location': 'upstream', 'condition': 'rating_curve'},
    {'location': 'downstream', 'condition': 'fixed_depth'},
    {'location': 'downstream', 'condition': 'fixed_depth', 'value': -1.0},
])
def test_invalid_boundary(kwargs):
    with pytest.raises(ValueError):
        BoundaryCondition(**kwargs)


def test_boundary_initial_depth():
    assert BoundaryCondition('downstream', 'fixed_depth', 2.5).initial_depth(1.0, 0.7) == 2.5
    assert BoundaryCondition('downstream', 'normal_depth').initial_depth(1.0, 0.7) == 1.0
    assert BoundaryCondition('upstream', 'critical_depth').initial_depth(1.0, 0.7) == 0.7
    assert BoundaryCondition('upstream', 'critical_depth').sweeps_upstream is False

    with pytest.raises(ValueError):
        BoundaryCondition('downstream', 'normal_depth').initial_depth(float('nan'), 0.7)
