from pathlib import Path
from channelflow.calculator import calculate_flow, calculate_section_properties
from channelflow.config import load_case
from channelflow.profile import ProfileEngine

case_folder = Path(__file__).parent
case = load_case(case_folder / 'case.yaml')

result = calculate_flow(case.section, case.flow)
if result.error is not None:
    raise SystemExit(result.error)

print(f'Normal depth   = {result.normal_depth:.4f}')
print(f'Critical depth = {result.critical_depth:.4f}')
print(f'Froude number  = {result.froude_number:.3f} ({result.flow_regime})')

props = calculate_section_properties(case.section, result.normal_depth, case.flow)
print(f'Specific energy at normal depth = {props.specific_energy:.4f}')

engine = ProfileEngine(section=case.section,
                       flow=case.flow,
                       reaches=case.reaches,
                       boundary=case.boundary,
                       settings=case.settings)

engine.run(verbose=1)
engine.save_results(folder_path=str(case_folder / 'results'))
print('Finished profile.')
