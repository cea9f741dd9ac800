import numpy as np

from types import SimpleNamespace

from body_fixed_gravity.model.gravity_file import HarmonicGravity


def _format_position(
  pos     : np.ndarray,
  angular : bool,
) -> str:
  if angular:
    return f"lat {pos[0]:>19.12f} deg  lon {pos[1]:>19.12f} deg  height {pos[2]:>19.12e} km"
  return f"{pos[0]:>19.12e}  {pos[1]:>19.12e}  {pos[2]:>19.12e} km"


def print_conversion_result(
  result : dict,
) -> None:
  """
  Print the input and converted positions in display units.

  Input:
  ------
    result : dict
      Conversion result from run_conversion (positions already in degrees).
  """
  print("\nConversion Result")
  print(f"  Input  ({result['from']})")
  print(f"    {_format_position(result['input_display'], result['from_angular'])}")
  print(f"  Output ({result['to']})")
  print(f"    {_format_position(result['output_display'], result['to_angular'])}")


def print_gravity_summary(
  gravity_file : HarmonicGravity,
) -> None:
  """
  Print the header values and low-degree coefficients of a loaded gravity file.

  Input:
  ------
    gravity_file : HarmonicGravity
      Loaded gravity model.
  """
  table = gravity_file.coefficients

  print("\nGravity File Summary")
  print(f"  File         : {gravity_file.filename}")
  print(f"  Format       : {gravity_file.FILE_TYPE.name}")
  print(f"  Degree/Order : {gravity_file.NN} {gravity_file.MM}")
  print(f"  GP           : {gravity_file.gp:.10f} km³/s²")
  print(f"  Radius       : {gravity_file.body_radius:.10f} km")
  print(f"  Stored       : {table.num_stored} coefficients")
  if table.num_dropped > 0:
    print(f"  [WARNING] {table.num_dropped} coefficients outside degree/order {table.max_degree}/{table.max_order} were ignored")

  if table.is_allocated:
    print(f"  Coefficients (normalized)")
    for n_degree in range(2, min(table.max_degree, 4) + 1):
      for m_order in range(min(n_degree, table.max_order) + 1):
        print(f"    C[{n_degree},{m_order}] : {table.C[n_degree, m_order]:>19.12e}    S[{n_degree},{m_order}] : {table.S[n_degree, m_order]:>19.12e}")


def print_acceleration(
  gravity : SimpleNamespace,
  acc_vec : np.ndarray,
) -> None:
  print("\nGravity Acceleration")
  print(f"  Position     : {gravity.acceleration_at[0]:>19.12e}  {gravity.acceleration_at[1]:>19.12e}  {gravity.acceleration_at[2]:>19.12e} km")
  print(f"  Acceleration : {acc_vec[0]:>19.12e}  {acc_vec[1]:>19.12e}  {acc_vec[2]:>19.12e} km/s²")
  print(f"  Magnitude    : {np.linalg.norm(acc_vec):>19.12e} km/s²")
