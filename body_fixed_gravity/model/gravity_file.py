"""
Gravity File Loaders
====================

Reads spherical-harmonic gravity field files into a HarmonicCoefficientTable.

Supported formats:
- COF : fixed-column records (POTFIELD header, RECOEF coefficients), e.g. JGM2.cof
- GRV : STK keyword/token files (DEGREE, ORDER, GM, REFDISTANCE, NORMALIZED), e.g. EGM96.grv
- DAT : GM and radius header, coefficient drift-rate block, then coefficient rows

Units:
  Files store GM in m³/s² and the reference radius in m. The loaders convert to
  km³/s² and km before storing; callers must not re-apply the conversion.

Every loader reads its file at construction. A file that cannot be opened, or a
required numeric field that fails to parse, raises GravityFileError and no
model object is produced.
"""
import re
import numpy as np

from enum    import Enum
from pathlib import Path
from typing  import Callable, List, Optional, Tuple, Union

from body_fixed_gravity.model.constants         import CONVERTER
from body_fixed_gravity.model.coefficient_table import GravityFileError, HarmonicCoefficientTable, OutOfBoundsPolicy
from body_fixed_gravity.model.normalization     import normalization_factor


NormalizationProvider = Callable[[int, int], float]

_INTEGER_PREFIX = re.compile(r'^[+-]?\d+')


def _to_integer(
  text : str,
) -> Optional[int]:
  try:
    return int(text.strip())
  except ValueError:
    return None


def _to_real(
  text : str,
) -> Optional[float]:
  # Handle 'D' or 'E' exponents (e.g. 1.0D-06)
  # nan and inf count as unreadable
  text = text.strip().replace('D', 'E').replace('d', 'e')
  try:
    value = float(text)
  except ValueError:
    return None
  return value if np.isfinite(value) else None


def _integer_prefix(
  token : str,
) -> Optional[int]:
  match = _INTEGER_PREFIX.match(token)
  return int(match.group()) if match else None


class GravityFileType(Enum):
  COF     = 1
  DAT     = 2
  GRV     = 3
  UNKNOWN = -1


class HarmonicGravity:
  """
  Gravity field of a central body read from a coefficient file.

  Attributes:
  -----------
    filename : Path
      Source file.
    NN, MM : int
      Maximum degree and order declared by the file.
    factor : float
      Negated gravitational parameter, -GM [km³/s²].
    body_radius : float
      Reference radius [km].
    coefficients : HarmonicCoefficientTable
      Normalized C and S coefficients.
  """

  FILE_TYPE = GravityFileType.UNKNOWN

  def __init__(
    self,
    filename          : Union[str, Path],
    radius            : float,
    gp                : float,
    normalization     : Optional[NormalizationProvider] = None,
    out_of_bounds     : OutOfBoundsPolicy               = OutOfBoundsPolicy.IGNORE,
    read_coefficients : bool                            = True,
  ):
    """
    Read the gravity file.

    Input:
    ------
      filename : str | Path
        Path to the gravity file.
      radius : float
        Fallback reference radius [km], used when the file does not give one.
      gp : float
        Fallback gravitational parameter [km³/s²], used when the file does not give one.
      normalization : callable(n, m) -> float, optional
        Unnormalized -> normalized factor provider. Defaults to normalization_factor.
      out_of_bounds : OutOfBoundsPolicy
        What to do with coefficients outside the declared degree/order.
      read_coefficients : bool
        If False, only the header (degree, order, GM, radius) is read.
    """
    self.filename          = Path(filename)
    self.body_radius       = radius
    self.factor            = -gp
    self.normalization     = normalization if normalization is not None else normalization_factor
    self.read_coefficients = read_coefficients
    self.NN : Optional[int] = None
    self.MM : Optional[int] = None
    self.coefficients      = HarmonicCoefficientTable(out_of_bounds)

    self.load()

  @property
  def gp(self) -> float:
    return -self.factor

  @property
  def C(self) -> Optional[np.ndarray]:
    return self.coefficients.C

  @property
  def S(self) -> Optional[np.ndarray]:
    return self.coefficients.S

  def load(self) -> None:
    raise NotImplementedError

  def _open(self):
    try:
      return open(self.filename, 'r')
    except OSError as e:
      raise GravityFileError(f'Cannot open {self.FILE_TYPE.name} gravity file "{self.filename}"') from e

  def _line_error(
    self,
    line : str,
  ) -> GravityFileError:
    return GravityFileError(f'File "{self.filename}" has error in \n   "{line}"')

  def _allocate(self) -> None:
    if self.NN is None or self.MM is None:
      raise GravityFileError(
        f'File "{self.filename}" has coefficients before its degree and order are declared'
      )
    self.coefficients.declare_bounds(self.NN, self.MM)


class HarmonicGravityCof(HarmonicGravity):
  """
  Loader for COF fixed-column gravity files.

  Record layout (0-based columns):
    0-7   : record tag ('POTFIELD', 'RECOEF', 'END', '99999')
    8-10  : degree
    11-13 : order
    14-   : POTFIELD only -> body flag, GM [m³/s²], radius [m], normalized flag
    17-37 : RECOEF only  -> C coefficient
    38-58 : RECOEF only  -> S coefficient (blank for order 0)

  Lines starting with 'C' are comments.
  """

  FILE_TYPE = GravityFileType.COF

  def load(self) -> None:
    self.central_body_flag = -1
    self.normalized_flag   = -1.0

    with self._open() as f:
      for raw_line in f:
        line = raw_line.rstrip('\r\n')

        # Ignore comment lines
        if line.startswith('C'):
          continue

        tag = line[0:8].strip()
        if tag == 'END' or tag == '99999':
          break

        if tag == 'POTFIELD':
          self._read_potfield(line)
          if not self.read_coefficients:
            break
          self._allocate()
        elif tag == 'RECOEF' and self.read_coefficients:
          self._read_recoef(line)

  def _read_potfield(
    self,
    line : str,
  ) -> None:
    degree = _to_integer(line[8:11])
    order  = _to_integer(line[11:14])
    if degree is None or order is None:
      raise self._line_error(line)
    self.NN = degree
    self.MM = order

    # Remaining fields are read in sequence; the first unreadable one and
    # everything after it count as zero
    values = [0.0, 0.0, 0.0, 0.0]
    for idx, token in enumerate(line[14:].split()[:4]):
      value = _to_real(token)
      if value is None:
        break
      values[idx] = value
    cb_flag, tmp_mu, tmp_a, normalized_flag = values

    self.central_body_flag = int(cb_flag)
    self.normalized_flag   = normalized_flag
    if tmp_mu != 0.0:
      self.factor = -tmp_mu / CONVERTER.M3_PER_KM3  # -> km³/s²
    if tmp_a != 0.0:
      self.body_radius = tmp_a / CONVERTER.M_PER_KM  # -> km

  def _read_recoef(
    self,
    line : str,
  ) -> None:
    n_degree = _to_integer(line[8:11])
    m_order  = _to_integer(line[11:14])
    Cnm      = _to_real(line[17:38])

    snm_tokens = line[38:59].split()
    snm_str    = snm_tokens[0] if snm_tokens else ''
    Snm        = 0.0 if snm_str == '' else _to_real(snm_str)

    if n_degree is None or m_order is None or Cnm is None or Snm is None:
      raise self._line_error(line)

    if not self.coefficients.is_allocated:
      raise GravityFileError(
        f'File "{self.filename}" has a RECOEF record before its POTFIELD record in \n   "{line}"'
      )
    self.coefficients.set_coefficient(n_degree, m_order, Cnm, Snm)


class HarmonicGravityGrv(HarmonicGravity):
  """
  Loader for STK GRV gravity files.

  The first line (version stamp) is skipped. Keywords are matched
  case-insensitively; any other line whose first token starts with an integer
  is a coefficient line 'n m C S'. Coefficient lines must come after DEGREE
  and ORDER. The NORMALIZED value is matched exactly: only 'NORMALIZED No'
  multiplies the coefficients by V[n][m], any other spelling keeps them as-is.
  """

  FILE_TYPE = GravityFileType.GRV

  def load(self) -> None:
    self.is_normalized = ''

    with self._open() as f:
      # Read header line
      f.readline()

      for raw_line in f:
        line = raw_line.rstrip('\r\n')

        if not line.strip() or line.startswith('#'):
          continue

        tokens  = line.split()
        keyword = tokens[0].upper()

        if keyword == 'END':
          break

        if keyword in ('MODEL', 'BEGIN'):
          continue
        elif keyword == 'DEGREE':
          self.NN = self._keyword_integer(tokens, line)
        elif keyword == 'ORDER':
          self.MM = self._keyword_integer(tokens, line)
        elif keyword == 'GM':
          tmp_mu = self._keyword_real(tokens, line)
          if tmp_mu != 0.0:
            self.factor = -tmp_mu / CONVERTER.M3_PER_KM3  # -> km³/s²
        elif keyword == 'REFDISTANCE':
          tmp_a = self._keyword_real(tokens, line)
          if tmp_a != 0.0:
            self.body_radius = tmp_a / CONVERTER.M_PER_KM  # -> km
        elif keyword == 'NORMALIZED':
          self.is_normalized = tokens[1] if len(tokens) > 1 else ''
        else:
          n_degree = _integer_prefix(tokens[0])
          if n_degree is None:
            continue
          if not self.read_coefficients:
            break
          self._allocate()
          self._read_coefficient(n_degree, tokens, line)

  def _keyword_integer(
    self,
    tokens : List[str],
    line   : str,
  ) -> int:
    value = _to_integer(tokens[1]) if len(tokens) > 1 else None
    if value is None:
      raise self._line_error(line)
    return value

  def _keyword_real(
    self,
    tokens : List[str],
    line   : str,
  ) -> float:
    value = _to_real(tokens[1]) if len(tokens) > 1 else None
    if value is None:
      raise self._line_error(line)
    return value

  def _read_coefficient(
    self,
    n_degree : int,
    tokens   : List[str],
    line     : str,
  ) -> None:
    # Ensure that m and n fall in the allowed ranges
    if not (0 < n_degree <= self.NN):
      return

    m_order = _to_integer(tokens[1]) if len(tokens) > 1 else None
    if m_order is None:
      raise self._line_error(line)
    if not (0 <= m_order <= n_degree):
      return

    Cnm = _to_real(tokens[2]) if len(tokens) > 2 else None
    Snm = _to_real(tokens[3]) if len(tokens) > 3 else 0.0
    if Cnm is None or Snm is None:
      raise self._line_error(line)

    if self.is_normalized == 'No':
      factor = self.normalization(n_degree, m_order)
      Cnm   *= factor
      Snm   *= factor

    self.coefficients.set_coefficient(n_degree, m_order, Cnm, Snm)


class HarmonicGravityDat(HarmonicGravity):
  """
  Loader for DAT gravity files.

  Layout:
    # comment lines
    GM [m³/s²]
    radius [m]
    <drift block header line>
    n m dC/dt dS/dt      (drift rates, until the next '#' line)
    # coefficient block header
    n m C S              (until end of file)

  The degree and order are the largest n and m found in the coefficient block.
  Drift rates are kept up to degree MAX_DRIFT_DEGREE in dC and dS.
  """

  FILE_TYPE        = GravityFileType.DAT
  MAX_DRIFT_DEGREE = 2

  def load(self) -> None:
    self.dC = np.zeros((self.MAX_DRIFT_DEGREE + 1, self.MAX_DRIFT_DEGREE + 1))
    self.dS = np.zeros((self.MAX_DRIFT_DEGREE + 1, self.MAX_DRIFT_DEGREE + 1))

    with self._open() as f:
      lines = [raw_line.rstrip('\r\n') for raw_line in f]

    idx = 0
    while idx < len(lines) and lines[idx].startswith('#'):
      idx += 1

    # GM and radius, one value per line
    header_values = []
    while idx < len(lines) and len(header_values) < 2:
      if lines[idx].strip():
        value = _to_real(lines[idx].split()[0])
        if value is None:
          raise self._line_error(lines[idx])
        header_values.append(value)
      idx += 1
    if len(header_values) < 2:
      raise GravityFileError(f'File "{self.filename}" is missing its GM and radius records')

    tmp_mu, tmp_a    = header_values
    self.factor      = -tmp_mu / CONVERTER.M3_PER_KM3  # -> km³/s²
    self.body_radius = tmp_a / CONVERTER.M_PER_KM      # -> km

    # Drift block header
    while idx < len(lines) and not lines[idx].strip():
      idx += 1
    idx += 1

    # Coefficient drift rates
    while idx < len(lines) and not lines[idx].startswith('#'):
      if lines[idx].strip():
        n_degree, m_order, dCnm, dSnm = self._read_row(lines[idx])
        if 0 <= n_degree <= self.MAX_DRIFT_DEGREE and 0 <= m_order <= n_degree:
          self.dC[n_degree, m_order] = dCnm
          self.dS[n_degree, m_order] = dSnm
      idx += 1

    # Coefficients
    rows = []
    for line in lines[idx + 1:]:
      if not line.strip() or line.startswith('#'):
        continue
      rows.append(self._read_row(line))

    self.NN = max([row[0] for row in rows], default=0)
    self.MM = max([row[1] for row in rows], default=0)
    if not self.read_coefficients:
      return

    self._allocate()
    for n_degree, m_order, Cnm, Snm in rows:
      self.coefficients.set_coefficient(n_degree, m_order, Cnm, Snm)

  def _read_row(
    self,
    line : str,
  ) -> Tuple[int, int, float, float]:
    tokens = line.split()
    if len(tokens) < 4:
      raise self._line_error(line)

    n_degree = _to_integer(tokens[0])
    m_order  = _to_integer(tokens[1])
    value_c  = _to_real(tokens[2])
    value_s  = _to_real(tokens[3])
    if n_degree is None or m_order is None or value_c is None or value_s is None:
      raise self._line_error(line)
    return n_degree, m_order, value_c, value_s


LOADERS = {
  GravityFileType.COF : HarmonicGravityCof,
  GravityFileType.DAT : HarmonicGravityDat,
  GravityFileType.GRV : HarmonicGravityGrv,
}


def get_file_type(
  filename : Union[str, Path],
) -> GravityFileType:
  """
  Recognize the gravity file type from its first non-comment line.

  Assumption:
    COF contains 'POTFIELD'
    GRV contains 'stk.v.'
    DAT starts with a valid real number

  Input:
  ------
    filename : str | Path
      Path to the gravity file.

  Output:
  -------
    file_type : GravityFileType
      COF, DAT or GRV.

  Raises:
  -------
    GravityFileError
      If the file cannot be opened or its format is not recognized.
  """
  try:
    f = open(filename, 'r')
  except OSError as e:
    raise GravityFileError(f'Cannot open gravity file "{filename}"') from e

  file_type = GravityFileType.UNKNOWN
  with f:
    for raw_line in f:
      # Make upper case, so we can check for certain keyword
      line = raw_line.rstrip('\r\n').upper()
      if not line.strip() or line.startswith('C') or line.startswith('#'):
        continue

      if 'POTFIELD' in line:
        file_type = GravityFileType.COF
      elif 'STK.V.' in line:
        file_type = GravityFileType.GRV
      elif _to_real(line) is not None:
        file_type = GravityFileType.DAT
      break

  if file_type is GravityFileType.UNKNOWN:
    raise GravityFileError(f'Gravity file "{filename}" is of unknown format')

  return file_type


def load_gravity_file(
  filename : Union[str, Path],
  radius   : float,
  gp       : float,
  **kwargs,
) -> HarmonicGravity:
  """
  Load a gravity file with the loader matching its detected type.

  Input:
  ------
    filename : str | Path
      Path to the gravity file.
    radius : float
      Fallback reference radius [km].
    gp : float
      Fallback gravitational parameter [km³/s²].
    **kwargs
      Passed to the loader (normalization, out_of_bounds, read_coefficients).

  Output:
  -------
    model : HarmonicGravity
      Loaded gravity model.
  """
  loader = LOADERS[get_file_type(filename)]
  return loader(filename, radius, gp, **kwargs)


def get_file_info(
  filename : Union[str, Path],
) -> Tuple[Optional[int], Optional[int], float, float]:
  """
  Read degree, order, gravitational parameter and reference radius from a
  gravity file header without reading the coefficients.

  Output:
  -------
    info : tuple
      (degree, order, gp [km³/s²], radius [km]). GM and radius are 0.0 when the
      file does not give them.
  """
  model = load_gravity_file(filename, 0.0, 0.0, read_coefficients=False)
  return model.NN, model.MM, model.gp, model.body_radius
