# drives a MedianFilter across a whole input: optional silent pre-grow, first output, grow, roll
# (one output per remaining input), and a shrink phase for tapered ends. phases stop on the filter
# state or the input/output cursors, so input and output line up without trimming afterwards.

import logging
import math
import numbers

import numpy as np

from .exceptions import InexactConversionError, InvalidArgumentError
from .filter import MedianFilter
from .options import DEFAULT_NAN_POLICY, DEFAULT_TAPERING, NanPolicy, Tapering

logger = logging.getLogger(__name__)

def output_length(input_length, window_length, tapering=DEFAULT_TAPERING):
  """Number of medians produced for `input_length` samples under `tapering`."""
  tapering = Tapering.coerce(tapering)
  if tapering in (Tapering.SYMMETRIC, Tapering.ASYMMETRIC_TRUNCATED):
    return input_length if window_length % 2 else input_length - 1
  if tapering is Tapering.ASYMMETRIC:
    return input_length + window_length - 1
  if tapering is Tapering.NONE:
    return input_length - window_length + 1
  return input_length # beginning only

def effective_window_length(input_length, window_length, tapering=DEFAULT_TAPERING):
  """Clamp `window_length` to what `input_length` samples can fill under `tapering`."""
  tapering = Tapering.coerce(tapering)
  window_length = min(window_length, input_length)
  if tapering is Tapering.SYMMETRIC and input_length % 2 == 0:
    # an even input only has an odd-length centered window that covers (almost) all of it
    window_length = min(window_length, input_length - 1)
  return window_length

def running_median(input, window_length, tapering=DEFAULT_TAPERING, nan=DEFAULT_NAN_POLICY,
                   dtype=np.float64):
  # median filter of `window_length` over `input`. taperings: symmetric (sym), asymmetric (asym),
  # asymmetric_truncated (asym_trunc), none (no), beginning_only (beg). 2-D input runs per column;
  # integer dtypes must hold every median exactly.
  tapering = Tapering.coerce(tapering)
  nan = NanPolicy.coerce(nan)
  if isinstance(window_length, bool) or not isinstance(window_length, numbers.Integral) \
      or window_length < 1:
    raise InvalidArgumentError(f"window_length must be an integer of at least 1, got {window_length!r}")
  x = np.asarray(input)
  if x.dtype.kind not in "biuf":
    raise InvalidArgumentError(f"input must be real-valued, got dtype {x.dtype}")
  if x.ndim not in (1, 2):
    raise InvalidArgumentError(f"input must be a vector or a matrix, got {x.ndim} dimensions")
  n = x.shape[0]
  if n == 0:
    raise InvalidArgumentError("input must be non-empty")

  w = effective_window_length(n, int(window_length), tapering)
  if w != window_length:
    logger.debug("window_length %d clamped to %d for %d samples (%s)",
                 window_length, w, n, tapering.value)
  output = np.empty((output_length(n, w, tapering),) + x.shape[1:], dtype=dtype)
  mf = MedianFilter(w)
  if x.ndim == 1:
    running_median_into(mf, output, x, tapering, nan)
  else:
    logger.debug("filtering %d columns of length %d with one filter", x.shape[1], n)
    for j in range(x.shape[1]):
      running_median_into(mf, output[:, j], x[:, j], tapering, nan)
  return output

def running_median_into(filter, output, input, tapering=DEFAULT_TAPERING, nan=DEFAULT_NAN_POLICY):
  # single signal into a caller-owned filter (reset here, capacity is the window) and output buffer
  tapering = Tapering.coerce(tapering)
  nan = NanPolicy.coerce(nan)
  x = np.asarray(input)
  if x.ndim != 1:
    raise InvalidArgumentError(f"input must be one-dimensional, got {x.ndim} dimensions")
  if x.dtype.kind not in "biuf":
    raise InvalidArgumentError(f"input must be real-valued, got dtype {x.dtype}")
  n = len(x)
  if n == 0:
    raise InvalidArgumentError("input must be non-empty")
  if filter.capacity > n:
    raise InvalidArgumentError(
      f"filter capacity {filter.capacity} exceeds the input length {n}")
  expected = output_length(n, filter.capacity, tapering)
  if len(output) != expected:
    raise InvalidArgumentError(
      f"output has {len(output)} elements but {tapering.value} tapering produces {expected}")
  convert = None
  if isinstance(output, np.ndarray):
    if output.ndim != 1:
      raise InvalidArgumentError(f"output must be one-dimensional, got {output.ndim} dimensions")
    convert = _exact_converter(output.dtype)
  _PHASES[tapering](_Run(filter, output, x.tolist(), nan, convert))
  return output

def _exact_converter(dtype):
  if dtype.kind not in "biu":
    return None # floating point output takes anything
  if dtype.kind == "b":
    lo, hi = 0, 1
  else:
    info = np.iinfo(dtype)
    lo, hi = int(info.min), int(info.max)
  def convert(value):
    if not (math.isfinite(value) and value.is_integer() and lo <= value <= hi):
      raise InexactConversionError(f"median {value!r} cannot be stored exactly as {dtype}")
    return int(value)
  return convert

class _Run:
  # cursors over one input signal and its output buffer
  def __init__(self, filter, output, input, nan, convert):
    self.filter = filter
    self.output = output
    self.nan = nan
    self.convert = convert
    self._input = iter(input)
    self._remaining = len(input)
    self._written = 0
    filter.reset(self.take())

  def take(self):
    self._remaining -= 1
    return next(self._input)

  def emit(self):
    value = self.filter.median(self.nan)
    if self.convert is not None:
      value = self.convert(value)
    self.output[self._written] = value
    self._written += 1

  def input_done(self):
    return self._remaining == 0

  def output_done(self):
    return self._written == len(self.output)

def _grow_phase(run, step=1):
  mf = run.filter
  while not mf.is_full():
    for _ in range(step):
      mf.grow(run.take())
    run.emit()

def _roll_phase(run):
  mf = run.filter
  while not run.input_done():
    mf.roll(run.take())
    run.emit()

def _shrink_phase(run, step=1):
  mf = run.filter
  while not run.output_done():
    for _ in range(step):
      mf.shrink()
    run.emit()

def _symmetric_phases(run):
  if run.filter.capacity % 2 == 0:
    # even windows start out with two elements, centered between them
    run.filter.grow(run.take())
  run.emit()
  _grow_phase(run, step=2)
  _roll_phase(run)
  _shrink_phase(run, step=2)

def _asymmetric_phases(run):
  run.emit()
  _grow_phase(run)
  _roll_phase(run)
  _shrink_phase(run)

def _asymmetric_truncated_phases(run):
  mf = run.filter
  while len(mf) <= mf.capacity / 2:
    mf.grow(run.take())
  run.emit()
  _grow_phase(run)
  _roll_phase(run)
  _shrink_phase(run)

def _untapered_phases(run):
  mf = run.filter
  while not mf.is_full():
    mf.grow(run.take())
  run.emit()
  _roll_phase(run)

def _beginning_only_phases(run):
  run.emit()
  _grow_phase(run)
  _roll_phase(run)

_PHASES = {
  Tapering.SYMMETRIC: _symmetric_phases,
  Tapering.ASYMMETRIC: _asymmetric_phases,
  Tapering.ASYMMETRIC_TRUNCATED: _asymmetric_truncated_phases,
  Tapering.NONE: _untapered_phases,
  Tapering.BEGINNING_ONLY: _beginning_only_phases,
}
