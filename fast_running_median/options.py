# keyword-style options, closed enums checked at the API boundary

from enum import Enum

from .exceptions import InvalidArgumentError

_TAPERING_ALIASES = {
  "sym": "symmetric",
  "asym": "asymmetric",
  "asym_trunc": "asymmetric_truncated",
  "no": "none",
  "beg": "beginning_only",
}

def _lookup(cls, value, aliases):
  if not isinstance(value, str):
    return None
  key = value.strip().lower()
  key = aliases.get(key, key)
  for member in cls:
    if member.value == key:
      return member
  return None

class Tapering(Enum):
  """How the window grows and shrinks at the two ends of the input."""
  SYMMETRIC = "symmetric"
  ASYMMETRIC = "asymmetric"
  ASYMMETRIC_TRUNCATED = "asymmetric_truncated"
  NONE = "none"
  BEGINNING_ONLY = "beginning_only"

  @classmethod
  def _missing_(cls, value):
    return _lookup(cls, value, _TAPERING_ALIASES)

  @classmethod
  def coerce(cls, value):
    return _coerce(cls, value, "tapering", _TAPERING_ALIASES)

class NanPolicy(Enum):
  """Whether a NaN inside the window poisons the median (include) or is skipped (ignore)."""
  INCLUDE = "include"
  IGNORE = "ignore"

  @classmethod
  def _missing_(cls, value):
    return _lookup(cls, value, {})

  @classmethod
  def coerce(cls, value):
    return _coerce(cls, value, "nan policy", {})

def _coerce(cls, value, what, aliases):
  if isinstance(value, cls):
    return value
  try:
    return cls(value)
  except ValueError:
    accepted = [member.value for member in cls] + list(aliases)
    raise InvalidArgumentError(f"invalid {what} {value!r}; must be one of {accepted}") from None

DEFAULT_TAPERING = Tapering.SYMMETRIC
DEFAULT_NAN_POLICY = NanPolicy.INCLUDE
