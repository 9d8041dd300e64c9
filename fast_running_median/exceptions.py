# usage errors derive from ValueError, so misuse can also be caught as a plain ValueError

__all__ = [
  "RunningMedianError", "InvalidArgumentError", "CapacityExceededError", "NotFullError",
  "UnderflowError", "InexactConversionError", "FilterStateError"]

class RunningMedianError(ValueError):
  pass

class InvalidArgumentError(RunningMedianError):
  pass

class CapacityExceededError(RunningMedianError):
  pass

class NotFullError(RunningMedianError):
  pass

class UnderflowError(RunningMedianError):
  pass

class InexactConversionError(RunningMedianError):
  """A median could not be represented exactly in the requested output type."""

class FilterStateError(RuntimeError):
  """Raised by `MedianFilter.check_invariants` when the heaps and the position index disagree."""
