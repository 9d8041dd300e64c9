# stateful running median over a bounded window.
# `low` (max-heap) holds the lower half, `high` (min-heap) the upper half; len(low) is len(high) or one more.
# heap items are (value, sequence_position); a ring buffer in window order maps each resident to
# (partition, handle), and ring_index = sequence_position - offset. NaNs live only in the ring.

import math
import numbers
from enum import Enum

import numpy as np

from .exceptions import (
  CapacityExceededError, FilterStateError, InvalidArgumentError, NotFullError, UnderflowError)
from .heap import MutableBinaryHeap
from .options import DEFAULT_NAN_POLICY, NanPolicy
from .ringbuffer import RingBuffer

class Partition(Enum):
  LOW = "low"
  HIGH = "high"
  EXCLUDED = "excluded" # NaN, lives in no heap

class MedianFilter:
  # running median over at most `capacity` samples. mutators return self for chaining.

  def __init__(self, capacity, first_value=None):
    if isinstance(capacity, bool) or not isinstance(capacity, numbers.Integral) or capacity < 1:
      raise InvalidArgumentError(f"capacity must be an integer of at least 1, got {capacity!r}")
    self._low = MutableBinaryHeap(reverse=True)
    self._high = MutableBinaryHeap()
    self._positions = RingBuffer(int(capacity))
    self._offset = 0
    self._nan_count = 0
    if first_value is not None:
      self._append(first_value)

  def __len__(self):
    return len(self._positions)

  def __repr__(self):
    return f"MedianFilter(length={len(self)}, capacity={self.capacity}, nan_count={self._nan_count})"

  @property
  def capacity(self):
    return self._positions.capacity

  window_length = capacity

  @property
  def nan_count(self):
    return self._nan_count

  def is_full(self):
    return self._positions.is_full()

  def values(self):
    """Residents in window order, oldest first (NaN for excluded samples)."""
    out = []
    for partition, handle in self._positions:
      if partition is Partition.LOW:
        out.append(self._low[handle][0])
      elif partition is Partition.HIGH:
        out.append(self._high[handle][0])
      else:
        out.append(math.nan)
    return out

  def median(self, nan=DEFAULT_NAN_POLICY):
    # NaN when empty, when only NaNs remain, or when nan="include" and any NaN is resident
    nan = NanPolicy.coerce(nan)
    if self._nan_count and nan is NanPolicy.INCLUDE:
      return math.nan
    if not self._low:
      return math.nan
    low_top = self._low.top()[0]
    if len(self._low) == len(self._high):
      return float((low_top + self._high.top()[0]) / 2)
    return float(low_top)

  def grow(self, value):
    if self._positions.is_full():
      raise CapacityExceededError(
        f"grow would exceed the capacity of {self.capacity}; roll instead")
    self._append(value)
    return self

  def shrink(self):
    # a single resident cannot go, the filter would have no median
    if len(self._positions) <= 1:
      raise UnderflowError("a filter of length 1 cannot be shrunk any further")
    self._remove_oldest()
    return self

  def roll(self, value):
    """Replace the oldest resident with `value`. Only valid once the filter is full."""
    positions = self._positions
    if not positions.is_full():
      raise NotFullError(
        f"roll requires a full filter ({len(positions)} of {self.capacity}); grow first")
    partition, handle = positions[0]
    if partition is Partition.EXCLUDED or math.isnan(value):
      # nan bookkeeping does not fit the in-place swap below
      self._remove_oldest()
      self._append(value)
      return self

    low, high = self._low, self._high
    new_item = (value, positions.capacity + self._offset)
    if positions.capacity == 1:
      low.update(handle, new_item)
    elif partition is Partition.HIGH and value < low.top()[0]:
      # value belongs in low but the hole is in high: low's top moves over into the hole
      low_top, low_handle = low.top_with_handle()
      high.update(handle, low_top)
      positions[low_top[1] - self._offset] = (Partition.HIGH, handle)
      low.update(low_handle, new_item)
      partition, handle = Partition.LOW, low_handle
    elif partition is Partition.LOW and high and value > high.top()[0]:
      high_top, high_handle = high.top_with_handle()
      low.update(handle, high_top)
      positions[high_top[1] - self._offset] = (Partition.LOW, handle)
      high.update(high_handle, new_item)
      partition, handle = Partition.HIGH, high_handle
    else:
      # the hole is already on the correct side of the median
      (low if partition is Partition.LOW else high).update(handle, new_item)
    positions.push_overwrite((partition, handle))
    self._offset += 1
    return self

  def reset(self, first_value=None):
    self._low.clear()
    self._high.clear()
    self._positions.clear()
    self._offset = 0
    self._nan_count = 0
    if first_value is not None:
      self._append(first_value)
    return self

  def feed(self, x, nan=DEFAULT_NAN_POLICY):
    # grow until full, roll afterwards. scalar in, median out; array in, one median per element out
    nan = NanPolicy.coerce(nan)
    if np.ndim(x) == 0:
      return self._feed_one(x, nan)
    values = np.asarray(x, dtype=np.float64).ravel()
    out = np.empty(values.shape[0], dtype=np.float64)
    for i, value in enumerate(values):
      out[i] = self._feed_one(value, nan)
    return out

  def _feed_one(self, value, nan):
    if self._positions.is_full():
      self.roll(value)
    else:
      self._append(value)
    return self.median(nan)

  def _append(self, value):
    positions = self._positions
    if math.isnan(value):
      self._nan_count += 1
      positions.append((Partition.EXCLUDED, None))
      return
    low, high = self._low, self._high
    new_item = (value, len(positions) + self._offset)
    if not low:
      positions.append((Partition.LOW, low.push(new_item)))
    elif len(low) == len(high):
      # low has to grow
      high_top, high_handle = high.top_with_handle()
      if value <= high_top[0]:
        positions.append((Partition.LOW, low.push(new_item)))
      else:
        # value displaces high's top, which moves down into low
        high.update(high_handle, new_item)
        positions.append((Partition.HIGH, high_handle))
        positions[high_top[1] - self._offset] = (Partition.LOW, low.push(high_top))
    else:
      # high has to grow
      low_top, low_handle = low.top_with_handle()
      if value >= low_top[0]:
        positions.append((Partition.HIGH, high.push(new_item)))
      else:
        low.update(low_handle, new_item)
        positions.append((Partition.LOW, low_handle))
        positions[low_top[1] - self._offset] = (Partition.HIGH, high.push(low_top))

  def _remove_oldest(self):
    partition, handle = self._positions.popleft()
    self._offset += 1
    if partition is Partition.EXCLUDED:
      self._nan_count -= 1
      return
    low, high = self._low, self._high
    if len(low) == len(high):
      # high has to shrink
      if partition is Partition.LOW:
        high_top = high.pop()
        low.update(handle, high_top)
        self._positions[high_top[1] - self._offset] = (Partition.LOW, handle)
      else:
        high.delete(handle)
    else:
      # low has to shrink
      if partition is Partition.HIGH:
        low_top = low.pop()
        high.update(handle, low_top)
        self._positions[low_top[1] - self._offset] = (Partition.HIGH, handle)
      else:
        low.delete(handle)

  def check_invariants(self):
    """Verify heap balance, ordering and every back-pointer of the position index."""
    low, high = self._low, self._high
    if len(low) != len(high) and len(low) != len(high) + 1:
      raise FilterStateError(f"unbalanced heaps: low has {len(low)}, high has {len(high)}")
    if low and high and low.top()[0] > high.top()[0]:
      raise FilterStateError(f"top of low {low.top()[0]} exceeds top of high {high.top()[0]}")
    nans = 0
    for index, (partition, handle) in enumerate(self._positions):
      if partition is Partition.EXCLUDED:
        if handle is not None:
          raise FilterStateError(f"excluded entry {index} carries handle {handle}")
        nans += 1
        continue
      heap = low if partition is Partition.LOW else high
      try:
        position = heap[handle][1]
      except KeyError:
        raise FilterStateError(f"entry {index} points at a dead {partition.value} handle {handle}") from None
      if position - self._offset != index:
        raise FilterStateError(
          f"entry {index} resolves to sequence position {position} (offset {self._offset})")
    if nans != self._nan_count:
      raise FilterStateError(f"nan_count is {self._nan_count} but {nans} entries are excluded")
    if len(low) + len(high) + nans != len(self._positions):
      raise FilterStateError("heap sizes do not add up to the window length")
