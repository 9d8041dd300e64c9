# fixed-capacity circular buffer, indexed oldest-first. backs the position index of MedianFilter.

class RingBuffer:
  def __init__(self, capacity):
    if capacity < 1:
      raise ValueError("ring buffer capacity must be at least 1")
    self._data = [None] * capacity
    self._head = 0 # physical slot of the oldest entry
    self._length = 0

  @property
  def capacity(self):
    return len(self._data)

  def __len__(self):
    return self._length

  def is_full(self):
    return self._length == len(self._data)

  def _slot(self, index):
    if not 0 <= index < self._length:
      raise IndexError(f"ring buffer index {index} out of range for length {self._length}")
    return (self._head + index) % len(self._data)

  def __getitem__(self, index):
    return self._data[self._slot(index)]

  def __setitem__(self, index, entry):
    self._data[self._slot(index)] = entry

  def __iter__(self):
    for i in range(self._length):
      yield self._data[(self._head + i) % len(self._data)]

  def append(self, entry):
    if self.is_full():
      raise IndexError("append to a full ring buffer")
    self._data[(self._head + self._length) % len(self._data)] = entry
    self._length += 1

  def popleft(self):
    if self._length == 0:
      raise IndexError("popleft from an empty ring buffer")
    entry = self._data[self._head]
    self._data[self._head] = None
    self._head = (self._head + 1) % len(self._data)
    self._length -= 1
    return entry

  def push_overwrite(self, entry):
    """Replace the oldest entry of a full buffer, making `entry` the newest."""
    if not self.is_full():
      raise IndexError("push_overwrite requires a full ring buffer")
    self._data[self._head] = entry
    self._head = (self._head + 1) % len(self._data)

  def clear(self):
    for i in range(len(self._data)):
      self._data[i] = None
    self._head = 0
    self._length = 0
