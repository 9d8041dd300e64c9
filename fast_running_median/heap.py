"""
Array-backed binary heap whose entries can be updated or deleted through stable handles.

Items are `(value, sequence_position)` pairs ordered by `value` alone. The heap array
holds handles; two side tables map a handle to its item and to its current slot in the array.
"""

class MutableBinaryHeap:
  def __init__(self, reverse=False):
    self.reverse = reverse # max-ordered when true
    self._heap = [] # slot -> handle
    self._items = [] # handle -> item
    self._slots = [] # handle -> slot, or -1 once deleted
    self._free = [] # recycled handles

  def __len__(self):
    return len(self._heap)

  def __bool__(self):
    return bool(self._heap)

  def __getitem__(self, handle):
    self._check_handle(handle)
    return self._items[handle]

  def __iter__(self): # heap order, not sorted order
    return (self._items[h] for h in self._heap)

  def __repr__(self):
    kind = "max" if self.reverse else "min"
    return f"MutableBinaryHeap({kind}, size={len(self)})"

  def clear(self):
    self._heap.clear()
    self._items.clear()
    self._slots.clear()
    self._free.clear()

  def push(self, item):
    if self._free:
      handle = self._free.pop()
      self._items[handle] = item
    else:
      handle = len(self._items)
      self._items.append(item)
      self._slots.append(-1)
    self._heap.append(handle)
    self._slots[handle] = len(self._heap) - 1
    self._sift_up(len(self._heap) - 1)
    return handle

  def top(self):
    if not self._heap:
      raise IndexError("top of an empty heap")
    return self._items[self._heap[0]]

  def top_with_handle(self):
    if not self._heap:
      raise IndexError("top of an empty heap")
    handle = self._heap[0]
    return self._items[handle], handle

  def pop(self):
    item, handle = self.top_with_handle()
    self.delete(handle)
    return item

  def update(self, handle, item):
    self._check_handle(handle)
    self._items[handle] = item
    slot = self._slots[handle]
    self._sift_down(self._sift_up(slot))

  def delete(self, handle):
    self._check_handle(handle)
    slot = self._slots[handle]
    last = self._heap.pop()
    if slot < len(self._heap): # the hole is not the tail: plug it with the old tail
      self._heap[slot] = last
      self._slots[last] = slot
      self._sift_down(self._sift_up(slot))
    self._slots[handle] = -1
    self._items[handle] = None
    self._free.append(handle)

  def _check_handle(self, handle):
    if not 0 <= handle < len(self._slots) or self._slots[handle] < 0:
      raise KeyError(f"invalid heap handle {handle}")

  def _before(self, a, b): # does handle a belong above handle b?
    if self.reverse:
      return self._items[a][0] > self._items[b][0]
    return self._items[a][0] < self._items[b][0]

  def _swap(self, i, j):
    heap, slots = self._heap, self._slots
    heap[i], heap[j] = heap[j], heap[i]
    slots[heap[i]] = i
    slots[heap[j]] = j

  def _sift_up(self, pos):
    while pos > 0:
      parent = (pos - 1) >> 1
      if self._before(self._heap[pos], self._heap[parent]):
        self._swap(pos, parent)
        pos = parent
      else:
        break
    return pos

  def _sift_down(self, pos):
    n = len(self._heap)
    while True:
      child = 2*pos + 1
      if child >= n:
        break
      if child + 1 < n and self._before(self._heap[child + 1], self._heap[child]):
        child += 1
      if self._before(self._heap[child], self._heap[pos]):
        self._swap(pos, child)
        pos = child
      else:
        break
    return pos
