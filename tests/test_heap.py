import numpy as np
import pytest

from fast_running_median.heap import MutableBinaryHeap
from fast_running_median.ringbuffer import RingBuffer

def drain(heap):
  out = []
  while heap:
    out.append(heap.pop()[0])
  return out

def test_pop_order(length=200):
  values = np.random.uniform(size=length).tolist()
  low, high = MutableBinaryHeap(reverse=True), MutableBinaryHeap()
  for i, v in enumerate(values):
    low.push((v, i))
    high.push((v, i))
  assert drain(high) == sorted(values)
  assert drain(low) == sorted(values, reverse=True)

def test_handles_survive_reordering(length=100):
  heap = MutableBinaryHeap()
  values = np.random.permutation(length).tolist()
  handles = [heap.push((v, i)) for i, v in enumerate(values)]
  for i, h in enumerate(handles):
    assert heap[h] == (values[i], i)
  # arbitrary deletes and updates, checked against a plain dict of what should remain
  alive = dict(zip(handles, values))
  for h in handles[::3]:
    heap.delete(h)
    del alive[h]
  for h in handles[1::3]:
    alive[h] = -alive[h]
    heap.update(h, (alive[h], 0))
  for h, v in alive.items():
    assert heap[h][0] == v
  assert heap.top()[0] == min(alive.values())
  assert drain(heap) == sorted(alive.values())

def test_top_with_handle():
  heap = MutableBinaryHeap(reverse=True)
  for i, v in enumerate([3, 9, 1, 4]):
    heap.push((v, i))
  item, handle = heap.top_with_handle()
  assert item == (9, 1)
  heap.update(handle, (0, 1))
  assert heap.top() == (4, 3)

def test_recycled_handles():
  heap = MutableBinaryHeap()
  a = heap.push((1.0, 0))
  heap.push((2.0, 1))
  heap.delete(a)
  with pytest.raises(KeyError):
    heap[a]
  with pytest.raises(KeyError):
    heap.update(a, (0.0, 0))
  assert heap.push((0.5, 2)) == a
  assert heap.top() == (0.5, 2)

def test_empty_heap():
  heap = MutableBinaryHeap()
  with pytest.raises(IndexError):
    heap.top()
  with pytest.raises(IndexError):
    heap.pop()
  heap.push((1, 0))
  heap.clear()
  assert len(heap) == 0 and not heap

def test_ring_buffer():
  ring = RingBuffer(3)
  for x in "abc":
    ring.append(x)
  assert ring.is_full()
  with pytest.raises(IndexError):
    ring.append("d")
  ring.push_overwrite("d")
  assert list(ring) == ["b", "c", "d"]
  assert ring.popleft() == "b"
  ring.append("e")
  ring[0] = "C"
  assert list(ring) == ["C", "d", "e"]
  assert ring[2] == "e"
  with pytest.raises(IndexError):
    ring[3]
  ring.clear()
  assert len(ring) == 0 and ring.capacity == 3
  with pytest.raises(IndexError):
    ring.popleft()
  with pytest.raises(IndexError):
    ring.push_overwrite("x")
