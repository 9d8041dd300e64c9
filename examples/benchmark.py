# estimate the throughput of offline filtering against scipy and pandas. signals that are less
# stationary should induce more heap migrations; compare for different window sizes on Brownian motion.

# the amortized cost per sample is O(log w), but the constant depends on how often the median
# crosses over between the two heaps, so it varies with the signal.

import numpy as np
from scipy.signal import medfilt
import pandas as pd
import fast_running_median as frm
import time
from matplotlib import pyplot as plt
plt.ion()

def measure_runtime(f):
  start = time.perf_counter()
  res = f()
  return time.perf_counter() - start, res

signal = np.cumsum(np.random.normal(size=1_000_000))
series = pd.Series(signal) # construct a priori for fairness
window_sizes = np.array([4, 10, 20, 30, 40, 50, 100, 500]) + 1 # odd

frm_times, sc_times, pd_times = [], [], []

for window_size in window_sizes:
  frm_time, frm_res = measure_runtime(lambda: frm.running_median(signal, window_size, "symmetric"))
  sc_time, sc_res = measure_runtime(lambda: medfilt(signal, window_size))
  pd_time, pd_res = measure_runtime(lambda: series.rolling(window_size, center=True).median())
  # medfilt pads both ends with zeros, the symmetric tapering shrinks the window instead; compare the interior.
  half = window_size // 2
  assert np.array_equal(frm_res[half:-half], sc_res[half:-half])
  print(f"w={window_size}: fast_running_median {frm_time:.3f}s, scipy {sc_time:.3f}s, pandas {pd_time:.3f}s")
  frm_times.append(frm_time)
  sc_times.append(sc_time)
  pd_times.append(pd_time)

plt.plot(window_sizes, frm_times, label="fast_running_median")
plt.plot(window_sizes, sc_times, label="scipy.signal.medfilt")
plt.plot(window_sizes, pd_times, label="pandas rolling")
plt.legend()
