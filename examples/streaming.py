# illustration of the streaming side: one filter fed sample by sample, plus the batch entry point

import numpy as np
import fast_running_median as frm

mf = frm.MedianFilter(101) # stateful filter holding the last 101 samples

signal = np.random.randn(1000)
signal[::97] = np.nan # dropouts
for x in signal[:500]:
  latest = mf.feed(x, nan="ignore") # grows until full, then rolls
output = mf.feed(signal[500:], nan="ignore") # arrays are accepted too, one median per sample

smoothed = frm.running_median(signal, 101, tapering="asymmetric_truncated", nan="ignore")
print(latest, output[-1], smoothed[-1])
