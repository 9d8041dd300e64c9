# running medians over sliding windows, one-shot over arrays or streaming through a MedianFilter

__version__ = "1.0.0"

from .exceptions import *
from .filter import MedianFilter, Partition
from .options import DEFAULT_NAN_POLICY, DEFAULT_TAPERING, NanPolicy, Tapering
from .tapering import effective_window_length, output_length, running_median, running_median_into

# a rolling-median convenience method as a direct replacement to scipy.signal.medfilt
def medfilt(signal, window_size):
  return running_median(signal, window_size, Tapering.SYMMETRIC)
