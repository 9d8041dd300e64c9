from setuptools import setup, find_packages
import re

# the version lives in the package itself; read it without importing (numpy may not be installed yet)
with open("fast_running_median/__init__.py") as f:
  version = re.search(r'^__version__ = "(.+)"', f.read(), re.M).group(1)

setup(
  name = "fast-running-median",
  version = version,
  description = "Running (sliding-window) medians in O(log w) per sample with a dual-heap filter",
  packages = find_packages(exclude=["tests", "examples"]),
  python_requires = ">=3.8",
  install_requires = ["numpy"],
  extras_require = {
    "test": ["pytest", "pandas", "scipy"],
    "examples": ["pandas", "scipy", "matplotlib"],
  },
)
