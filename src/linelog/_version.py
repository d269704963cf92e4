"""
Version information for linelog.

The four components below are the only place the version is written;
setup.py reads PIP_VERSION from this file.
"""

MAJOR = 0
MINOR = 3
PATCH = 0
PHASE = "beta"  # None, "alpha", "beta", "rc1", ...

_PEP440_PHASES = {"alpha": "a0", "beta": "b0"}

__app_name__ = "linelog"

# 0.3.0-beta
BASE_VERSION = f"{MAJOR}.{MINOR}.{PATCH}" + (f"-{PHASE}" if PHASE else "")
# 0.3.0b0
PIP_VERSION = (f"{MAJOR}.{MINOR}.{PATCH}"
               + (_PEP440_PHASES.get(PHASE, PHASE) if PHASE else ""))

__version__ = PIP_VERSION
