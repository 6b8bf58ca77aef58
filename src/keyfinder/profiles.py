"""
Reference tone profiles for major and minor tonal centers.

Each profile lists the expected relative energy of the 12 pitch classes
with the tonic at index 0.
"""

from enum import Enum

import numpy as np


class KeyProfile(Enum):
    """Available tone profile families."""
    KRUMHANSL = "krumhansl"      # General purpose, from listening experiments
    TEMPERLEY = "temperley"      # Classical corpus
    SHAATH = "shaath"            # Pop / electronic
    EDMM = "edmm"                # EDM corpus


# Krumhansl-Kessler (1990)
KRUMHANSL_MAJOR = (6.35, 2.23, 3.48, 2.33, 4.38, 4.09, 2.52, 5.19, 2.39, 3.66, 2.29, 2.88)
KRUMHANSL_MINOR = (6.33, 2.68, 3.52, 5.38, 2.60, 3.53, 2.54, 4.75, 3.98, 2.69, 3.34, 3.17)

# Temperley (1999)
TEMPERLEY_MAJOR = (5.0, 2.0, 3.5, 2.0, 4.5, 4.0, 2.0, 4.5, 2.0, 3.5, 1.5, 4.0)
TEMPERLEY_MINOR = (5.0, 2.0, 3.5, 4.5, 2.0, 4.0, 2.0, 4.5, 3.5, 2.0, 1.5, 4.0)

# Sha'ath (2011)
SHAATH_MAJOR = (6.6, 2.0, 3.5, 2.3, 4.6, 4.0, 2.5, 5.2, 2.4, 3.8, 2.3, 3.4)
SHAATH_MINOR = (6.5, 2.8, 3.5, 5.4, 2.7, 3.5, 2.5, 5.2, 4.0, 2.7, 4.3, 3.2)

# Electronic dance music corpus
EDMM_MAJOR = (7.0, 1.8, 3.2, 1.8, 4.8, 3.8, 2.2, 5.5, 2.0, 3.5, 2.0, 3.0)
EDMM_MINOR = (7.0, 2.5, 3.0, 5.8, 2.2, 3.5, 2.2, 5.5, 4.2, 2.5, 4.5, 2.8)

PROFILES = {
    KeyProfile.KRUMHANSL: (KRUMHANSL_MAJOR, KRUMHANSL_MINOR),
    KeyProfile.TEMPERLEY: (TEMPERLEY_MAJOR, TEMPERLEY_MINOR),
    KeyProfile.SHAATH: (SHAATH_MAJOR, SHAATH_MINOR),
    KeyProfile.EDMM: (EDMM_MAJOR, EDMM_MINOR),
}


def tone_profiles(profile: KeyProfile) -> tuple[np.ndarray, np.ndarray]:
    """Return read-only (major, minor) arrays for a profile family."""
    major, minor = PROFILES[KeyProfile(profile)]
    major = np.array(major, dtype=np.float64)
    minor = np.array(minor, dtype=np.float64)
    major.setflags(write=False)
    minor.setflags(write=False)
    return major, minor
