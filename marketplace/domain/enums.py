"""Domain enumerations."""

import enum


class CoordinatePolicy(str, enum.Enum):
    """How the query validator decides a coordinate is "missing"."""

    # Only an absent value is missing; 0.0 is a real place (Gulf of Guinea).
    ABSENT_ONLY = "ABSENT_ONLY"
    # Legacy client contract: 0 for either field counts as missing too.
    ZERO_IS_MISSING = "ZERO_IS_MISSING"
