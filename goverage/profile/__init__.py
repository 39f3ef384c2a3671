"""Profile module - coverage profile model, parsing and merging."""

from .schema import Block, MergedProfile, Mode, Profile, VALID_MODES
from .parser import parse_profile_text, parse_profiles
from .merger import ProfileMerger, combine_counts, merge_profiles
from .validator import validate_profiles, validate_run

__all__ = [
    "Block",
    "MergedProfile",
    "Mode",
    "Profile",
    "VALID_MODES",
    "parse_profile_text",
    "parse_profiles",
    "ProfileMerger",
    "combine_counts",
    "merge_profiles",
    "validate_profiles",
    "validate_run",
]
