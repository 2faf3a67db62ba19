from .core import (
    LanguageProfiler,
    analyze,
    analyze_with_depth,
    build_occurrence_map,
    build_rank_map,
)
from .models import (
    DEFAULT_MAX_PROFILE_SIZE,
    DEFAULT_NDEPTH,
    LanguageProfile,
    ProfilerSettings,
    Token,
)

__all__ = [
    "LanguageProfiler",
    "analyze",
    "analyze_with_depth",
    "build_occurrence_map",
    "build_rank_map",
    "DEFAULT_MAX_PROFILE_SIZE",
    "DEFAULT_NDEPTH",
    "LanguageProfile",
    "ProfilerSettings",
    "Token",
]
