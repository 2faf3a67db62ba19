from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional, Tuple

import pydantic
from pydantic_settings import BaseSettings, SettingsConfigDict

# Configuration
DEFAULT_NDEPTH = 5
DEFAULT_MAX_PROFILE_SIZE = 100_000  # 0 or less keeps every gram


class Token(NamedTuple):
    """A gram and how often it occurred. Only lives while ranks are being built."""
    key: str
    occurrence: int

    def sort_key(self) -> Tuple[int, str]:
        # Most frequent first; equal counts fall back to the gram itself.
        return -self.occurrence, self.key


class LanguageProfile(pydantic.BaseModel):
    """
    The statistical fingerprint of one text: each retained gram mapped to its rank.

    Rank 1 is the most frequent gram. Profiles are frozen once built, and
    the rank mapping itself is read-only.
    """
    model_config = pydantic.ConfigDict(frozen=True)

    name: str
    profile: Mapping[str, int] = pydantic.Field(default_factory=dict, validate_default=True)

    @pydantic.field_validator('profile')
    @classmethod
    def read_only_profile(cls, v: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(v))

    @pydantic.field_serializer('profile')
    def serialize_profile(self, v: Mapping[str, int]) -> Dict[str, int]:
        return dict(v)

    def __len__(self) -> int:
        return len(self.profile)

    def rank_of(self, gram: str, default: Optional[int] = None) -> Optional[int]:
        return self.profile.get(gram, default)

    def ranked_grams(self, limit: Optional[int] = None) -> List[str]:
        """Returns the grams ordered from best to worst rank, optionally only the first `limit`."""
        grams = sorted(self.profile, key=self.profile.__getitem__)
        return grams if limit is None else grams[:limit]


class ProfilerSettings(BaseSettings):
    """
    Tunables for building profiles, overridable through LANGPROFILE_* environment variables.

    n_depth: grams of length 1 through n_depth+1 are generated.
    max_profile_size: how many ranked grams to keep; 0 means no limit.
    """
    model_config = SettingsConfigDict(env_prefix="LANGPROFILE_", extra="ignore", frozen=True)

    n_depth: int = DEFAULT_NDEPTH
    max_profile_size: int = DEFAULT_MAX_PROFILE_SIZE

    @pydantic.field_validator('max_profile_size')
    @classmethod
    def non_positive_means_unbounded(cls, v: int) -> int:
        return v if v > 0 else 0
