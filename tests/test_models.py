import sys
from pathlib import Path
import pydantic
import pytest

# Path Fix
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from profiler.models import (
    DEFAULT_MAX_PROFILE_SIZE,
    DEFAULT_NDEPTH,
    LanguageProfile,
    ProfilerSettings,
    Token,
)

# Test Cases for Token

def test_token_sort_key_orders_by_count_then_gram():
    tokens = [Token("b", 2), Token("a", 2), Token("c", 5), Token("d", 1)]
    assert [t.key for t in sorted(tokens, key=Token.sort_key)] == ["c", "a", "b", "d"]


# Test Cases for LanguageProfile

@pytest.fixture
def profile():
    return LanguageProfile(name="en", profile={"e": 1, "t": 2, "th": 3})

def test_profile_is_frozen(profile):
    with pytest.raises(pydantic.ValidationError):
        profile.name = "de"

def test_profile_ranked_grams(profile):
    assert profile.ranked_grams() == ["e", "t", "th"]
    assert profile.ranked_grams(limit=2) == ["e", "t"]

def test_profile_rank_of(profile):
    assert profile.rank_of("t") == 2
    assert profile.rank_of("zz") is None
    assert profile.rank_of("zz", default=400) == 400

def test_profile_len(profile):
    assert len(profile) == 3

def test_profile_defaults_to_empty():
    assert LanguageProfile(name="x").profile == {}

def test_profile_ranks_are_read_only(profile):
    with pytest.raises(TypeError):
        profile.profile["zzz"] = 999
    with pytest.raises(TypeError):
        del profile.profile["e"]
    assert profile.rank_of("zzz") is None

def test_empty_profile_is_read_only():
    with pytest.raises(TypeError):
        LanguageProfile(name="x").profile["a"] = 1

def test_profile_detached_from_source_dict():
    ranks = {"a": 1}
    built = LanguageProfile(name="x", profile=ranks)
    ranks["b"] = 2
    assert "b" not in built.profile

def test_profile_dumps_plain_dict(profile):
    assert profile.model_dump() == {"name": "en", "profile": {"e": 1, "t": 2, "th": 3}}


# Test Cases for ProfilerSettings

@pytest.fixture
def clean_env(monkeypatch):
    """Removes any LANGPROFILE_* overrides from the environment."""
    monkeypatch.delenv("LANGPROFILE_N_DEPTH", raising=False)
    monkeypatch.delenv("LANGPROFILE_MAX_PROFILE_SIZE", raising=False)
    return monkeypatch

def test_settings_defaults(clean_env):
    settings = ProfilerSettings()
    assert settings.n_depth == DEFAULT_NDEPTH
    assert settings.max_profile_size == DEFAULT_MAX_PROFILE_SIZE

@pytest.mark.parametrize("value", [0, -1, -5000])
def test_settings_non_positive_cap_is_unbounded(clean_env, value):
    assert ProfilerSettings(max_profile_size=value).max_profile_size == 0

def test_settings_reject_non_integer(clean_env):
    with pytest.raises(pydantic.ValidationError):
        ProfilerSettings(n_depth="deep")

def test_settings_are_frozen(clean_env):
    settings = ProfilerSettings()
    with pytest.raises(pydantic.ValidationError):
        settings.n_depth = 3

def test_settings_read_environment(clean_env):
    clean_env.setenv("LANGPROFILE_N_DEPTH", "2")
    clean_env.setenv("LANGPROFILE_MAX_PROFILE_SIZE", "300")
    settings = ProfilerSettings()
    assert settings.n_depth == 2
    assert settings.max_profile_size == 300

def test_settings_environment_cap_is_normalized(clean_env):
    clean_env.setenv("LANGPROFILE_MAX_PROFILE_SIZE", "-1")
    assert ProfilerSettings().max_profile_size == 0

def test_settings_explicit_values_beat_environment(clean_env):
    clean_env.setenv("LANGPROFILE_N_DEPTH", "2")
    clean_env.setenv("LANGPROFILE_MAX_PROFILE_SIZE", "300")
    settings = ProfilerSettings(n_depth=4, max_profile_size=10)
    assert settings.n_depth == 4
    assert settings.max_profile_size == 10

def test_settings_invalid_environment_value(clean_env):
    clean_env.setenv("LANGPROFILE_MAX_PROFILE_SIZE", "lots")
    with pytest.raises(pydantic.ValidationError):
        ProfilerSettings()
