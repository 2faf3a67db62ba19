import logging
from collections import Counter
from typing import Dict, Mapping, Optional

from .models import (
    DEFAULT_MAX_PROFILE_SIZE,
    DEFAULT_NDEPTH,
    LanguageProfile,
    ProfilerSettings,
    Token,
)
from .utils import analyse_token, normalize_text, tokenize

# Logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def build_occurrence_map(text: str, depth: int = DEFAULT_NDEPTH) -> Dict[str, int]:
    """
    Counts every gram of length 1 through depth+1 across the whole text.

    A depth of 0 only counts single characters; a negative depth counts
    nothing at all.

    Args:
        text: The raw input text. It is normalized here.
        depth: The gram depth.

    Returns:
        A fresh mapping of gram to its raw number of occurrences.
    """
    if depth < 0:
        logging.warning(f"Gram depth {depth} is negative, the profile will be empty.")

    occurrences: Counter = Counter()
    for token in tokenize(normalize_text(text)):
        analyse_token(occurrences, token, depth)
    return dict(occurrences)


def build_rank_map(
    occurrences: Mapping[str, int], max_profile_size: int = DEFAULT_MAX_PROFILE_SIZE
) -> Dict[str, int]:
    """
    Turns gram occurrences into ranks, 1 being the most frequent gram.

    Grams with equal counts are ranked in lexicographic order, so the same
    input always gives the same ranks. Only the best `max_profile_size`
    grams are kept; 0 or less keeps them all.

    Args:
        occurrences: Mapping of gram to occurrence count.
        max_profile_size: The cap on the number of ranked grams.

    Returns:
        A mapping of gram to rank, with ranks 1..len(result) and no gaps.
    """
    tokens = sorted((Token(key, count) for key, count in occurrences.items()), key=Token.sort_key)
    if max_profile_size > 0:
        tokens = tokens[:max_profile_size]
    return {token.key: rank for rank, token in enumerate(tokens, start=1)}


def analyze_with_depth(
    text: str, name: str, depth: int, max_profile_size: int = DEFAULT_MAX_PROFILE_SIZE
) -> LanguageProfile:
    """Builds the named profile of `text` using grams up to length depth+1."""
    occurrences = build_occurrence_map(text, depth)
    ranks = build_rank_map(occurrences, max_profile_size)
    logging.debug(f"Profile '{name}': {len(occurrences)} distinct grams, kept {len(ranks)}.")
    return LanguageProfile(name=name, profile=ranks)


def analyze(text: str, name: str) -> LanguageProfile:
    """Builds the named profile of `text` with the default gram depth."""
    return analyze_with_depth(text, name, DEFAULT_NDEPTH)


class LanguageProfiler:
    """
    Builds language profiles with one fixed set of settings.

    The profiler keeps no state between calls apart from its (frozen)
    settings, so a single instance can be shared freely.
    """
    def __init__(self, settings: Optional[ProfilerSettings] = None):
        """
        Args:
            settings: The gram depth and profile size cap to use. Defaults
                      to ProfilerSettings() when omitted.
        """
        self.settings = settings or ProfilerSettings()
        logging.info(
            f"LanguageProfiler is ready. Gram depth {self.settings.n_depth}, "
            f"max profile size {self.settings.max_profile_size or 'unbounded'}."
        )

    def occurrence_map(self, text: str, depth: Optional[int] = None) -> Dict[str, int]:
        return build_occurrence_map(text, self.settings.n_depth if depth is None else depth)

    def rank_map(self, occurrences: Mapping[str, int]) -> Dict[str, int]:
        return build_rank_map(occurrences, self.settings.max_profile_size)

    def analyze(self, text: str, name: str, depth: Optional[int] = None) -> LanguageProfile:
        """Builds the named profile of `text`, using the configured depth unless one is given."""
        return analyze_with_depth(
            text,
            name,
            self.settings.n_depth if depth is None else depth,
            self.settings.max_profile_size,
        )
