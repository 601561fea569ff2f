"""Checker settings: heuristic word lists and cluster prefixes.

Built-in defaults come from ``namecheck.constants``; each list can be
extended with a comma-separated ``NAMECHECK_*`` environment variable and
with command-line values.
"""

import os
from dataclasses import dataclass

from namecheck.constants import (
    DEFAULT_CLUSTER_PREFIXES,
    DEFAULT_INVARIANT_WORDS,
    DEFAULT_PLURAL_WORDS,
    DEFAULT_SINGULAR_WORDS,
    ENV_PREFIX,
)


@dataclass(frozen=True)
class Settings:
    cluster_prefixes: frozenset = DEFAULT_CLUSTER_PREFIXES
    singular_words: frozenset = DEFAULT_SINGULAR_WORDS
    plural_words: frozenset = DEFAULT_PLURAL_WORDS
    invariant_words: frozenset = DEFAULT_INVARIANT_WORDS


def _split_env(environ, name):
    raw = environ.get(ENV_PREFIX + name, "")
    return {w.strip().lower() for w in raw.split(",") if w.strip()}


def load_settings(environ=None, *, cluster_prefixes=(), singular_words=(),
                  plural_words=(), invariant_words=()):
    """Merge defaults, ``NAMECHECK_*`` env vars and explicit values."""
    env = os.environ if environ is None else environ
    extra = {
        "cluster_prefixes": (cluster_prefixes, "CLUSTER_PREFIXES"),
        "singular_words": (singular_words, "SINGULAR_WORDS"),
        "plural_words": (plural_words, "PLURAL_WORDS"),
        "invariant_words": (invariant_words, "INVARIANT_WORDS"),
    }
    defaults = Settings()
    merged = {}
    for field_name, (values, env_name) in extra.items():
        merged[field_name] = frozenset(
            getattr(defaults, field_name)
            | _split_env(env, env_name)
            | {v.strip().lower() for v in values if v.strip()}
        )
    return Settings(**merged)
