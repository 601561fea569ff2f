"""Casing and plurality heuristics.

Plurality is a suffix heuristic, not natural-language analysis: a word
ending in ``s`` is plural unless it ends in ``ss``/``us``/``is``.  The
settings word lists override the suffix rule where it guesses wrong.
"""

import re

from namecheck.constants import NUMBERED_CLUSTER_RE, SINGULAR_ENDINGS

KEBAB_RE = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")
SNAKE_TOKEN_RE = re.compile(r"^[a-z0-9]+$")

SINGULAR = "singular"
PLURAL = "plural"
INVARIANT = "invariant"


def is_kebab(name, label_separator=None):
    """True if ``name`` (or each of its labels) is kebab-case."""
    labels = name.split(label_separator) if label_separator else [name]
    return all(KEBAB_RE.match(label) for label in labels)


def snake_tokens(name):
    """Split a variable name into tokens, ignoring a private ``_`` prefix."""
    if name.startswith("_"):
        name = name[1:]
    return name.split("_")


def is_snake(name, marker=None, marker_index=None):
    """True if ``name`` is snake_case, allowing the rule's uppercase marker.

    When ``marker_index`` is given the token at that position must be the
    marker itself, so ``hailers_group_version`` fails for ``GROUP``.
    """
    tokens = snake_tokens(name)
    if not tokens or not tokens[0][:1].islower():
        return False
    for i, token in enumerate(tokens):
        if marker_index is not None and i == marker_index:
            if token != marker:
                return False
        elif not (SNAKE_TOKEN_RE.match(token) or (marker and token == marker)):
            return False
    return True


def last_word(name):
    return re.split(r"[-_.]", name)[-1].lower()


def plurality_of(word, settings):
    """Classify one word as singular, plural or invariant."""
    word = word.lower()
    if not word or word.isdigit() or word in settings.invariant_words:
        return INVARIANT
    if word in settings.plural_words:
        return PLURAL
    if word in settings.singular_words:
        return SINGULAR
    if word.endswith("s") and not word.endswith(SINGULAR_ENDINGS):
        return PLURAL
    return SINGULAR


def is_specific_group(name, settings):
    """Cluster-specific groups start with a cluster prefix segment.

    The prefix is either a configured name (``prod-``, ``staging-``) or a
    numbered cluster such as ``eu1-``; a single-segment name never is.
    """
    parts = re.split(r"[-_]", name, maxsplit=1)
    if len(parts) < 2:
        return False
    head = parts[0].lower()
    return head in settings.cluster_prefixes or bool(
        NUMBERED_CLUSTER_RE.match(head)
    )
