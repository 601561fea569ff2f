"""Location patterns and name normalisation.

A location pattern is a ``/``-separated glob over path segments:

- ``*`` matches any run of characters inside one segment,
- ``**`` matches zero or more whole segments,
- ``{name}`` / ``{scope}`` capture (part of) a segment.

Patterns are anchored at the end of the path, so ``roles/{name}`` matches
both ``roles/web`` and ``ansible/roles/web``.
"""

import functools
import re

_DOUBLE_STAR = "**"
_TOKEN_RE = re.compile(r"(\{[a-z_]+\}|\*)")


@functools.lru_cache(maxsize=4096)
def _segment_regex(segment):
    parts = []
    for token in _TOKEN_RE.split(segment):
        if not token:
            continue
        if token == "*":
            parts.append(r"[^/]*")
        elif token.startswith("{") and token.endswith("}"):
            parts.append(f"(?P<{token[1:-1]}>[^/]+?)")
        else:
            parts.append(re.escape(token))
    return re.compile("".join(parts))


@functools.lru_cache(maxsize=4096)
def compile_pattern(pattern):
    """Split a pattern into segment matchers (``**`` kept as a marker)."""
    return tuple(
        _DOUBLE_STAR if seg == _DOUBLE_STAR else _segment_regex(seg)
        for seg in pattern.split("/")
    )


def specificity(pattern):
    """Number of literal segments: higher means a more specific pattern."""
    return sum(
        1 for seg in pattern.split("/")
        if "*" not in seg and "{" not in seg
    )


def _match_from(parts, i, segments, j):
    if j == len(segments):
        return {} if i == len(parts) else None
    seg = segments[j]
    if seg is _DOUBLE_STAR:
        for k in range(i, len(parts) + 1):
            captures = _match_from(parts, k, segments, j + 1)
            if captures is not None:
                return captures
        return None
    if i == len(parts):
        return None
    m = seg.fullmatch(parts[i])
    if m is None:
        return None
    rest = _match_from(parts, i + 1, segments, j + 1)
    if rest is None:
        return None
    return {**m.groupdict(), **rest}


def match_location(path, pattern):
    """Match ``path`` against ``pattern``; return captures or None."""
    parts = tuple(p for p in path.split("/") if p)
    segments = compile_pattern(pattern)
    for start in range(len(parts) + 1):
        captures = _match_from(parts, start, segments, 0)
        if captures is not None:
            return captures
    return None


def render_template(template, **values):
    """Substitute ``{key}`` placeholders, leaving globs untouched."""
    for key, value in values.items():
        if value is not None:
            template = template.replace("{" + key + "}", value)
    return template


def to_snake(name):
    """Normalise any casing to snake_case (``HailVersion`` to ``hail_version``)."""
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    s = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s)
    return s.replace("-", "_").replace(".", "_").lower()


def scope_token(scope):
    """Scope name as it appears inside a variable prefix."""
    return scope.replace("-", "_").replace(".", "_")
