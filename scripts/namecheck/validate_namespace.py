"""Namespace prefix check for variables and facts."""

from namecheck.models import ReasonCode, Violation
from namecheck.paths import to_snake


def has_prefix(entity):
    """True if the (normalised) name starts with its namespace prefix.

    Both sides are normalised to snake_case so a casing mistake is never
    also reported as a missing prefix.  A private ``_`` is ignored and the
    name must carry something after the prefix.
    """
    prefix = to_snake(entity.namespace_prefix)
    name = to_snake(entity.name[1:] if entity.private else entity.name)
    return name.startswith(prefix) and len(name) > len(prefix)


def check_prefix(entity, rule, settings):
    if not rule.prefix_pattern or entity.namespace_prefix is None:
        return None
    if has_prefix(entity):
        return None
    expected = ("_" if entity.private else "") + entity.namespace_prefix
    return Violation(
        entity, rule, ReasonCode.MISSING_PREFIX,
        f"'{entity.name}' should start with '{expected}' "
        f"({rule.kind.value} of '{entity.scope}')",
    )
