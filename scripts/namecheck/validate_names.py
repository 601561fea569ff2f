"""Casing and plurality checks."""

from namecheck.models import CasingPolicy, PluralityPolicy, ReasonCode, Violation
from namecheck.naming import INVARIANT, is_kebab, is_snake, last_word, plurality_of
from namecheck.paths import scope_token
from namecheck.validate_namespace import has_prefix


def _marker_index(entity, rule):
    """Token position of the rule marker when the namespace prefix is present."""
    if not rule.marker or entity.scope is None or not has_prefix(entity):
        return None
    return len(scope_token(entity.scope).split("_"))


def check_casing(entity, rule, settings):
    if rule.casing is CasingPolicy.KEBAB:
        ok = is_kebab(entity.name, rule.label_separator)
    else:
        ok = is_snake(entity.name, rule.marker, _marker_index(entity, rule))
    if ok:
        return None
    expected = rule.casing.value
    if rule.marker:
        expected += f" with an uppercase {rule.marker} marker"
    return Violation(
        entity, rule, ReasonCode.BAD_CASING,
        f"'{entity.name}' is not {expected}",
    )


def check_plurality(entity, rule, settings):
    if (
        rule.plurality is PluralityPolicy.CONTEXTUAL
        or entity.name in rule.reserved_names
    ):
        return None
    word = last_word(entity.name)
    form = plurality_of(word, settings)
    if form in (INVARIANT, rule.plurality.value):
        return None
    return Violation(
        entity, rule, ReasonCode.BAD_PLURALITY,
        f"{rule.kind.value} '{entity.name}' should be {rule.plurality.value} "
        f"('{word}' reads as {form})",
    )
