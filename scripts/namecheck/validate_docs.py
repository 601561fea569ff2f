"""Required-variable documentation check for roles."""

from namecheck.inventory import undocumented_variables
from namecheck.models import EntityKind, ReasonCode, Violation


def check_required_vars_doc(entity, rule, settings):
    if rule.kind is not EntityKind.ROLE or entity.inventory is None:
        return None
    missing = undocumented_variables(entity.name, entity.inventory)
    if not missing:
        return None
    return Violation(
        entity, rule, ReasonCode.MISSING_REQUIRED_VARS_DOC,
        "required variables not documented in meta/argument_specs.yml "
        f"or README: {', '.join(missing)}",
    )
