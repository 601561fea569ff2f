"""Validation hub for classified entities.

Delegates to sub-validators for names, namespaces, locations and role
documentation.  Every check runs independently, so one entity can collect
several violations.
"""

from namecheck.validate_docs import check_required_vars_doc
from namecheck.validate_location import check_location
from namecheck.validate_names import check_casing, check_plurality
from namecheck.validate_namespace import check_prefix

CHECKS = (
    check_casing,
    check_plurality,
    check_prefix,
    check_location,
    check_required_vars_doc,
)


def validate_entity(entity, rule, settings):
    """Validate one classified entity. Returns list of violations."""
    if entity.kind is not rule.kind:
        kind = entity.kind.value if entity.kind else "nothing"
        raise ValueError(
            f"{entity.path}: entity classified as {kind} "
            f"validated against the {rule.kind.value} rule"
        )
    violations = []
    for check in CHECKS:
        violation = check(entity, rule, settings)
        if violation is not None:
            violations.append(violation)
    return violations
