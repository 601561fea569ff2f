"""Expected-location check."""

from namecheck.models import Origin, ReasonCode, Violation
from namecheck.paths import match_location, render_template


def check_location(entity, rule, settings):
    values = {"name": entity.name, "scope": entity.scope}
    templates = [render_template(t, **values) for t in rule.expected_locations]
    if any(match_location(entity.path, t) is not None for t in templates):
        return None
    if entity.origin is Origin.VARS_FILE:
        message = f"flat vars file; expected directory {templates[0]}/"
    else:
        message = f"expected {' or '.join(templates)}"
    return Violation(entity, rule, ReasonCode.WRONG_LOCATION, message)
