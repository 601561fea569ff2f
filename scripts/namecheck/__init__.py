"""namecheck: naming and layout conformance checker.

Public API re-exported here so callers can ``from namecheck import ...``.
"""

__version__ = "0.1.0"

from namecheck.classifier import Classification, classify  # noqa: E402
from namecheck.config import Settings, load_settings  # noqa: E402
from namecheck.errors import InvalidRoot, NamecheckError, UnknownKind  # noqa: E402
from namecheck.models import (  # noqa: E402
    Ambiguity,
    CasingPolicy,
    Entity,
    EntityKind,
    Location,
    Origin,
    PluralityPolicy,
    ReasonCode,
    RoleInventory,
    Rule,
    ScanWarning,
    Violation,
)
from namecheck.pipeline import evaluate, run_check  # noqa: E402
from namecheck.report import (  # noqa: E402
    Report,
    build_report,
    render_json,
    render_text,
    report_to_dict,
)
from namecheck.rules import DEFAULT_RULES, RuleTable, load_rule_table  # noqa: E402
from namecheck.scanner import Scanner, scan  # noqa: E402
from namecheck.validation import validate_entity  # noqa: E402

__all__ = [
    "__version__",
    # Models
    "Ambiguity",
    "CasingPolicy",
    "Entity",
    "EntityKind",
    "Location",
    "Origin",
    "PluralityPolicy",
    "ReasonCode",
    "RoleInventory",
    "Rule",
    "ScanWarning",
    "Violation",
    # Errors
    "InvalidRoot",
    "NamecheckError",
    "UnknownKind",
    # Config
    "Settings",
    "load_settings",
    # Rule table
    "DEFAULT_RULES",
    "RuleTable",
    "load_rule_table",
    # Pipeline stages
    "Scanner",
    "scan",
    "Classification",
    "classify",
    "validate_entity",
    "evaluate",
    "run_check",
    # Reporting
    "Report",
    "build_report",
    "render_json",
    "render_text",
    "report_to_dict",
]
