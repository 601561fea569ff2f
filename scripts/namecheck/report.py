"""Aggregate verdicts into a Report and render it as text or JSON.

Everything is sorted before rendering (violations by path then reason
code), so two runs over an unchanged tree give byte-identical output.
"""

import json
from dataclasses import dataclass


def _entity_key(entity):
    return (entity.location.path, entity.location.line, entity.name)


def _violation_key(violation):
    return (
        violation.entity.location.path,
        violation.reason.value,
        violation.entity.location.line,
        violation.entity.name,
    )


@dataclass(frozen=True)
class Report:
    root: str
    total_entities: int
    passed_entities: int
    violations: tuple
    warnings: tuple
    ambiguous: tuple
    unclassified: tuple

    @property
    def passed(self):
        return not self.violations

    @property
    def clean(self):
        """No violations and nothing left unresolved."""
        return (
            self.passed
            and not self.warnings
            and not self.ambiguous
            and not self.unclassified
        )

    @property
    def exit_code(self):
        return 0 if self.clean else 1


def build_report(root, outcomes, warnings):
    """Build a Report from ``(classification, violations)`` pairs."""
    violations, ambiguous, unclassified = [], [], []
    passed = 0
    for classification, found in outcomes:
        if classification.ambiguity is not None:
            ambiguous.append(classification.ambiguity)
        elif classification.unclassified:
            unclassified.append(classification.entity)
        elif found:
            violations.extend(found)
        else:
            passed += 1
    return Report(
        root=str(root),
        total_entities=len(outcomes),
        passed_entities=passed,
        violations=tuple(sorted(violations, key=_violation_key)),
        warnings=tuple(sorted(set(warnings))),
        ambiguous=tuple(sorted(ambiguous, key=lambda a: _entity_key(a.entity))),
        unclassified=tuple(sorted(unclassified, key=_entity_key)),
    )


# ── Rendering ───────────────────────────────────────────────


def _summary(report):
    return {
        "total_entities": report.total_entities,
        "passed_entities": report.passed_entities,
        "violations": len(report.violations),
        "warnings": len(report.warnings),
        "ambiguous": len(report.ambiguous),
        "unclassified": len(report.unclassified),
        "passed": report.passed,
        "exit_code": report.exit_code,
    }


def render_text(report):
    """Human-readable report as a single string."""
    s = _summary(report)
    lines = [
        "=" * 60,
        f"  Naming conformance report: {report.root}",
        "=" * 60,
        "",
        "SUMMARY",
        f"  Entities:      {s['total_entities']}",
        f"  Passed:        {s['passed_entities']}",
        f"  Violations:    {s['violations']}",
        f"  Scan warnings: {s['warnings']}",
        f"  Ambiguous:     {s['ambiguous']}",
        f"  Unclassified:  {s['unclassified']}",
        "",
    ]

    if report.violations:
        lines.append(f"VIOLATIONS ({len(report.violations)})")
        for v in report.violations:
            lines.append(
                f"  {v.entity.location}  {v.reason.value}  "
                f"{v.entity.name} [{v.rule.kind.value}]"
            )
            lines.append(f"      {v.message}")
        lines.append("")

    if report.warnings:
        lines.append(f"SCAN WARNINGS ({len(report.warnings)})")
        for w in report.warnings:
            lines.append(f"  {w.path}: {w.reason}")
        lines.append("")

    if report.ambiguous:
        lines.append(f"AMBIGUOUS CLASSIFICATION ({len(report.ambiguous)})")
        for a in report.ambiguous:
            lines.append(
                f"  {a.entity.location}  {a.entity.name}: "
                f"matches {', '.join(a.candidates)}"
            )
        lines.append("")

    if report.unclassified:
        lines.append(f"UNCLASSIFIABLE ({len(report.unclassified)})")
        for e in report.unclassified:
            lines.append(f"  {e.location}  {e.name} ({e.origin.value})")
        lines.append("")

    status = "PASS" if report.clean else "FAIL"
    lines.append(f"RESULT: {status}")
    lines.append("=" * 60)
    return "\n".join(lines) + "\n"


def _location(entity):
    return {"path": entity.location.path, "line": entity.location.line}


def report_to_dict(report):
    return {
        "root": report.root,
        "summary": _summary(report),
        "violations": [
            {
                "entity": v.entity.name,
                "kind": v.entity.kind.value,
                "reasonCode": v.reason.value,
                "location": _location(v.entity),
                "rule": v.rule.kind.value,
                "message": v.message,
            }
            for v in report.violations
        ],
        "warnings": [
            {"path": w.path, "reason": w.reason} for w in report.warnings
        ],
        "ambiguous": [
            {
                "entity": a.entity.name,
                "location": _location(a.entity),
                "candidates": list(a.candidates),
            }
            for a in report.ambiguous
        ],
        "unclassified": [
            {
                "entity": e.name,
                "origin": e.origin.value,
                "location": _location(e),
            }
            for e in report.unclassified
        ],
    }


def render_json(report):
    return json.dumps(report_to_dict(report), indent=2) + "\n"
