"""Pipeline driver: scan, classify, validate, report."""

import functools
import logging
from concurrent.futures import ThreadPoolExecutor

from namecheck.classifier import classify
from namecheck.config import load_settings
from namecheck.report import build_report
from namecheck.rules import load_rule_table
from namecheck.scanner import Scanner
from namecheck.validation import validate_entity

log = logging.getLogger(__name__)


def evaluate(entity, table, settings):
    """Classify and validate one entity; return ``(classification, violations)``."""
    classification = classify(entity, table, settings)
    if classification.rule is None:
        return classification, []
    violations = validate_entity(
        classification.entity, classification.rule, settings,
    )
    return classification, violations


def run_check(root, *, settings=None, table=None, jobs=1):
    """Run the full pipeline over ``root`` and return a Report.

    Classification and validation are pure per entity, so ``jobs > 1`` fans
    them out over a thread pool without changing the result.
    """
    settings = settings if settings is not None else load_settings()
    table = table if table is not None else load_rule_table()
    scanner = Scanner(root)
    entities = list(scanner.entities())
    log.info(
        "Scanned %d entities (%d warnings) under %s",
        len(entities), len(scanner.warnings), root,
    )

    work = functools.partial(evaluate, table=table, settings=settings)
    if jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            outcomes = list(pool.map(work, entities))
    else:
        outcomes = [work(entity) for entity in entities]

    report = build_report(root, outcomes, scanner.warnings)
    log.info(
        "%d violation(s), %d ambiguous, %d unclassifiable",
        len(report.violations), len(report.ambiguous), len(report.unclassified),
    )
    return report
