"""Classifier: map each scanned entity to exactly one rule by location."""

from dataclasses import dataclass, replace

from namecheck.models import Ambiguity, Entity, EntityKind, Rule
from namecheck.naming import is_specific_group
from namecheck.paths import match_location, render_template, scope_token, specificity

# Kind pairs sharing location patterns, told apart by the group name
_GROUP_FAMILIES = {
    frozenset({EntityKind.GROUP, EntityKind.SPECIFIC_GROUP}):
        (EntityKind.GROUP, EntityKind.SPECIFIC_GROUP),
    frozenset({EntityKind.GROUP_VAR, EntityKind.SPECIFIC_GROUP_VAR}):
        (EntityKind.GROUP_VAR, EntityKind.SPECIFIC_GROUP_VAR),
}


@dataclass(frozen=True)
class Classification:
    """Outcome for one entity.

    ``rule`` is set for a classified entity (``entity`` is then the
    classified copy), ``ambiguity`` for a tie; neither means unclassifiable.
    """

    entity: Entity
    rule: Rule | None = None
    ambiguity: Ambiguity | None = None

    @property
    def unclassified(self):
        return self.rule is None and self.ambiguity is None


def _best_match(entity, rule):
    """Highest specificity among the rule's patterns, with its captures."""
    best = None
    for pattern in rule.match_patterns:
        captures = match_location(entity.path, pattern)
        if captures is None:
            continue
        score = specificity(pattern)
        if best is None or score > best[0]:
            best = (score, captures)
    return best


def _candidates(entity, table):
    matches = []
    for rule in table:
        if entity.origin not in rule.origins:
            continue
        found = _best_match(entity, rule)
        if found is not None:
            matches.append((found[0], rule, found[1]))
    if not matches:
        return []
    top = max(score for score, _, _ in matches)
    return [(rule, captures) for score, rule, captures in matches if score == top]


def _resolve_family(entity, candidates, settings):
    kinds = frozenset(rule.kind for rule, _ in candidates)
    family = _GROUP_FAMILIES.get(kinds)
    if family is None:
        return None
    plain, specific = family
    captures = candidates[0][1]
    group_name = captures.get("scope") or entity.name
    wanted = specific if is_specific_group(group_name, settings) else plain
    return next(c for c in candidates if c[0].kind == wanted)


def classify(entity, table, settings):
    """Classify one entity against the rule table.

    The most specific location pattern wins.  Equal specificity across
    unrelated kinds is reported as an ambiguity rather than guessed; group
    and specific-group kinds share patterns and are split by the cluster
    prefix heuristic.
    """
    candidates = _candidates(entity, table)
    if not candidates:
        return Classification(entity)
    if len(candidates) > 1:
        resolved = _resolve_family(entity, candidates, settings)
        if resolved is None:
            kinds = tuple(sorted(rule.kind.value for rule, _ in candidates))
            return Classification(entity, ambiguity=Ambiguity(entity, kinds))
        candidates = [resolved]

    rule, captures = candidates[0]
    scope = captures.get("scope")
    prefix = None
    if rule.prefix_pattern and scope is not None:
        prefix = render_template(rule.prefix_pattern, scope=scope_token(scope))
    classified = replace(
        entity, kind=rule.kind, scope=scope, namespace_prefix=prefix,
    )
    return Classification(classified, rule=rule)
