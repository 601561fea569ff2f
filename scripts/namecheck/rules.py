"""Built-in rule table: one naming and location contract per entity kind."""

import functools

from namecheck.constants import RESERVED_GROUPS
from namecheck.errors import UnknownKind
from namecheck.models import (
    CasingPolicy,
    EntityKind,
    Origin,
    PluralityPolicy,
    Rule,
)

_KEBAB = CasingPolicy.KEBAB
_SNAKE = CasingPolicy.SNAKE
_ARTIFACT_ORIGINS = frozenset({Origin.DIRECTORY, Origin.VARS_FILE})


def _yml(*templates):
    """Expand ``.yml`` templates to also accept ``.yaml``."""
    out = []
    for t in templates:
        out.append(t)
        if t.endswith(".yml"):
            out.append(t[: -len(".yml")] + ".yaml")
    return tuple(out)


_GROUP_MATCH = ("group_vars/{name}",)
_GROUP_VAR_MATCH = ("group_vars/{scope}/**/*",) + _yml("group_vars/{scope}.yml")
_GROUP_VAR_LOCATIONS = _yml(
    "group_vars/{scope}/vars.yml", "group_vars/{scope}/vault.yml",
)

DEFAULT_RULES = (
    # ── Artifacts ────────────────────────────────────────────
    Rule(
        kind=EntityKind.ROLE,
        casing=_KEBAB,
        plurality=PluralityPolicy.SINGULAR,
        origins=frozenset({Origin.DIRECTORY}),
        match_patterns=("roles/{name}",),
        expected_locations=("roles/{name}",),
    ),
    Rule(
        kind=EntityKind.PLAYBOOK,
        casing=_KEBAB,
        plurality=PluralityPolicy.CONTEXTUAL,
        origins=frozenset({Origin.PLAYBOOK}),
        match_patterns=_yml("{name}.yml"),
        expected_locations=_yml("playbooks/{name}.yml"),
    ),
    Rule(
        kind=EntityKind.GROUP,
        casing=_KEBAB,
        plurality=PluralityPolicy.PLURAL,
        origins=_ARTIFACT_ORIGINS,
        match_patterns=_GROUP_MATCH,
        expected_locations=("group_vars/{name}",),
        reserved_names=RESERVED_GROUPS,
    ),
    Rule(
        kind=EntityKind.SPECIFIC_GROUP,
        casing=_KEBAB,
        plurality=PluralityPolicy.PLURAL,
        origins=_ARTIFACT_ORIGINS,
        match_patterns=_GROUP_MATCH,
        expected_locations=("group_vars/{name}",),
    ),
    Rule(
        kind=EntityKind.HOST,
        casing=_KEBAB,
        plurality=PluralityPolicy.CONTEXTUAL,
        origins=_ARTIFACT_ORIGINS,
        match_patterns=("host_vars/{name}",),
        expected_locations=("host_vars/{name}",),
        label_separator=".",
    ),
    # ── Variables ────────────────────────────────────────────
    Rule(
        kind=EntityKind.ROLE_VAR,
        casing=_SNAKE,
        plurality=PluralityPolicy.CONTEXTUAL,
        origins=frozenset({Origin.DECLARATION}),
        match_patterns=(
            "roles/{scope}/defaults/**/*",
            "roles/{scope}/vars/**/*",
        ),
        expected_locations=_yml(
            "roles/{scope}/defaults/main.yml",
            "roles/{scope}/defaults/main/*.yml",
            "roles/{scope}/vars/main.yml",
            "roles/{scope}/vars/main/*.yml",
        ),
        prefix_pattern="{scope}_",
    ),
    Rule(
        kind=EntityKind.ROLE_FACT,
        casing=_SNAKE,
        plurality=PluralityPolicy.CONTEXTUAL,
        origins=frozenset({Origin.FACT}),
        match_patterns=(
            "roles/{scope}/tasks/**/*",
            "roles/{scope}/handlers/**/*",
        ),
        expected_locations=(
            "roles/{scope}/tasks/**/*",
            "roles/{scope}/handlers/**/*",
        ),
        prefix_pattern="{scope}_FACT_",
    ),
    Rule(
        kind=EntityKind.PLAYBOOK_FACT,
        casing=_SNAKE,
        plurality=PluralityPolicy.CONTEXTUAL,
        origins=frozenset({Origin.PLAY_FACT}),
        match_patterns=_yml("{scope}.yml"),
        expected_locations=_yml("playbooks/{scope}.yml"),
        prefix_pattern="{scope}_PLAYBOOK_",
    ),
    Rule(
        kind=EntityKind.GROUP_VAR,
        casing=_SNAKE,
        plurality=PluralityPolicy.CONTEXTUAL,
        origins=frozenset({Origin.DECLARATION}),
        match_patterns=_GROUP_VAR_MATCH,
        expected_locations=_GROUP_VAR_LOCATIONS,
        prefix_pattern="{scope}_GROUP_",
    ),
    Rule(
        kind=EntityKind.SPECIFIC_GROUP_VAR,
        casing=_SNAKE,
        plurality=PluralityPolicy.CONTEXTUAL,
        origins=frozenset({Origin.DECLARATION}),
        match_patterns=_GROUP_VAR_MATCH,
        expected_locations=_GROUP_VAR_LOCATIONS,
        prefix_pattern="{scope}_SPECIFIC_",
    ),
    Rule(
        kind=EntityKind.HOST_VAR,
        casing=_SNAKE,
        plurality=PluralityPolicy.CONTEXTUAL,
        origins=frozenset({Origin.DECLARATION}),
        match_patterns=("host_vars/{scope}/**/*",) + _yml("host_vars/{scope}.yml"),
        expected_locations=_yml(
            "host_vars/{scope}/vars.yml", "host_vars/{scope}/vault.yml",
        ),
        prefix_pattern="{scope}_HOST_",
    ),
)


class RuleTable:
    """Read-only mapping from entity kind to its rule.

    The table must cover every ``EntityKind`` exactly once; anything else is
    a programming error and raises at construction time.
    """

    def __init__(self, rules):
        table = {}
        for rule in rules:
            if not isinstance(rule.kind, EntityKind):
                raise UnknownKind(rule.kind)
            if rule.kind in table:
                raise ValueError(f"Duplicate rule for kind {rule.kind.value!r}")
            table[rule.kind] = rule
        for kind in EntityKind:
            if kind not in table:
                raise UnknownKind(kind.value)
        self._rules = {kind: table[kind] for kind in EntityKind}

    def rules_for(self, kind):
        """Return the rule for ``kind``; raise UnknownKind otherwise."""
        try:
            return self._rules[kind]
        except (KeyError, TypeError):
            raise UnknownKind(kind) from None

    def __iter__(self):
        return iter(self._rules.values())

    def __len__(self):
        return len(self._rules)


@functools.lru_cache(maxsize=1)
def load_rule_table():
    """Build the default rule table once and share it."""
    return RuleTable(DEFAULT_RULES)
