"""Records flowing through the scan, classify, validate and report stages."""

from dataclasses import dataclass, field
from enum import Enum


class EntityKind(str, Enum):
    """Kind of a named artifact; variable kinds carry their scope subtype."""

    ROLE = "role"
    PLAYBOOK = "playbook"
    GROUP = "group"
    SPECIFIC_GROUP = "specific_group"
    HOST = "host"
    ROLE_VAR = "variable/role"
    ROLE_FACT = "variable/role_fact"
    PLAYBOOK_FACT = "variable/playbook_fact"
    GROUP_VAR = "variable/group"
    SPECIFIC_GROUP_VAR = "variable/specific_group"
    HOST_VAR = "variable/host"

    @property
    def is_variable(self):
        return self.value.startswith("variable/")


class Origin(str, Enum):
    """How the scanner found an entity."""

    DIRECTORY = "directory"
    VARS_FILE = "vars_file"
    PLAYBOOK = "playbook"
    DECLARATION = "declaration"
    FACT = "fact"
    PLAY_FACT = "play_fact"


class CasingPolicy(str, Enum):
    KEBAB = "kebab-case"
    SNAKE = "snake_case"


class PluralityPolicy(str, Enum):
    SINGULAR = "singular"
    PLURAL = "plural"
    CONTEXTUAL = "contextual"


class ReasonCode(str, Enum):
    BAD_CASING = "BadCasing"
    BAD_PLURALITY = "BadPlurality"
    MISSING_PREFIX = "MissingPrefix"
    WRONG_LOCATION = "WrongLocation"
    MISSING_REQUIRED_VARS_DOC = "MissingRequiredVarsDoc"


@dataclass(frozen=True, order=True)
class Location:
    path: str
    line: int = 0

    def __str__(self):
        return f"{self.path}:{self.line}" if self.line else self.path


@dataclass(frozen=True)
class RoleInventory:
    """Variables a role declares, sets, references and documents."""

    declared: frozenset = frozenset()
    facts: frozenset = frozenset()
    registered: frozenset = frozenset()
    referenced: frozenset = frozenset()
    documented: frozenset = frozenset()


@dataclass(frozen=True)
class Entity:
    """A named artifact under review.

    The scanner fills ``name``, ``origin`` and ``location``; the classifier
    returns a copy with ``kind``, ``scope`` and ``namespace_prefix`` set.
    """

    name: str
    origin: Origin
    location: Location
    kind: EntityKind | None = None
    scope: str | None = None
    namespace_prefix: str | None = None
    inventory: RoleInventory | None = field(default=None, compare=False)

    @property
    def private(self):
        return self.name.startswith("_")

    @property
    def path(self):
        return self.location.path


@dataclass(frozen=True)
class Rule:
    """Naming and location contract for one entity kind."""

    kind: EntityKind
    casing: CasingPolicy
    plurality: PluralityPolicy
    origins: frozenset
    match_patterns: tuple
    expected_locations: tuple
    prefix_pattern: str | None = None
    label_separator: str | None = None
    reserved_names: frozenset = frozenset()

    @property
    def marker(self):
        """Uppercase token of the prefix template, e.g. ``GROUP``."""
        if not self.prefix_pattern:
            return None
        tokens = [t for t in self.prefix_pattern.split("_") if t.isupper()]
        return tokens[0] if tokens else None


@dataclass(frozen=True)
class Violation:
    entity: Entity
    rule: Rule
    reason: ReasonCode
    message: str


@dataclass(frozen=True, order=True)
class ScanWarning:
    path: str
    reason: str


@dataclass(frozen=True)
class Ambiguity:
    """An entity matching several kinds with equal specificity."""

    entity: Entity
    candidates: tuple
