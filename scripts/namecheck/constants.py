"""Shared constants for the naming checker."""

import re

# Directories that define an entity namespace in an Ansible-style project
ROLES_DIR = "roles"
GROUP_VARS_DIR = "group_vars"
HOST_VARS_DIR = "host_vars"

# Mappings found under one of these directories declare variables
VARS_DIRS = frozenset({"defaults", "vars", GROUP_VARS_DIR, HOST_VARS_DIR})
ARTIFACT_PARENTS = frozenset({ROLES_DIR, GROUP_VARS_DIR, HOST_VARS_DIR})

YAML_SUFFIXES = (".yml", ".yaml")
SKIP_DIRS = frozenset({"__pycache__", "molecule", "node_modules", "venv"})

SET_FACT_MODULES = frozenset({
    "set_fact",
    "ansible.builtin.set_fact",
    "ansible.legacy.set_fact",
})
SET_FACT_OPTIONS = frozenset({"cacheable"})
TASK_BLOCK_KEYS = ("block", "rescue", "always")
REGISTER_KEY = "register"
LOOP_CONTROL_KEY = "loop_control"
LOOP_VAR_KEY = "loop_var"
PLAY_TASK_KEYS = ("pre_tasks", "tasks", "post_tasks", "handlers")
PLAY_KEYS = ("hosts", "import_playbook", "ansible.builtin.import_playbook")

# Role subdirectories scanned for variable references
ROLE_REFERENCE_DIRS = ("tasks", "handlers", "templates")
ROLE_DECLARATION_DIRS = ("defaults", "vars")
ROLE_FACT_DIRS = ("tasks", "handlers")
ARGUMENT_SPECS = ("meta", "argument_specs.yml")
README_NAMES = ("README.md", "README.rst", "README")

# First identifier of a Jinja ``{{ ... }}`` expression, and the rest of it
VAR_REF_RE = re.compile(r"\{\{-?\s*([A-Za-z_][A-Za-z0-9_]*)(.*?)-?\}\}", re.DOTALL)
# ``| default(...)`` or ``| d(...)`` makes a reference optional
DEFAULT_FILTER_RE = re.compile(r"\|\s*(?:default|d)\b")
WORD_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# Built-in inventory groups exempt from plurality
RESERVED_GROUPS = frozenset({"all", "ungrouped"})

# Plurality exceptions (suffix heuristic overrides)
DEFAULT_SINGULAR_WORDS = frozenset({
    "alias", "bus", "canvas", "consul", "dns", "gas", "kubernetes",
    "nexus", "postgres", "prometheus", "redis", "sass", "ssl", "tls",
})
DEFAULT_PLURAL_WORDS = frozenset({
    "children", "criteria", "feet", "geese", "men", "mice", "people",
    "teeth", "women",
})
DEFAULT_INVARIANT_WORDS = frozenset({
    "data", "firmware", "hardware", "info", "media", "metadata", "news",
    "series", "software", "species", "traffic",
})
SINGULAR_ENDINGS = ("ss", "us", "is")

# Leading group-name segments that mark a cluster-specific group
DEFAULT_CLUSTER_PREFIXES = frozenset({
    "demo", "dev", "preprod", "prod", "production", "qa", "sandbox",
    "stage", "staging", "test", "uat",
})
NUMBERED_CLUSTER_RE = re.compile(r"^[a-z]+[0-9]+$")

ENV_PREFIX = "NAMECHECK_"
