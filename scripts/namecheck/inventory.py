"""Role inventory: what a role declares, sets, references and documents.

Required variables are the role-prefixed names a role references in its
tasks, handlers or templates without declaring, setting or registering them
itself (``register``, ``loop_var``). References guarded by a ``default``
filter are optional. Required ones have to be documented in
``meta/argument_specs.yml`` or the README.
"""

import logging

import yaml

from namecheck.constants import (
    ARGUMENT_SPECS,
    DEFAULT_FILTER_RE,
    README_NAMES,
    ROLE_DECLARATION_DIRS,
    ROLE_FACT_DIRS,
    ROLE_REFERENCE_DIRS,
    VAR_REF_RE,
    WORD_RE,
    YAML_SUFFIXES,
)
from namecheck.models import RoleInventory
from namecheck.paths import to_snake
from namecheck.yaml_utils import (
    argument_spec_options,
    describe_error,
    iter_loop_vars,
    iter_registers,
    iter_set_facts,
    mapping_items,
    read_documents,
)

log = logging.getLogger(__name__)


def _read_text(path, rel, warn):
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError:
        log.debug("Skipping non-text file %s", rel)
    except OSError as e:
        warn(rel, f"cannot read file: {e.strerror or e}")
    return ""


def _references(text):
    """Names a template requires: ``{{ name }}`` without a default filter."""
    for name, rest in VAR_REF_RE.findall(text):
        if not DEFAULT_FILTER_RE.search(rest):
            yield name


def _argument_specs(path, rel, warn):
    try:
        with open(path, encoding="utf-8") as f:
            return argument_spec_options(yaml.safe_load(f))
    except (OSError, UnicodeDecodeError) as e:
        warn(rel, f"cannot read file: {e}")
    except yaml.YAMLError as e:
        warn(rel, f"invalid YAML: {describe_error(e)}")
    return set()


def build_role_inventory(role_files, *, warn):
    """Build a RoleInventory from one role's files.

    ``role_files`` yields ``(rel, parts, path)``: the project-relative path,
    the path segments inside the role directory and the filesystem path.
    """
    declared, facts, registered = set(), set(), set()
    referenced, documented = set(), set()
    for rel, parts, path in role_files:
        top = parts[0] if len(parts) > 1 else None
        is_yaml = parts[-1].endswith(YAML_SUFFIXES)
        if top in ROLE_DECLARATION_DIRS and is_yaml:
            for doc in read_documents(path, rel, warn):
                declared.update(key for key, _, _ in mapping_items(doc))
        if top in ROLE_FACT_DIRS and is_yaml:
            for doc in read_documents(path, rel, warn):
                facts.update(fact for fact, _ in iter_set_facts(doc))
                registered.update(name for name, _ in iter_registers(doc))
                registered.update(name for name, _ in iter_loop_vars(doc))
        if top in ROLE_REFERENCE_DIRS:
            referenced.update(_references(_read_text(path, rel, warn)))
        if tuple(parts) == ARGUMENT_SPECS:
            documented |= _argument_specs(path, rel, warn)
        if len(parts) == 1 and parts[0] in README_NAMES:
            documented.update(WORD_RE.findall(_read_text(path, rel, warn)))
    return RoleInventory(
        declared=frozenset(declared),
        facts=frozenset(facts),
        registered=frozenset(registered),
        referenced=frozenset(referenced),
        documented=frozenset(documented),
    )


def required_variables(role_name, inventory):
    """Role-prefixed variables the role uses but never defines."""
    prefix = to_snake(role_name) + "_"
    defined = inventory.declared | inventory.facts | inventory.registered
    return sorted(
        name for name in inventory.referenced
        if to_snake(name).startswith(prefix) and name not in defined
    )


def undocumented_variables(role_name, inventory):
    return [
        name for name in required_variables(role_name, inventory)
        if name not in inventory.documented
    ]
