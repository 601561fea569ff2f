"""YAML helpers for the scanner.

Files are composed, not constructed: PyYAML nodes keep their source marks
(so every variable gets a line number) and custom tags such as ``!vault``
never need a constructor.
"""

import re
import shlex

import yaml

from namecheck.constants import (
    LOOP_CONTROL_KEY,
    LOOP_VAR_KEY,
    PLAY_KEYS,
    PLAY_TASK_KEYS,
    REGISTER_KEY,
    SET_FACT_MODULES,
    SET_FACT_OPTIONS,
    TASK_BLOCK_KEYS,
    WORD_RE,
)

# Jinja blocks in a free-form argument string, blanked before splitting
_JINJA_RE = re.compile(r"\{\{.*?\}\}|\{%.*?%\}", re.DOTALL)


def compose_documents(path):
    """Return the root node of every non-empty document in ``path``."""
    with open(path, encoding="utf-8") as f:
        return [
            node for node in yaml.compose_all(f, Loader=yaml.SafeLoader)
            if node is not None
        ]


def line_of(node):
    return node.start_mark.line + 1


def mapping_items(node):
    """Yield ``(key, key_node, value_node)`` for scalar keys of a mapping."""
    if not isinstance(node, yaml.MappingNode):
        return
    for key_node, value_node in node.value:
        if isinstance(key_node, yaml.ScalarNode) and key_node.value != "<<":
            yield key_node.value, key_node, value_node


def _split_free_form(text):
    """Split ``a=1 b="x y"`` like a shell, keeping Jinja blocks whole."""
    text = _JINJA_RE.sub("J", text)
    try:
        return shlex.split(text)
    except ValueError:
        # unbalanced quotes
        return text.split()


def _free_form_facts(node):
    """Keys of a free-form ``set_fact: a=1 b={{ x }}``."""
    for word in _split_free_form(str(node.value)):
        key, sep, _ = word.partition("=")
        if sep and WORD_RE.fullmatch(key) and key not in SET_FACT_OPTIONS:
            yield key, line_of(node)


def iter_tasks(tasks):
    """Yield every task mapping of a task list, descending into blocks."""
    if not isinstance(tasks, yaml.SequenceNode):
        return
    for task in tasks.value:
        if not isinstance(task, yaml.MappingNode):
            continue
        yield task
        for key, _, value in mapping_items(task):
            if key in TASK_BLOCK_KEYS:
                yield from iter_tasks(value)


def iter_set_facts(tasks):
    """Yield ``(fact, line)`` for every set_fact key in a task list."""
    for task in iter_tasks(tasks):
        for key, _, value in mapping_items(task):
            if key not in SET_FACT_MODULES:
                continue
            if isinstance(value, yaml.ScalarNode):
                yield from _free_form_facts(value)
            for fact, fact_node, _ in mapping_items(value):
                if fact not in SET_FACT_OPTIONS:
                    yield fact, line_of(fact_node)


def _scalar_value(node, key):
    for name, _, value in mapping_items(node):
        if name == key and isinstance(value, yaml.ScalarNode) and value.value:
            return value
    return None


def iter_registers(tasks):
    """Yield ``(name, line)`` for every ``register:`` in a task list."""
    for task in iter_tasks(tasks):
        value = _scalar_value(task, REGISTER_KEY)
        if value is not None:
            yield value.value, line_of(value)


def iter_loop_vars(tasks):
    """Yield ``(name, line)`` for every ``loop_control.loop_var``."""
    for task in iter_tasks(tasks):
        for key, _, control in mapping_items(task):
            if key != LOOP_CONTROL_KEY:
                continue
            value = _scalar_value(control, LOOP_VAR_KEY)
            if value is not None:
                yield value.value, line_of(value)


def is_play(node):
    return any(key in PLAY_KEYS for key, _, _ in mapping_items(node))


def is_playbook(node):
    """A playbook document is a non-empty list made only of plays."""
    return (
        isinstance(node, yaml.SequenceNode)
        and bool(node.value)
        and all(is_play(item) for item in node.value)
    )


def iter_play_facts(playbook):
    """Yield ``(fact, line)`` for set_fact keys in every play's task lists."""
    for play in playbook.value:
        for key, _, value in mapping_items(play):
            if key in PLAY_TASK_KEYS:
                yield from iter_set_facts(value)


def argument_spec_options(data):
    """Option names declared in a role's ``meta/argument_specs.yml``."""
    names = set()
    specs = data.get("argument_specs") if isinstance(data, dict) else None
    if not isinstance(specs, dict):
        return names
    for entry in specs.values():
        options = entry.get("options") if isinstance(entry, dict) else None
        if isinstance(options, dict):
            names.update(options)
    return names


def describe_error(error):
    if isinstance(error, yaml.MarkedYAMLError) and error.problem_mark:
        problem = error.problem or error.context or "parse error"
        return f"{problem} (line {error.problem_mark.line + 1})"
    return str(error).splitlines()[0] if str(error) else type(error).__name__


def read_documents(path, rel, warn):
    """Compose ``path``, reporting unreadable or invalid files to ``warn``."""
    try:
        return compose_documents(path)
    except UnicodeDecodeError:
        warn(rel, "cannot read file: not UTF-8 text")
    except OSError as e:
        warn(rel, f"cannot read file: {e.strerror or e}")
    except yaml.YAMLError as e:
        warn(rel, f"invalid YAML: {describe_error(e)}")
    return []
