"""Repository scanner: walk a project tree and collect candidate entities.

The walk is read-only and deterministic (siblings in lexicographic order).
Directories or files that cannot be read become ScanWarnings; the walk
carries on with their siblings.
"""

import logging
import os
from pathlib import Path, PurePosixPath

from namecheck.constants import (
    ARTIFACT_PARENTS,
    GROUP_VARS_DIR,
    HOST_VARS_DIR,
    ROLES_DIR,
    SKIP_DIRS,
    VARS_DIRS,
    YAML_SUFFIXES,
)
from namecheck.errors import InvalidRoot
from namecheck.inventory import build_role_inventory
from namecheck.models import Entity, Location, Origin, ScanWarning
from namecheck.yaml_utils import (
    is_playbook,
    iter_play_facts,
    iter_set_facts,
    line_of,
    mapping_items,
    read_documents,
)

log = logging.getLogger(__name__)


def check_root(root):
    """Raise InvalidRoot unless ``root`` is a readable directory."""
    p = Path(root)
    if not p.exists():
        raise InvalidRoot(root, "does not exist")
    if not p.is_dir():
        raise InvalidRoot(root, "not a directory")
    if not os.access(p, os.R_OK | os.X_OK):
        raise InvalidRoot(root, "not readable")
    return p


def _skipped(name):
    return name.startswith(".") or name in SKIP_DIRS


class Scanner:
    """Lazily produce the entities of one project tree.

    ``entities()`` can be called again to rescan; each call resets
    ``warnings``.
    """

    def __init__(self, root):
        self.root = check_root(root)
        self.warnings = []
        self._warned = set()

    def entities(self):
        self.warnings = []
        self._warned = set()
        try:
            os.listdir(self.root)
        except OSError as e:
            raise InvalidRoot(
                str(self.root), f"cannot list directory: {e.strerror or e}",
            ) from None
        yield from self._walk(self.root, ())

    # ── Filesystem access ───────────────────────────────────

    def _warn(self, rel, reason):
        if rel in self._warned:
            return
        self._warned.add(rel)
        log.info("Scan warning for %s: %s", rel, reason)
        self.warnings.append(ScanWarning(rel, reason))

    def _list_dir(self, path, parts):
        try:
            with os.scandir(path) as it:
                return sorted(it, key=lambda e: e.name)
        except OSError as e:
            self._warn(
                "/".join(parts) or ".",
                f"cannot read directory: {e.strerror or e}",
            )
            return None

    def _kind_of(self, entry, parts):
        """Return "dir", "file" or None (skipped or unreadable).

        Directory symlinks are not followed; they become scan warnings so
        the subtree they hide is visible in the report.
        """
        rel = "/".join(parts)
        try:
            if entry.is_dir(follow_symlinks=False):
                return "dir"
            if entry.is_symlink() and entry.is_dir():
                self._warn(rel, "symlinked directory not followed")
                return None
            if entry.is_file():
                return "file"
        except OSError as e:
            self._warn(rel, f"cannot stat: {e.strerror or e}")
            return None
        log.debug("Skipping %s: not a regular file or directory", rel)
        return None

    def _iter_files(self, path, parts):
        """Yield ``(parts, path)`` for every file below ``path``."""
        entries = self._list_dir(path, parts)
        for entry in entries or ():
            if _skipped(entry.name):
                continue
            child = parts + (entry.name,)
            kind = self._kind_of(entry, child)
            if kind == "dir":
                yield from self._iter_files(entry.path, child)
            elif kind == "file":
                yield child, entry.path

    # ── Walk ────────────────────────────────────────────────

    def _walk(self, path, parts):
        for entry in self._list_dir(path, parts) or ():
            child = parts + (entry.name,)
            if _skipped(entry.name):
                log.debug("Skipping %s", "/".join(child))
                continue
            kind = self._kind_of(entry, child)
            if kind == "dir":
                yield from self._directory(entry, child)
                yield from self._walk(entry.path, child)
            elif kind == "file" and entry.name.endswith(YAML_SUFFIXES):
                yield from self._file(entry, child)

    def _directory(self, entry, parts):
        parent = parts[-2] if len(parts) > 1 else None
        if parent not in ARTIFACT_PARENTS:
            return
        inventory = None
        if parent == ROLES_DIR:
            inventory = self._role_inventory(entry.path, parts)
        yield Entity(
            name=entry.name,
            origin=Origin.DIRECTORY,
            location=Location("/".join(parts)),
            inventory=inventory,
        )

    def _role_inventory(self, path, parts):
        depth = len(parts)
        files = (
            ("/".join(child), child[depth:], fpath)
            for child, fpath in self._iter_files(path, parts)
        )
        return build_role_inventory(files, warn=self._warn)

    def _file(self, entry, parts):
        rel = "/".join(parts)
        stem = PurePosixPath(entry.name).stem
        parent = parts[-2] if len(parts) > 1 else None
        if parent in (GROUP_VARS_DIR, HOST_VARS_DIR):
            yield Entity(stem, Origin.VARS_FILE, Location(rel))

        in_vars_dir = any(p in VARS_DIRS for p in parts[:-1])
        seen_playbook = False
        for doc in read_documents(entry.path, rel, self._warn):
            if in_vars_dir:
                for key, key_node, _ in mapping_items(doc):
                    yield Entity(key, Origin.DECLARATION, Location(rel, line_of(key_node)))
            if is_playbook(doc):
                if not seen_playbook:
                    seen_playbook = True
                    yield Entity(stem, Origin.PLAYBOOK, Location(rel, line_of(doc)))
                for fact, line in iter_play_facts(doc):
                    yield Entity(fact, Origin.PLAY_FACT, Location(rel, line))
            else:
                for fact, line in iter_set_facts(doc):
                    yield Entity(fact, Origin.FACT, Location(rel, line))


def scan(root):
    """Scan ``root``; return ``(entities, warnings)``."""
    scanner = Scanner(root)
    entities = list(scanner.entities())
    return entities, list(scanner.warnings)
