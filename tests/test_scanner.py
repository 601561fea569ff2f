"""Tests for the repository scanner."""

import os

import pytest
from conftest import write_tree
from namecheck.errors import InvalidRoot
from namecheck.models import Location, Origin, ScanWarning
from namecheck.scanner import Scanner, check_root, scan


def _names(entities, origin=None):
    return [e.name for e in entities if origin is None or e.origin is origin]


def _by_name(entities, name):
    return next(e for e in entities if e.name == name)


# ── Root checks ─────────────────────────────────────────────


class TestRoot:
    def test_missing_root(self, tmp_path):
        with pytest.raises(InvalidRoot, match="does not exist"):
            Scanner(tmp_path / "nope")

    def test_file_root(self, tmp_path):
        f = tmp_path / "site.yml"
        f.write_text("- hosts: all\n")
        with pytest.raises(InvalidRoot, match="not a directory"):
            check_root(f)

    def test_invalid_root_is_value_error(self, tmp_path):
        with pytest.raises(ValueError):
            scan(tmp_path / "nope")

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="root ignores directory permissions",
    )
    def test_unreadable_root(self, tmp_path):
        root = tmp_path / "locked"
        root.mkdir()
        root.chmod(0)
        try:
            with pytest.raises(InvalidRoot, match="not readable"):
                Scanner(root)
        finally:
            root.chmod(0o755)

    def test_empty_root(self, tmp_path):
        entities, warnings = scan(tmp_path)
        assert entities == []
        assert warnings == []


# ── Artifacts ───────────────────────────────────────────────


class TestArtifacts:
    def test_role_directory(self, make_project):
        root = make_project({"roles/hail/tasks/main.yml": "- debug: msg=hi\n"})
        entities, _ = scan(root)
        role = _by_name(entities, "hail")
        assert role.origin is Origin.DIRECTORY
        assert role.location == Location("roles/hail")
        assert role.kind is None

    def test_role_gets_inventory(self, make_project):
        root = make_project({
            "roles/hail/defaults/main.yml": "hail_port: 80\n",
            "roles/hail/templates/hail.conf.j2": "port={{ hail_port }}\n",
        })
        entities, _ = scan(root)
        inventory = _by_name(entities, "hail").inventory
        assert inventory.declared == {"hail_port"}
        assert inventory.referenced == {"hail_port"}

    def test_group_and_host_directories(self, make_project):
        root = make_project({
            "group_vars/hailers/vars.yml": "hailers_GROUP_x: 1\n",
            "host_vars/web01.example.com/vars.yml": "web01_example_com_HOST_ip: 1\n",
        })
        entities, _ = scan(root)
        assert _names(entities, Origin.DIRECTORY) == ["hailers", "web01.example.com"]

    def test_flat_vars_file(self, make_project):
        root = make_project({"group_vars/hailers.yaml": "hailers_GROUP_x: 1\n"})
        entities, _ = scan(root)
        vars_file = _by_name(entities, "hailers")
        assert vars_file.origin is Origin.VARS_FILE
        assert vars_file.path == "group_vars/hailers.yaml"

    def test_playbook(self, make_project):
        root = make_project({
            "playbooks/site.yml": "- hosts: all\n  roles: [hail]\n",
            "requirements.yml": "- src: geerlingguy.docker\n",
        })
        entities, _ = scan(root)
        assert _names(entities, Origin.PLAYBOOK) == ["site"]
        assert _by_name(entities, "site").location == Location("playbooks/site.yml", 1)

    def test_playbook_reported_once(self, make_project):
        root = make_project({
            "site.yml": "- hosts: web\n---\n- hosts: db\n",
        })
        entities, _ = scan(root)
        assert _names(entities, Origin.PLAYBOOK) == ["site"]

    def test_import_playbook(self, make_project):
        root = make_project({
            "playbooks/all.yml": "- import_playbook: web.yml\n- import_playbook: db.yml\n",
        })
        entities, _ = scan(root)
        assert _names(entities, Origin.PLAYBOOK) == ["all"]


# ── Variables ───────────────────────────────────────────────


class TestVariables:
    def test_declarations_with_lines(self, make_project):
        root = make_project({
            "roles/hail/defaults/main.yml": "---\nhail_version: 1\nHailVersion: 2\n",
        })
        entities, _ = scan(root)
        declared = [e for e in entities if e.origin is Origin.DECLARATION]
        assert [(e.name, e.location.line) for e in declared] == [
            ("hail_version", 2),
            ("HailVersion", 3),
        ]
        assert declared[0].path == "roles/hail/defaults/main.yml"

    def test_merge_keys_skipped(self, make_project):
        root = make_project({
            "group_vars/hailers/vars.yml": (
                "hailers_GROUP_base: &base {a: 1}\n"
                "<<: *base\n"
            ),
        })
        entities, _ = scan(root)
        assert _names(entities, Origin.DECLARATION) == ["hailers_GROUP_base"]

    def test_vault_tag(self, make_project):
        root = make_project({
            "group_vars/all/vault.yml": (
                "all_GROUP_secret: !vault |\n"
                "  $ANSIBLE_VAULT;1.1;AES256\n"
                "  61626364\n"
            ),
        })
        entities, warnings = scan(root)
        assert "all_GROUP_secret" in _names(entities, Origin.DECLARATION)
        assert warnings == []

    def test_role_facts(self, make_project):
        root = make_project({
            "roles/hail/tasks/main.yml": (
                "- name: remember\n"
                "  set_fact:\n"
                "    hail_FACT_ready: true\n"
                "    cacheable: true\n"
                "- block:\n"
                "    - ansible.builtin.set_fact:\n"
                "        hail_FACT_nested: 1\n"
                "  rescue:\n"
                "    - set_fact: hail_FACT_a=1 hail_FACT_b={{ x }}\n"
            ),
        })
        entities, _ = scan(root)
        facts = [(e.name, e.location.line) for e in entities if e.origin is Origin.FACT]
        assert facts == [
            ("hail_FACT_ready", 3),
            ("hail_FACT_nested", 7),
            ("hail_FACT_a", 9),
            ("hail_FACT_b", 9),
        ]

    def test_free_form_quoting(self, make_project):
        """Quoted values and Jinja blocks in free-form set_fact hide no keys."""
        root = make_project({
            "roles/hail/tasks/main.yml": (
                "- set_fact: hail_FACT_a=\"x y=z\" hail_FACT_b={{ c | default('d=e') }}\n"
            ),
        })
        entities, _ = scan(root)
        assert _names(entities, Origin.FACT) == ["hail_FACT_a", "hail_FACT_b"]

    def test_play_facts(self, make_project):
        root = make_project({
            "playbooks/site.yml": (
                "- hosts: all\n"
                "  tasks:\n"
                "    - set_fact:\n"
                "        site_PLAYBOOK_x: 1\n"
            ),
        })
        entities, _ = scan(root)
        fact = _by_name(entities, "site_PLAYBOOK_x")
        assert fact.origin is Origin.PLAY_FACT
        assert fact.location == Location("playbooks/site.yml", 4)


# ── Walk behaviour ──────────────────────────────────────────


class TestWalk:
    def test_hidden_and_tool_dirs_skipped(self, make_project):
        root = make_project({
            ".git/roles/x/defaults/main.yml": "x: 1\n",
            "roles/hail/molecule/default/group_vars/all.yml": "foo: 1\n",
            "roles/hail/.cache/host_vars/h.yml": "foo: 1\n",
        })
        entities, _ = scan(root)
        assert _names(entities) == ["hail"]

    def test_non_yaml_ignored(self, make_project):
        root = make_project({
            "group_vars/hailers/notes.txt": "not: yaml\n",
            "group_vars/hailers/vars.yml": "hailers_GROUP_x: 1\n",
        })
        entities, _ = scan(root)
        assert _names(entities) == ["hailers", "hailers_GROUP_x"]

    def test_invalid_yaml_warns_and_continues(self, make_project):
        root = make_project({
            "group_vars/all/vars.yml": "key: [unclosed\n",
            "group_vars/web/vars.yml": "web_GROUP_x: 1\n",
        })
        entities, warnings = scan(root)
        assert [w.path for w in warnings] == ["group_vars/all/vars.yml"]
        assert warnings[0].reason.startswith("invalid YAML")
        assert "web_GROUP_x" in _names(entities)

    def test_non_utf8_file_warns(self, make_project):
        root = make_project({"group_vars/all": None})
        (root / "group_vars/all/vars.yml").write_bytes(b"\xff\xfe\x00bad")
        _, warnings = scan(root)
        assert warnings == [
            ScanWarning("group_vars/all/vars.yml", "cannot read file: not UTF-8 text"),
        ]

    def test_unreadable_directory(self, make_project, unreadable):
        root = make_project({
            "roles/broken/defaults/main.yml": "broken_x: 1\n",
            "roles/hail/defaults/main.yml": "hail_x: 1\n",
        })
        unreadable(root / "roles" / "broken")
        entities, warnings = scan(root)
        assert warnings == [
            ScanWarning("roles/broken", "cannot read directory: Permission denied"),
        ]
        assert "hail_x" in _names(entities)
        assert "broken_x" not in _names(entities)

    def test_symlinked_directory_warns(self, make_project, tmp_path):
        """A directory symlink is not followed but shows up as a warning."""
        root = make_project({"roles/hail/defaults/main.yml": "hail_x: 1\n"})
        target = write_tree(tmp_path / "elsewhere", {"defaults/main.yml": "oops: 1\n"})
        (root / "roles" / "Bad_Role").symlink_to(target, target_is_directory=True)
        entities, warnings = scan(root)
        assert warnings == [
            ScanWarning("roles/Bad_Role", "symlinked directory not followed"),
        ]
        assert "oops" not in _names(entities)
        assert "hail_x" in _names(entities)

    def test_symlinked_file_is_read(self, make_project, tmp_path):
        root = make_project({"group_vars/hailers": None})
        target = write_tree(tmp_path / "shared", {"vars.yml": "hailers_GROUP_x: 1\n"})
        (root / "group_vars/hailers/vars.yml").symlink_to(target / "vars.yml")
        entities, warnings = scan(root)
        assert "hailers_GROUP_x" in _names(entities)
        assert warnings == []

    def test_sibling_order(self, make_project):
        root = make_project({
            "roles/zeta/tasks/main.yml": "[]\n",
            "roles/alpha/tasks/main.yml": "[]\n",
            "roles/mid/tasks/main.yml": "[]\n",
        })
        entities, _ = scan(root)
        assert _names(entities) == ["alpha", "mid", "zeta"]

    def test_rescan_is_identical(self, make_project):
        root = make_project({
            "roles/hail/defaults/main.yml": "hail_x: 1\n",
            "group_vars/all/vars.yml": "bad: [\n",
        })
        scanner = Scanner(root)
        first = list(scanner.entities())
        first_warnings = list(scanner.warnings)
        second = list(scanner.entities())
        assert first == second
        assert scanner.warnings == first_warnings
