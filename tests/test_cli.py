from __future__ import annotations

import pytest

from archpost import arch, cli, installer
from conftest import FakeQuery

BASE = {"base": {"packages": ["git", "ghost-pkg"]}}


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Fake pacman/yay presence, package database and installer."""

    class Env:
        tools = {"pacman", "yay"}
        query = FakeQuery(installed={"git"})
        installs = []
        rc = 0
        history = str(tmp_path / "history.log")

    e = Env()
    e.installs = []
    monkeypatch.setattr(arch.shutil, "which", lambda c: f"/usr/bin/{c}" if c in e.tools else None)
    monkeypatch.setattr(cli, "PacmanQuery", lambda: e.query)

    def fake_install(argv):
        e.installs.append(argv)
        return e.rc

    monkeypatch.setattr(installer, "run_install", fake_install)
    return e


def run(env, *argv):
    return cli.main(list(argv) + ["--history-log", env.history])


def test_unresolved_package_reported_without_aur(env, write_manifest, capsys):
    rc = run(env, "-f", write_manifest(BASE))
    out = capsys.readouterr().out
    assert rc == 0
    assert "Categories to process: base" in out
    assert "Processing category: base" in out
    assert "  Already installed: 1" in out
    assert "  Missing (no AUR): 1" in out
    assert "  Skipped: git" in out
    assert "  ghost-pkg" in out
    assert out.rstrip().endswith("Done.")
    assert env.installs == []


def test_aur_dry_run_plans_yay_and_installs_nothing(env, write_manifest, capsys):
    rc = run(env, "-f", write_manifest(BASE), "--aur", "--dry-run", "--no-confirm")
    out = capsys.readouterr().out
    assert rc == 0
    assert "  AUR (yay) install: 1" in out
    assert "  Missing (no AUR): 0" in out
    assert "[DRY-RUN] yay -S --needed --noconfirm ghost-pkg" in out
    assert env.installs == []


def test_real_install_batches_repo_packages(env, write_manifest, capsys):
    env.query = FakeQuery(repo={"git", "vim"})
    path = write_manifest({"a": {"packages": ["git"]}, "b": {"packages": ["vim", "git"]}})
    rc = run(env, "-f", path)
    assert rc == 0
    assert env.installs == [["pacman", "-S", "--needed", "git", "vim"]]


def test_installer_failure_sets_exit_code(env, write_manifest, capsys):
    env.query = FakeQuery(repo={"git"})
    env.rc = 1
    assert run(env, "-f", write_manifest(BASE)) == 1


def test_unknown_category_only(env, write_manifest, capsys):
    rc = run(env, "-f", write_manifest(BASE), "--categories", "missing_cat")
    out = capsys.readouterr().out
    assert rc == 0
    assert "  Skipping unknown category: missing_cat" in out
    for label in ("Already installed", "Repo (pacman) install", "AUR (yay) install", "Missing (no AUR)"):
        assert f"  {label}: 0" in out
    assert env.query.calls == []


def test_aur_requested_without_helper_degrades(env, write_manifest, capsys):
    env.tools = {"pacman"}
    rc = run(env, "-f", write_manifest(BASE), "--aur")
    out = capsys.readouterr().out
    assert rc == 0
    assert "Warning: --aur specified but 'yay' is not installed" in out
    assert "  Missing (no AUR): 1" in out
    assert env.installs == []


def test_missing_file_flag(env, capsys):
    assert run(env) == 1
    assert "JSON file not provided" in capsys.readouterr().out


def test_manifest_not_found(env, tmp_path, capsys):
    assert run(env, "-f", str(tmp_path / "nope.json")) == 1
    assert "not found" in capsys.readouterr().out


def test_pacman_missing(env, write_manifest, capsys):
    env.tools = set()
    assert run(env, "-f", write_manifest(BASE)) == 1
    assert "pacman not found" in capsys.readouterr().out


def test_malformed_manifest_aborts_before_lookups(env, write_manifest, capsys):
    assert run(env, "-f", write_manifest({"base": ["git"]})) == 1
    assert env.query.calls == []
    assert "Error:" in capsys.readouterr().out


def test_unknown_option_exits_1(env, capsys):
    with pytest.raises(SystemExit) as ei:
        cli.main(["--bogus"])
    assert ei.value.code == 1


def test_help_exits_0(env, capsys):
    with pytest.raises(SystemExit) as ei:
        cli.main(["-h"])
    assert ei.value.code == 0
    assert "--categories" in capsys.readouterr().out


def test_self_check(env, capsys):
    assert cli.main(["--self-check"]) == 0
    assert "yay: OK" in capsys.readouterr().out
    env.tools = set()
    assert cli.main(["--self-check"]) == 1


def test_review_declined_installs_nothing(env, write_manifest, monkeypatch, capsys):
    from archpost import ui_app

    env.query = FakeQuery(repo={"git", "ghost-pkg"})
    monkeypatch.setattr(ui_app.ReviewApp, "run", lambda self: False)
    rc = run(env, "-f", write_manifest(BASE), "--review")
    assert rc == 0
    assert "Aborted." in capsys.readouterr().out
    assert env.installs == []


def test_review_confirmed_installs(env, write_manifest, monkeypatch, capsys):
    from archpost import ui_app

    env.query = FakeQuery(repo={"git", "ghost-pkg"})
    monkeypatch.setattr(ui_app.ReviewApp, "run", lambda self: True)
    assert run(env, "-f", write_manifest(BASE), "--review") == 0
    assert env.installs == [["pacman", "-S", "--needed", "git", "ghost-pkg"]]


def test_non_utf8_manifest_is_an_error_line(env, tmp_path, capsys):
    p = tmp_path / "bad.json"
    p.write_bytes(b'{"base": {"packages": ["\xff"]}}')
    assert run(env, "-f", str(p)) == 1
    assert "not valid UTF-8" in capsys.readouterr().out
    assert env.query.calls == []


def test_default_categories_run_sorted(env, write_manifest, capsys):
    env.query = FakeQuery(repo={"a1", "z1"})
    path = write_manifest({"zeta": {"packages": ["z1"]}, "alpha": {"packages": ["a1"]}})
    run(env, "-f", path, "--dry-run")
    out = capsys.readouterr().out
    assert "Categories to process: alpha zeta" in out
    assert "[DRY-RUN] pacman -S --needed a1 z1" in out


def test_history_lists_recorded_runs(env, write_manifest, capsys):
    env.query = FakeQuery(repo={"git"})
    run(env, "-f", write_manifest(BASE))
    capsys.readouterr()
    assert run(env, "--history") == 0
    out = capsys.readouterr().out
    assert "install-repo" in out
    assert "rc=0" in out
    assert "pacman -S --needed git" in out


def test_history_empty(env, capsys):
    assert run(env, "--history") == 0
    assert "No history in" in capsys.readouterr().out
