import pytest

from launchdb.cli import EXIT_NEGATIVE, EXIT_OK, EXIT_UNAVAILABLE, main


@pytest.fixture
def db_args(tmp_path, monkeypatch):
    monkeypatch.setenv("LAUNCHDB_PROBE_PATH", str(tmp_path))
    return ["--database", str(tmp_path / "cli" / "launch.db")]


def test_handle_then_list_and_exists(tmp_path, db_args, capsys):
    bundle = tmp_path / "Foo.app"
    bundle.mkdir()
    desktop = tmp_path / "Bar.desktop"
    desktop.write_text("MimeType=text/plain;\n", encoding="utf-8")

    assert main(db_args + ["handle", str(desktop), str(bundle)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "PRESENT" in out

    assert main(db_args + ["list"]) == EXIT_OK
    assert capsys.readouterr().out.splitlines() == [str(bundle), str(desktop)]

    assert main(db_args + ["exists", str(bundle)]) == EXIT_OK
    assert main(db_args + ["exists", str(tmp_path / "Other.app")]) == EXIT_NEGATIVE


def test_apps_for_and_can_open(tmp_path, db_args, capsys):
    desktop = tmp_path / "Bar.desktop"
    desktop.write_text("MimeType=text/plain;\n", encoding="utf-8")
    main(db_args + ["handle", str(desktop)])
    capsys.readouterr()

    assert main(db_args + ["can-open", str(desktop)]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "text/plain;"

    assert main(db_args + ["apps-for", "text/plain"]) == EXIT_OK
    assert capsys.readouterr().out.splitlines() == [str(desktop)]
    assert main(db_args + ["apps-for", "image/png"]) == EXIT_NEGATIVE


def test_vanished_path_and_clear(tmp_path, db_args, capsys):
    gone = tmp_path / "Gone.app"
    gone.mkdir()
    main(db_args + ["handle", str(gone)])
    gone.rmdir()
    main(db_args + ["handle", str(gone)])
    assert "VANISHED" in capsys.readouterr().out
    assert main(db_args + ["exists", str(gone)]) == EXIT_NEGATIVE

    keep = tmp_path / "Keep.app"
    keep.mkdir()
    main(db_args + ["handle", str(keep)])
    assert main(db_args + ["clear"]) == EXIT_OK
    capsys.readouterr()
    main(db_args + ["list"])
    assert capsys.readouterr().out == ""


def test_unavailable_store_exits_2(tmp_path, monkeypatch, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    monkeypatch.setenv("LAUNCHDB_PROBE_PATH", str(tmp_path))
    assert main(["--database", str(blocker / "launch.db"), "list"]) == EXIT_UNAVAILABLE
    assert "unavailable" in capsys.readouterr().err


def test_invalid_config_exits_2(tmp_path, capsys):
    cfg = tmp_path / "launchdb.yaml"
    cfg.write_text("colour: blue\n", encoding="utf-8")
    assert main(["--config", str(cfg), "list"]) == EXIT_UNAVAILABLE
    assert "invalid config" in capsys.readouterr().err
