import json

from backend.engine import Operation
from backend.storage import STATE_FILE_ENV, default_state_path, load_engine, save_engine


def test_missing_file_gives_fresh_engine(tmp_path):
    engine = load_engine(tmp_path / "nope.json")
    assert (engine.total, engine.current, engine.history) == (0.0, 0.0, ())


def test_save_creates_parent_directories(engine, tmp_path):
    path = tmp_path / "nested" / "dir" / "state.json"
    assert save_engine(engine, path) == path
    assert json.loads(path.read_text(encoding="utf-8")) == {"version": 1}


def test_round_trip_resets_registers(engine, tmp_path):
    engine.operate(Operation.ADD, 3.0)
    engine.operate(Operation.APPEND, 7.0)
    path = save_engine(engine, tmp_path / "state.json")

    restored = load_engine(path)
    assert (restored.total, restored.current, restored.history) == (0.0, 0.0, ())


def test_corrupt_file_gives_fresh_engine(tmp_path, caplog):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    engine = load_engine(path)
    assert engine.history == ()
    assert "Could not read saved state" in caplog.text


def test_newer_snapshot_is_ignored(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"version": 2, "theme": "light"}), encoding="utf-8")
    assert load_engine(path).history == ()


def test_default_path_honours_environment(tmp_path, monkeypatch):
    target = tmp_path / "custom.json"
    monkeypatch.setenv(STATE_FILE_ENV, str(target))
    assert default_state_path() == target


def test_default_path_without_environment(monkeypatch):
    monkeypatch.delenv(STATE_FILE_ENV, raising=False)
    path = default_state_path()
    assert path.name == "state.json"
    assert path.parent.name == ".calculator"


def test_load_and_save_use_default_path(engine, tmp_path, monkeypatch):
    monkeypatch.setenv(STATE_FILE_ENV, str(tmp_path / "env.json"))
    written = save_engine(engine)
    assert written == tmp_path / "env.json"
    assert load_engine().history == ()
