import pytest

from innomatch.core.env import find_project_root, get_project_root, resolve_project_path


@pytest.fixture
def fresh_root():
    get_project_root.cache_clear()
    yield
    get_project_root.cache_clear()


def test_project_root_override_drives_relative_paths(monkeypatch, tmp_path, fresh_root):
    monkeypatch.setenv("INNOMATCH_PROJECT_ROOT", str(tmp_path))

    assert get_project_root() == tmp_path.resolve()
    assert resolve_project_path("data/catalogs/profiles.json") == tmp_path.resolve() / "data/catalogs/profiles.json"


def test_absolute_paths_are_left_alone(monkeypatch, tmp_path, fresh_root):
    monkeypatch.setenv("INNOMATCH_PROJECT_ROOT", str(tmp_path / "elsewhere"))
    assert resolve_project_path(tmp_path / "ledger") == tmp_path / "ledger"


def test_find_project_root_walks_up_to_marker(tmp_path):
    (tmp_path / ".git").mkdir()
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_project_root(nested) == tmp_path.resolve()
