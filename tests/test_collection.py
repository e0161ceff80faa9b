import sys

import platformdirs
import pytest

from recipechef.collection import (
    create_collection,
    new_collection,
    new_recipe,
    resolve_base_path,
    run_editor,
    set_collection,
    set_default_collection,
)
from recipechef.config import (
    CHEF_CONFIG_FILE,
    COOK_DIR,
    DEFAULT_CONFIG_FILE,
    ChefConfig,
    Config,
    chef_config_from_dict,
    config_file_path,
    global_load,
    global_store,
    read_config,
)


@pytest.fixture(autouse=True)
def global_dir(tmp_path, monkeypatch):
    directory = tmp_path / "global"
    monkeypatch.setattr(platformdirs, "user_config_dir", lambda *a, **k: str(directory))
    return directory


def _load_chef():
    return global_load(CHEF_CONFIG_FILE, chef_config_from_dict, ChefConfig())


def test_create_collection_makes_cook_dir(tmp_path):
    path = create_collection(tmp_path / "recipes")
    assert (path / COOK_DIR).is_dir()


def test_create_collection_non_empty_needs_force(tmp_path):
    target = tmp_path / "recipes"
    target.mkdir()
    (target / "soup.cook").write_text("x")
    with pytest.raises(FileExistsError):
        create_collection(target)
    create_collection(target, force=True)
    assert (target / COOK_DIR).is_dir()


def test_create_collection_on_file_fails(tmp_path):
    target = tmp_path / "file"
    target.write_text("x")
    with pytest.raises(NotADirectoryError):
        create_collection(target)


def test_new_collection_copy_config_writes_defaults(tmp_path):
    path = tmp_path / "recipes"
    new_collection(ChefConfig(), path, copy_config=True)
    assert config_file_path(path).is_file()
    assert read_config(config_file_path(path)) == Config()


def test_new_collection_copies_global_default(tmp_path):
    global_store(DEFAULT_CONFIG_FILE, Config(max_depth=3))
    path = tmp_path / "recipes"
    new_collection(ChefConfig(), path, copy_config=True)
    assert read_config(config_file_path(path)).max_depth == 3


def test_new_collection_set_default_stores(tmp_path):
    path = tmp_path / "recipes"
    result = new_collection(ChefConfig(), path, set_default=True)
    assert result.default_collection == path.resolve()
    assert _load_chef().default_collection == path.resolve()


def test_set_collection_requires_cook_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        set_collection(ChefConfig(), tmp_path)


def test_set_collection_requires_dir(tmp_path):
    with pytest.raises(NotADirectoryError):
        set_collection(ChefConfig(), tmp_path / "missing")


def test_set_then_unset_default(tmp_path):
    create_collection(tmp_path / "c")
    chef = set_collection(ChefConfig(editor_command=["vi"]), tmp_path / "c")
    assert _load_chef().default_collection == (tmp_path / "c").resolve()
    cleared = set_default_collection(chef, None)
    assert cleared.default_collection is None
    assert _load_chef() == ChefConfig(editor_command=["vi"])


def test_resolve_base_path_explicit(tmp_path):
    assert resolve_base_path(tmp_path, ChefConfig()) == tmp_path


def test_resolve_base_path_missing(tmp_path):
    with pytest.raises(NotADirectoryError):
        resolve_base_path(tmp_path / "nope", ChefConfig())


def test_resolve_base_path_uses_default_collection(tmp_path, monkeypatch):
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    default = tmp_path / "default"
    default.mkdir()
    assert resolve_base_path(None, ChefConfig(default_collection=default)) == default


def test_resolve_base_path_prefers_current_collection(tmp_path, monkeypatch):
    (tmp_path / COOK_DIR).mkdir()
    monkeypatch.chdir(tmp_path)
    other = tmp_path / "other"
    other.mkdir()
    result = resolve_base_path(None, ChefConfig(default_collection=other))
    assert result.resolve() == tmp_path.resolve()


def test_new_recipe_nested(tmp_path):
    path = new_recipe(tmp_path, "soups/tomato")
    assert path == tmp_path / "soups" / "tomato.cook"
    assert path.is_file()


def test_new_recipe_replaces_extension(tmp_path):
    assert new_recipe(tmp_path, "soup.txt") == tmp_path / "soup.cook"


@pytest.mark.parametrize("name", ["../escape", "/absolute", "./here", "a/../b", ""])
def test_new_recipe_invalid(tmp_path, name):
    with pytest.raises(ValueError):
        new_recipe(tmp_path, name)


def test_new_recipe_existing(tmp_path):
    new_recipe(tmp_path, "soup")
    with pytest.raises(FileExistsError):
        new_recipe(tmp_path, "soup")


def test_run_editor_passes_path(tmp_path):
    target = tmp_path / "r.cook"
    command = [sys.executable, "-c", "import sys; open(sys.argv[1], 'a').write('edited')"]
    assert run_editor(command, target) is True
    assert target.read_text() == "edited"


def test_run_editor_failure(tmp_path):
    assert run_editor([sys.executable, "-c", "raise SystemExit(3)"], tmp_path / "x") is False


def test_run_editor_empty_command(tmp_path):
    with pytest.raises(ValueError):
        run_editor([], tmp_path / "x")