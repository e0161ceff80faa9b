"""Recipe collections: creating them, choosing the default one, new recipes and editing."""

from __future__ import annotations

import dataclasses
import logging
import os
import re
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from .config import (
    CHEF_CONFIG_FILE,
    COOK_DIR,
    DEFAULT_CONFIG_FILE,
    ChefConfig,
    Config,
    config_file_path,
    global_file_path,
    global_store,
    store_at_path,
)

log = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\\/]" if os.sep == "\\" else r"/")


def create_collection(path: Path | str, force: bool = False) -> Path:
    """Create a collection at *path*: the directory and its config dir."""
    path = Path(path)
    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Path exists and it's not a dir: {path}")
        if not force and any(path.iterdir()):
            raise FileExistsError(f"Path exists and it's not empty: {path}")
    else:
        path.mkdir(parents=True)
    (path / COOK_DIR).mkdir(parents=True, exist_ok=True)
    return path


def set_default_collection(chef_config: ChefConfig, path: Path | str | None) -> ChefConfig:
    """Store *path* (or no path) as the default collection and return the new config."""
    collection = Path(path).resolve(strict=True) if path is not None else None
    updated = dataclasses.replace(chef_config, default_collection=collection)
    global_store(CHEF_CONFIG_FILE, updated)
    return updated


def new_collection(
    chef_config: ChefConfig,
    path: Path | str,
    copy_config: bool = False,
    set_default: bool = False,
    force: bool = False,
) -> ChefConfig:
    """Create a collection, optionally with a config file and as the default one."""
    path = create_collection(path, force)
    if copy_config:
        config = config_file_path(path)
        default = global_file_path(DEFAULT_CONFIG_FILE)
        if default.is_file():
            try:
                shutil.copyfile(default, config)
            except OSError as exc:
                raise OSError(f"Failed to copy default config file: {exc}") from exc
        else:
            store_at_path(config, Config())
    if set_default:
        return set_default_collection(chef_config, path)
    return chef_config


def set_collection(chef_config: ChefConfig, path: Path | str | None = None) -> ChefConfig:
    """Make an existing collection (the current directory by default) the default one."""
    path = Path(path) if path is not None else Path.cwd()
    if not path.is_dir():
        raise NotADirectoryError(f"The path is not a dir: {path}")
    if not (path / COOK_DIR).is_dir():
        raise FileNotFoundError(f"The '{COOK_DIR}' dir was not found in the path: {path}")
    return set_default_collection(chef_config, path)


def resolve_base_path(path: Path | str | None, chef_config: ChefConfig) -> Path:
    """The collection to work in: given, the current one, the default one or ``.``."""
    if path is not None:
        base = Path(path)
    elif Path(COOK_DIR).is_dir():
        base = Path(".")
    elif chef_config.default_collection is not None:
        base = Path(chef_config.default_collection)
    else:
        base = Path(".")
    if not base.is_dir():
        raise NotADirectoryError(f"Base path is not a directory: '{base}'")
    return base


def _is_plain_relative(name: str) -> bool:
    if not name or Path(name).is_absolute() or Path(name).anchor:
        return False
    segments = _SEPARATORS.split(name)
    if segments[0] == ".":
        return False
    named = [s for s in segments if s and s != "."]
    return bool(named) and ".." not in named and segments[0] != ""


def _with_cook_extension(name: str) -> Path:
    file = Path(name)
    if file.suffix:
        return file.with_suffix(".cook")
    return file.with_name(file.name + ".cook")


def new_recipe(base_path: Path | str, name: str) -> Path:
    """Create an empty recipe file for *name* (``/`` splits directories) and return its path."""
    if not _is_plain_relative(name):
        raise ValueError(f"Invalid name: {name}")
    path = Path(base_path) / _with_cook_extension(name)
    if path.is_file():
        raise FileExistsError(f"File already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
    return path


def run_editor(command: Sequence[str], path: Path | str) -> bool:
    """Open *path* with the editor *command* and wait; tell whether it exited cleanly."""
    if not command:
        raise ValueError("empty editor command")
    completed = subprocess.run([*command, str(path)], check=False)
    ok = completed.returncode == 0
    if not ok:
        log.warning("Editor didn't exit successfully")
    return ok