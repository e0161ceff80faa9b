"""The ``chef`` command line: collections, configuration, new and edit."""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import TextIO

import tomli_w

from .args import GlobalArgs, add_global_arguments, global_args_from_namespace
from .collection import (
    new_collection,
    new_recipe,
    resolve_base_path,
    run_editor,
    set_collection,
    set_default_collection,
)
from .config import (
    CHEF_CONFIG_FILE,
    DEFAULT_CONFIG_FILE,
    ChefConfig,
    Config,
    ConfigError,
    chef_config_from_dict,
    config_file_path,
    global_file_path,
    global_load,
    read_config,
)

PROG = "chef"
FENCE = "+++"


def build_parser() -> argparse.ArgumentParser:
    """The argument parser of the command line."""
    parser = argparse.ArgumentParser(prog=PROG, description="Manage cooklang recipe collections")
    add_global_arguments(parser)
    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    config = commands.add_parser("config", help="See loaded configuration")
    config.add_argument(
        "--chef", action="store_true", help="Display the chef config, common to all collections"
    )

    collection = commands.add_parser("collection", help="Manage the recipe collection")
    actions = collection.add_subparsers(dest="action", required=True, metavar="ACTION")
    new = actions.add_parser("new", help="Create a new recipe collection")
    new.add_argument("new_path", type=Path, metavar="PATH")
    new.add_argument(
        "--copy-config",
        action="store_true",
        help="Copy the default config into the local `config.toml` file",
    )
    new.add_argument("--set-default", "--default", dest="set_default", action="store_true")
    new.add_argument(
        "--force",
        action="store_true",
        help="Forces the creation of the collection even if it's not empty",
    )
    set_cmd = actions.add_parser("set", help="Set the default collection")
    set_cmd.add_argument("default_path", type=Path, nargs="?", default=None, metavar="PATH")
    actions.add_parser("get", help="Get the default collection")
    actions.add_parser("unset", help="Removes the default collection")

    new_recipe_cmd = commands.add_parser("new", help="Create a new recipe")
    new_recipe_cmd.add_argument("name", help='Recipe name. Split directories with "/"')
    new_recipe_cmd.add_argument(
        "-E", "--no-edit", action="store_true", help="Skip opening the editor"
    )

    edit = commands.add_parser("edit", help="Edit an existing recipe")
    edit.add_argument("name", help="Recipe name")
    return parser


def _toml_text(data: dict) -> str:
    return tomli_w.dumps(data).strip()


def display_config(base_path: Path | str, config: Config, out: TextIO) -> None:
    """Write where the config comes from, the config itself and the files it loads."""
    base_path = Path(base_path)
    print(f"Recipes path: {base_path}", file=out)
    config_path = config_file_path(base_path)
    if not config_path.is_file():
        print(f"No config at: {config_path}", file=out)
        config_path = global_file_path(DEFAULT_CONFIG_FILE)
    print(f"Config: {config_path}", file=out)

    print(FENCE, file=out)
    print(_toml_text(config.to_toml_dict()), file=out)
    print(FENCE, file=out)

    aisle = config.aisle(base_path)
    files = [*config.units(base_path), *([aisle] if aisle is not None else [])]
    for file in files:
        state = "found" if file.is_file() else "not found"
        print(f"{file} -- {state}", file=out)


def display_chef_config(chef_config: ChefConfig, out: TextIO) -> None:
    """Write where the chef config lives and its content."""
    print(f"Chef config: {global_file_path(CHEF_CONFIG_FILE)}", file=out)
    print(FENCE, file=out)
    print(_toml_text(chef_config.to_toml_dict()), file=out)
    print(FENCE, file=out)


def _find_recipe(base_path: Path, name: str, max_depth: int) -> Path:
    query = name[: -len(".cook")] if name.endswith(".cook") else name
    direct = base_path / f"{query}.cook"
    if direct.is_file():
        return direct
    wanted = query.replace("\\", "/").strip("/").lower()
    for root, dirs, files in os.walk(base_path):
        rel = Path(root).relative_to(base_path)
        if len(rel.parts) < max_depth:
            dirs[:] = sorted(d for d in dirs if not d.startswith("."))
        else:
            dirs[:] = []
        for file in sorted(files):
            if not file.endswith(".cook"):
                continue
            stem = file[: -len(".cook")]
            if (rel / stem).as_posix().lower() == wanted or stem.lower() == wanted:
                return Path(root) / file
    raise FileNotFoundError(f"Recipe not found: {name}")


def _run(ns: argparse.Namespace, global_args: GlobalArgs) -> int:
    try:
        chef_config = global_load(CHEF_CONFIG_FILE, chef_config_from_dict, ChefConfig())
    except ConfigError as exc:
        raise ConfigError(f"Error loading global config file: {exc}") from exc

    base_path = resolve_base_path(global_args.path, chef_config)
    config_path = global_args.config_file or config_file_path(base_path)
    config = read_config(config_path)
    config.override_with_args(global_args)

    if ns.command == "config":
        if ns.chef:
            display_chef_config(chef_config, sys.stdout)
        else:
            display_config(base_path, config, sys.stdout)
    elif ns.command == "collection":
        if ns.action == "new":
            new_collection(
                chef_config, ns.new_path, ns.copy_config, ns.set_default, ns.force
            )
        elif ns.action == "set":
            set_collection(chef_config, ns.default_path)
        elif ns.action == "unset":
            set_default_collection(chef_config, None)
            print("Default collection removed", file=sys.stderr)
        elif chef_config.default_collection is not None:
            print(chef_config.default_collection)
        else:
            print("No default collection is set", file=sys.stderr)
    elif ns.command == "new":
        path = new_recipe(base_path, ns.name)
        if not ns.no_edit:
            run_editor(chef_config.editor(), path)
    elif ns.command == "edit":
        path = _find_recipe(base_path, ns.name, config.max_depth)
        run_editor(chef_config.editor(), path)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    ns = build_parser().parse_args(argv)
    global_args = global_args_from_namespace(ns)
    logging.basicConfig(
        level=logging.DEBUG if global_args.debug_trace else logging.WARNING,
        format="%(levelname)s %(message)s",
    )
    try:
        return _run(ns, global_args)
    except (ConfigError, OSError, ValueError, subprocess.SubprocessError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())