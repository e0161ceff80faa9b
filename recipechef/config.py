"""Collection and global configuration: extensions, units, aisle and editor settings."""

from __future__ import annotations

import enum
import functools
import operator
import os
import shlex
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

import platformdirs
import tomli_w

COOK_DIR = ".cooklang"
APP_NAME = "cooklang-chef"

CONFIG_FILE = "config.toml"
AUTO_AISLE = "aisle.conf"
AUTO_UNITS = "units.toml"
DEFAULT_CONFIG_FILE = "default-config.toml"
CHEF_CONFIG_FILE = "chef-config.toml"

DEFAULT_MAX_DEPTH = 10

_EXPECTING = (
    'one of "all", "none" or map with extension names to booleans, missing keys false'
)

T = TypeVar("T")


class ConfigError(ValueError):
    """Raised when configuration cannot be read, parsed or stored."""


class Extensions(enum.Flag):
    """Optional syntax extensions of the recipe language."""

    COMPONENT_MODIFIERS = 1 << 1
    COMPONENT_ALIAS = 1 << 3
    ADVANCED_UNITS = 1 << 5
    MODES = 1 << 6
    INLINE_QUANTITIES = 1 << 7
    RANGE_VALUES = 1 << 9
    TIMER_REQUIRES_TIME = 1 << 10
    INTERMEDIATE_PREPARATIONS = 1 << 11

    COMPAT = (
        COMPONENT_MODIFIERS
        | COMPONENT_ALIAS
        | ADVANCED_UNITS
        | MODES
        | RANGE_VALUES
        | INTERMEDIATE_PREPARATIONS
    )

    def to_toml(self) -> str | dict[str, bool]:
        """The TOML form: ``"all"``, ``"none"`` or a table of flag names to booleans."""
        if self == ALL_EXTENSIONS:
            return "all"
        if not self:
            return "none"
        return {member.name: member in self for member in Extensions}


ALL_EXTENSIONS = functools.reduce(operator.or_, Extensions)
NO_EXTENSIONS = Extensions(0)


def _parse_flag_names(text: str) -> Extensions:
    """Parse ``NAME | NAME | 0xBITS`` flag text."""
    text = text.strip()
    result = NO_EXTENSIONS
    if not text:
        return result
    for part in text.split("|"):
        part = part.strip()
        if not part:
            raise ConfigError("encountered empty flag")
        if part.startswith("0x"):
            try:
                bits = int(part[2:], 16)
            except ValueError:
                raise ConfigError(f"invalid hex flag: {part!r}") from None
            if bits & ~ALL_EXTENSIONS.value:
                raise ConfigError(f"unknown flag bits: {part!r}")
            result |= Extensions(bits)
            continue
        member = Extensions.__members__.get(part)
        if member is None:
            raise ConfigError(f"unrecognized named flag: {part!r}")
        result |= member
    return result


def parse_extensions(value: Any) -> Extensions:
    """Read extensions from ``"all"``, ``"none"``, flag text or a name-to-bool table."""
    if isinstance(value, Extensions):
        return value
    if isinstance(value, str):
        if value == "all":
            return ALL_EXTENSIONS
        if value in ("none", "empty"):
            return NO_EXTENSIONS
        try:
            return _parse_flag_names(value)
        except ConfigError:
            raise ConfigError("invalid extensions string") from None
    if isinstance(value, Mapping):
        result = NO_EXTENSIONS
        for name, enabled in value.items():
            if not isinstance(name, str) or not isinstance(enabled, bool):
                raise ConfigError(f"expected {_EXPECTING}")
            member = Extensions.__members__.get(name.replace(" ", "_").upper())
            if member is None:
                raise ConfigError("Unknown extension name")
            if enabled:
                result |= member
        return result
    raise ConfigError(f"expected {_EXPECTING}")


def _get_bool(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a boolean")
    return value


def _get_table(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{key}' must be a table")
    return value


def _get_optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    return value


def _get_str_list(data: Mapping[str, Any], key: str) -> list[str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return list(value)


@dataclass
class ChefConfig:
    """Settings shared by every collection."""

    default_collection: Path | None = None
    editor_command: list[str] | None = None

    def editor(self) -> list[str]:
        """The editor command line, from the config, ``VISUAL``/``EDITOR`` or a fallback."""
        if self.editor_command is not None:
            if not self.editor_command:
                raise ConfigError(
                    "Invalid custom editor command in global config. Fix it please."
                )
            return list(self.editor_command)

        fallback = "code.cmd -n -w" if os.name == "nt" else "nano"
        editor = next(
            (v for v in (os.environ.get(n) for n in ("VISUAL", "EDITOR")) if v),
            fallback,
        )
        try:
            return shlex.split(editor)
        except ValueError as exc:
            raise ConfigError(f"Invalid editor command {editor!r}: {exc}") from exc

    def to_toml_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.default_collection is not None:
            data["default_collection"] = str(self.default_collection)
        if self.editor_command is not None:
            data["editor_command"] = list(self.editor_command)
        return data


def chef_config_from_dict(data: Mapping[str, Any]) -> ChefConfig:
    """Build a :class:`ChefConfig` from parsed TOML data."""
    if not isinstance(data, Mapping):
        raise ConfigError("chef config must be a table")
    collection = _get_optional_str(data, "default_collection")
    return ChefConfig(
        default_collection=Path(collection) if collection is not None else None,
        editor_command=_get_str_list(data, "editor_command"),
    )


@dataclass
class TagProps:
    """Display properties of one tag."""

    emoji: str | None = None


@dataclass
class UiConfig:
    """Web UI settings."""

    tags: dict[str, TagProps] = field(default_factory=dict)

    def _is_empty(self) -> bool:
        return not self.tags


@dataclass
class Load:
    """Extra files to load: units files and an aisle file."""

    units: list[Path] = field(default_factory=list)
    aisle: Path | None = None

    def _is_empty(self) -> bool:
        return not self.units and self.aisle is None


def _load_from_dict(data: Mapping[str, Any]) -> Load:
    units = _get_str_list(data, "units") or []
    aisle = _get_optional_str(data, "aisle")
    return Load(
        units=[Path(u) for u in units],
        aisle=Path(aisle) if aisle is not None else None,
    )


def _ui_from_dict(data: Any) -> UiConfig:
    if not isinstance(data, Mapping):
        raise ConfigError("'ui' must be a table")
    if "tags" not in data:
        raise ConfigError("missing field 'tags' in 'ui'")
    tags = _get_table(data, "tags")
    result: dict[str, TagProps] = {}
    for name, props in tags.items():
        if not isinstance(props, Mapping):
            raise ConfigError(f"tag '{name}' must be a table")
        result[name] = TagProps(emoji=_get_optional_str(props, "emoji"))
    return UiConfig(tags=result)


@dataclass
class Config:
    """Configuration of one recipe collection."""

    default_units: bool = True
    warnings_as_errors: bool = False
    recipe_ref_check: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    extensions: Extensions = ALL_EXTENSIONS
    load: Load = field(default_factory=Load)
    ui: UiConfig = field(default_factory=UiConfig)
    export: dict[str, Any] = field(default_factory=dict)

    def to_toml_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "default_units": self.default_units,
            "warnings_as_errors": self.warnings_as_errors,
            "recipe_ref_check": self.recipe_ref_check,
            "max_depth": self.max_depth,
            "extensions": self.extensions.to_toml(),
        }
        if not self.load._is_empty():
            load: dict[str, Any] = {}
            if self.load.units:
                load["units"] = [str(u) for u in self.load.units]
            if self.load.aisle is not None:
                load["aisle"] = str(self.load.aisle)
            data["load"] = load
        if not self.ui._is_empty():
            data["ui"] = {
                "tags": {
                    name: ({"emoji": props.emoji} if props.emoji is not None else {})
                    for name, props in self.ui.tags.items()
                }
            }
        if self.export:
            data["export"] = dict(self.export)
        return data

    def override_with_args(self, args: Any) -> None:
        """Apply the global command line options on top of this config."""
        if args.no_default_units:
            self.default_units = False
        if args.no_extensions:
            self.extensions = NO_EXTENSIONS
        elif args.all_extensions:
            self.extensions = ALL_EXTENSIONS
        elif args.compat_extensions:
            self.extensions = Extensions.COMPAT
        elif args.extensions:
            self.extensions = functools.reduce(operator.or_, args.extensions)
        if args.no_recipe_ref_check:
            self.recipe_ref_check = False
        if args.warnings_as_errors:
            self.warnings_as_errors = True
        self.max_depth = args.max_depth
        if args.units:
            new_units = []
            for unit in args.units:
                try:
                    new_units.append(Path(unit).resolve(strict=True))
                except OSError:
                    continue
            if args.override_units:
                self.load.units = new_units
            else:
                self.load.units.extend(new_units)

    def aisle(self, base_path: Path | str) -> Path | None:
        """The aisle file to use: configured, in the collection, or global."""
        base_path = Path(base_path)
        if self.load.aisle is not None:
            return resolve_path(base_path, self.load.aisle)
        auto = base_path / COOK_DIR / AUTO_AISLE
        if auto.is_file():
            return auto
        global_file = global_file_path(AUTO_AISLE)
        if global_file.is_file():
            return global_file
        return None

    def units(self, base_path: Path | str) -> list[Path]:
        """The units files to load: configured, in the collection, or global."""
        base_path = Path(base_path)
        if not self.load._is_empty():
            return [resolve_path(base_path, p) for p in self.load.units]
        auto = base_path / COOK_DIR / AUTO_UNITS
        if auto.is_file():
            return [auto]
        global_file = global_file_path(AUTO_UNITS)
        if global_file.is_file():
            return [global_file]
        return []


def config_from_dict(data: Mapping[str, Any]) -> Config:
    """Build a :class:`Config` from parsed TOML data; missing keys take defaults."""
    if not isinstance(data, Mapping):
        raise ConfigError("config must be a table")
    defaults = Config()
    max_depth = data.get("max_depth", defaults.max_depth)
    if not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 0:
        raise ConfigError("'max_depth' must be a non-negative integer")
    return Config(
        default_units=_get_bool(data, "default_units", defaults.default_units),
        warnings_as_errors=_get_bool(data, "warnings_as_errors", defaults.warnings_as_errors),
        recipe_ref_check=_get_bool(data, "recipe_ref_check", defaults.recipe_ref_check),
        max_depth=max_depth,
        extensions=(
            parse_extensions(data["extensions"]) if "extensions" in data else ALL_EXTENSIONS
        ),
        load=_load_from_dict(_get_table(data, "load")),
        ui=_ui_from_dict(data["ui"]) if "ui" in data else UiConfig(),
        export=dict(_get_table(data, "export")),
    )


def default_config() -> Config:
    """The global default config, created on first use."""
    try:
        return global_load(DEFAULT_CONFIG_FILE, config_from_dict, Config())
    except ConfigError as exc:
        raise ConfigError(f"Error loading default global config file: {exc}") from exc


def read_config(path: Path | str) -> Config:
    """Read the config at *path*, or the global default when it is not a file."""
    path = Path(path)
    if not path.is_file():
        return default_config()
    content = path.read_text(encoding="utf-8")
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Bad TOML data in {path}: {exc}") from exc
    return config_from_dict(data)


def resolve_path(base_path: Path | str, path: Path | str) -> Path:
    """Absolute paths stay; relative ones are taken from the collection config dir."""
    path = Path(path)
    if path.is_absolute():
        return path
    return Path(base_path) / COOK_DIR / path


def config_file_path(base_path: Path | str) -> Path:
    """Where the config of the collection at *base_path* lives."""
    return Path(base_path) / COOK_DIR / CONFIG_FILE


def global_file_path(name: str) -> Path:
    """Path of a file in the user's configuration directory."""
    return Path(platformdirs.user_config_dir(APP_NAME, appauthor=False)) / name


def _to_toml_data(data: Any) -> dict[str, Any]:
    to_dict = getattr(data, "to_toml_dict", None)
    if to_dict is not None:
        return to_dict()
    return dict(data)


def global_load(name: str, loader: Callable[[Mapping[str, Any]], T], default: T) -> T:
    """Load a global file with *loader*; store and return *default* when missing."""
    path = global_file_path(name)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        store_at_path(path, default)
        return default
    except OSError as exc:
        raise ConfigError(f"Failed to load config file {path}: {exc}") from exc
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Bad TOML data in {path}: {exc}") from exc
    return loader(data)


def global_store(name: str, data: Any) -> None:
    """Store *data* in the global configuration file *name*."""
    store_at_path(global_file_path(name), data)


def store_at_path(path: Path | str, data: Any) -> None:
    """Write *data* as TOML at *path*, creating parent directories."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"Failed to create config directory: {exc}") from exc
    path.write_text(tomli_w.dumps(_to_toml_data(data)), encoding="utf-8")