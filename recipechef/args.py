"""Command line options shared by every command."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from .config import DEFAULT_MAX_DEPTH, ConfigError, Extensions, _parse_flag_names

COLOR_CHOICES = ("auto", "always", "never")


@dataclass
class GlobalArgs:
    """Options that apply to every command."""

    units: list[Path] = field(default_factory=list)
    override_units: bool = False
    no_default_units: bool = False
    no_extensions: bool = False
    all_extensions: bool = False
    compat_extensions: bool = False
    extensions: list[Extensions] = field(default_factory=list)
    warnings_as_errors: bool = False
    ignore_warnings: bool = False
    color: str = "auto"
    path: Path | None = None
    no_recipe_ref_check: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    debug_trace: bool = False
    config_file: Path | None = None


def _extensions_arg(text: str) -> Extensions:
    try:
        return _parse_flag_names(text)
    except ConfigError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {text!r}")
    return value


def add_global_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Add the global options to *parser* and return it."""
    parser.add_argument(
        "--units", action="append", type=Path, default=None, help="A units TOML file"
    )
    parser.add_argument(
        "--override-units",
        action="store_true",
        help="Make the `units` arg remove the other file(s)",
    )
    parser.add_argument(
        "--no-default-units", action="store_true", help="Do not use the bundled units"
    )

    ext = parser.add_mutually_exclusive_group()
    ext.add_argument(
        "--no-extensions",
        "--no-default-extensions",
        dest="no_extensions",
        action="store_true",
        help="Disable all extensions",
    )
    ext.add_argument(
        "--all-extensions", action="store_true", help="Enable all extensions"
    )
    ext.add_argument(
        "--compat-extensions",
        "--compat",
        dest="compat_extensions",
        action="store_true",
        help="Enables a subset of the extensions",
    )
    ext.add_argument(
        "-e",
        "--extensions",
        action="append",
        type=_extensions_arg,
        default=None,
        help="Enable a set of extensions. Can be specified multiple times.",
    )

    warnings = parser.add_mutually_exclusive_group()
    warnings.add_argument(
        "--warnings-as-errors", action="store_true", help="Treat warnings as errors"
    )
    warnings.add_argument(
        "--ignore-warnings",
        action="store_true",
        help="Do not display warnings generated from parsing recipes",
    )

    parser.add_argument(
        "--color", choices=COLOR_CHOICES, default="auto", help="When to use colors"
    )
    parser.add_argument(
        "--path", type=Path, default=None, metavar="PATH", help="Change the base path"
    )
    parser.add_argument(
        "--no-recipe-ref-check",
        action="store_true",
        help="Skip checking if referenced recipes exist",
    )
    parser.add_argument(
        "--max-depth",
        type=_non_negative_int,
        default=DEFAULT_MAX_DEPTH,
        help="Override recipe indexing depth",
    )
    parser.add_argument("--debug-trace", action="store_true")
    parser.add_argument(
        "--config",
        dest="config_file",
        type=Path,
        default=None,
        help="Use a specific configuration file ignoring the expected path",
    )
    return parser


def global_args_from_namespace(namespace: argparse.Namespace | Any) -> GlobalArgs:
    """Collect the global options from a parsed namespace; missing ones take defaults."""
    defaults = GlobalArgs()
    values = {
        f.name: getattr(namespace, f.name, getattr(defaults, f.name))
        for f in fields(GlobalArgs)
    }
    values["units"] = [Path(p) for p in values["units"] or ()]
    values["extensions"] = list(values["extensions"] or ())
    for key in ("path", "config_file"):
        if values[key] is not None:
            values[key] = Path(values[key])
    return GlobalArgs(**values)