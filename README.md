# recipechef

Tools for keeping a collection of Cooklang recipes: a command line to manage
collections and their configuration, and a small library for validating
recipe tags, searching recipes with a compact query language and building a
recipe web server.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

The `recipechef` command works on a *collection*: a directory that holds a
`.cooklang` directory next to the recipes. The collection used is, in order,
the one given with `--path`, the current directory if it is a collection, the
default collection stored in the global settings, or the current directory.

```
recipechef --help
```

Commands:

```
recipechef collection new ~/Recipes --set-default   # create a collection and make it the default
recipechef collection new ~/Recipes --copy-config   # also write .cooklang/config.toml
recipechef collection set [PATH]                    # make an existing collection the default
recipechef collection get                           # show the default collection
recipechef collection unset                         # forget the default collection
recipechef config                                   # show the configuration in use
recipechef config --chef                            # show the global settings
recipechef new desserts/flan                        # create desserts/flan.cook and open the editor
recipechef new desserts/flan -E                     # create it without opening the editor
recipechef edit flan                                # open an existing recipe in the editor
```

`collection new` refuses a path that is a file, or a non-empty directory
unless `--force` is given. `new` refuses absolute names, names with `..`, and
recipes that already exist. `edit` looks for the recipe by its path relative
to the collection or by its file name, ignoring case, down to `--max-depth`
directory levels.

The editor is taken from the `editor_command` entry of the global settings,
then from the `VISUAL` or `EDITOR` environment variables, falling back to
`nano` (`code.cmd -n -w` on Windows).

Global options, accepted before the command: `--path`, `--config`,
`--units` (repeatable), `--override-units`, `--no-default-units`,
`--no-extensions`, `--all-extensions`, `--compat-extensions`,
`-e/--extensions` (repeatable, flag names joined with `|`),
`--warnings-as-errors`, `--ignore-warnings`, `--no-recipe-ref-check`,
`--max-depth` (default 10), `--color` and `--debug-trace`.

Errors are printed to standard error and the command exits with status 1.

## Configuration

A collection's configuration lives in `.cooklang/config.toml`. When a
collection has none, the global default configuration (`default-config.toml`)
is used and created on first use. Global files, including the settings file
`chef-config.toml`, are kept in the platform's user configuration directory.

```python
from recipechef.config import read_config, Extensions

config = read_config("Recipes/.cooklang/config.toml")
config.max_depth                 # 10 unless configured
Extensions.COMPAT in config.extensions
config.units("Recipes")          # units files to load
config.aisle("Recipes")          # aisle file to use, or None
```

The `extensions` key takes `"all"`, `"none"`, flag text such as
`"MODES | RANGE_VALUES"`, or a table of extension names to booleans.
`recipechef.config.parse_extensions` reads all of these and
`Extensions.to_toml` writes them back. Bad configuration raises
`recipechef.config.ConfigError`.

## Library

### Tags and metadata

```python
from recipechef.tags import is_valid_tag, validate_metadata, meta_name

is_valid_tag("italian-food")           # True
is_valid_tag("1starts-with-number")    # False

validate_metadata("tags", "quick, Spicy").severity   # Severity.WARNING
meta_name({"title": "Flan"})                         # "Flan"
```

A valid tag is 1 to 32 characters of lower case letters and digits, starts
with a letter, and uses single hyphens as separators. `validate_metadata`
returns a `CheckResult` with a `severity`, its `messages` and whether the
entry should be kept (`include`); it also checks that an `emoji` entry is an
emoji or a `:short_code:`.

### Search queries

```python
from recipechef.search import parse_search, RecipeData, error_correct_query

searcher = parse_search("tag:italian !ingredient:garlic")
searcher.to_query()            # "tag:italian !ingredient:garlic"
searcher.matches_recipe(
    "Pizza",
    RecipeData(metadata={"tags": ["italian"]}, ingredients=["flour"]),
)                              # True

error_correct_query("(b c")    # "(b c)"
```

Query syntax:

- words separated by spaces must all match (`pasta tag:quick`);
- `|` separates alternatives (`soup | stew`);
- `!` negates a term or a parenthesised group (`!(tag:spicy | tag:hot)`);
- `tag:`, `ingredient:` and `cookware:` restrict a term to tags, ingredient
  names or cookware names; other words match part of the recipe name,
  ignoring its case;
- `+` stands for a space inside a term (`ingredient:olive+oil`).

Unbalanced parentheses are repaired before parsing, and `tag:` terms that
are not valid tags are dropped. An empty query matches every recipe.

### Web server helpers

`recipechef.web` holds the pieces a recipe web server needs:
`unicode_fraction` (`"1/2"` to `"½"`), `zeroless_float`, `youtube_video_id`,
`select_value`, `check_path` (rejects absolute and `..` request paths with
`BadRequestPath`), `clean_path`, `is_served_file` (only `.cook` files and
images) and `static_asset_path`.

`recipechef.watch` describes changes to recipe files as `Update` values
(`UpdateKind.MODIFIED`, `ADDED`, `DELETED`, `RENAMED`) and turns them into
server-sent events:

```python
from recipechef.watch import Update, UpdateKind

Update(UpdateKind.ADDED, "/r/pasta.cook").to_sse("/r")
# "event: added\ndata: pasta.cook\n\n"
```

`relative_cook_paths` keeps the `.cook` files under a base path, made
relative to it.

## What it does not do

recipechef does not parse or display recipes, scale them, convert units,
build shopping lists or list a collection's recipes. It does not run a web
server, watch files or translate a user interface: `recipechef.web` and
`recipechef.watch` only provide helpers for one. There is no interactive
configuration setup; configuration files are edited by hand.