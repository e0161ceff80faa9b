[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "recipechef"
version = "0.1.0"
description = "Manage collections of Cooklang recipes: configuration, collections, tag validation, recipe search and web helpers"
requires-python = ">=3.11"
keywords = ["cooklang", "recipes", "cooking", "search", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
    "Typing :: Typed",
]
dependencies = [
    "platformdirs",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
recipechef = "recipechef.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["recipechef"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
