from __future__ import annotations

import importlib
import importlib.util
import re
import sys
from pathlib import Path

import typer

from ccut.styling import ColorMode

app = typer.Typer(name="ccut", help="Run declared tests and print a console report")


def _module_name_for(path: Path) -> str:
    return "_ccut_target_" + re.sub(r"\W", "_", str(path))


def load_target(target: str) -> None:
    """Import a test module so its declarations register.

    ``target`` is either a path to a ``.py`` file or a dotted module name.
    A file already loaded in this process is not executed twice.
    """
    path = Path(target)
    if target.endswith(".py") or path.is_file():
        path = path.resolve()
        if not path.is_file():
            raise FileNotFoundError(f"no such file: {target}")
        name = _module_name_for(path)
        if name in sys.modules:
            return
        # Let the module import its siblings
        parent = str(path.parent)
        if parent not in sys.path:
            sys.path.insert(0, parent)
        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"cannot load {target}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            del sys.modules[name]
            raise
        return
    importlib.import_module(target)


def _load_all(targets: list[str]) -> None:
    for target in targets:
        try:
            load_target(target)
        except Exception as e:
            typer.echo(f"Error: cannot load {target}: {e}", err=True)
            raise typer.Exit(1)


@app.command()
def run(
    targets: list[str] = typer.Argument(
        help="Test modules to load: .py file paths or dotted module names"
    ),
    config: str | None = typer.Option(None, "--config", "-c", help="Path to ccut YAML config"),
    name_filter: str | None = typer.Option(
        None, "--filter", "-k", help="Run only tests whose name matches this glob"
    ),
    color: ColorMode | None = typer.Option(None, "--color", help="Colour output mode"),
    timeout: float | None = typer.Option(
        None, "--timeout", min=0.001, help="Per-test deadline in seconds"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(None, "--debug-log", help="Write a debug log to this file"),
):
    """Load the given test modules, run every registered test and report."""
    from ccut.config import RunConfig, load_config
    from ccut.runner import run_all

    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            typer.echo(f"Error: config file not found: {config}", err=True)
            raise typer.Exit(1)
        try:
            run_config = load_config(config_path)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
    else:
        run_config = RunConfig()

    try:
        run_config = run_config.merged(
            name_filter=name_filter,
            color=color,
            timeout=timeout,
            verbose=verbose or None,
            debug_log=debug_log,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    _load_all(targets)

    result = run_all(config=run_config)

    if result.interrupted:
        typer.echo("Run interrupted. Partial results reported above.", err=True)
    if result.exit_code:
        raise typer.Exit(result.exit_code)


@app.command("list")
def list_tests(
    targets: list[str] = typer.Argument(
        help="Test modules to load: .py file paths or dotted module names"
    ),
    name_filter: str | None = typer.Option(
        None, "--filter", "-k", help="List only tests whose name matches this glob"
    ),
):
    """Print the registered test names in run order."""
    from ccut import catalog as catalog_module
    from ccut.runner import Runner

    _load_all(targets)

    runner = Runner(catalog_module.default_catalog, name_filter=name_filter)
    for entry in runner.selected():
        typer.echo(entry.name)


_EXAMPLE_CONFIG = """\
# Colour mode: always, auto or never
color: always
# Only run tests matching this glob
# name_filter: "parser_*"
# Per-test deadline in seconds
# timeout: 10
debug_log: ./ccut-debug.log
"""

_EXAMPLE_TESTS = '''\
from ccut import assert_equal, assert_exception, main, test


@test
def addition():
    assert_equal(1 + 1, 2)


@test
def int_rejects_words():
    assert_exception(lambda: int("seven"))


if __name__ == "__main__":
    raise SystemExit(main())
'''


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to write the example into"),
):
    """Write an example ccut.yaml and test module."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    for filename, content in (
        ("ccut.yaml", _EXAMPLE_CONFIG),
        ("example_tests.py", _EXAMPLE_TESTS),
    ):
        target = project_dir / filename
        if target.exists():
            typer.echo(f"{filename} already exists in {dir}, skipping.")
            continue
        target.write_text(content)
        typer.echo(f"  {filename}")

    typer.echo(f"Initialized ccut example in {dir}")
