"""CLI entry point for clitree. Uses Click for argument parsing."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from clitree.app import run_tree
from clitree.config import TreeConfig, load_config
from clitree.demo import sample_namespaces, selected_values
from clitree.loader import load_items
from clitree.node import TreeError


def _session_options(f):
    f = click.option(
        "--enter-activates/--enter-quits",
        default=None,
        help="Whether enter descends/toggles instead of quitting.",
    )(f)
    f = click.option("--cursor", default=None, help="One-column cursor glyph.")(f)
    f = click.option("--color/--no-color", default=None, help="Style labels with ANSI colors.")(f)
    return f


def _config(enter_activates, cursor, color) -> TreeConfig:
    return load_config(
        {"enterActivates": enter_activates, "cursor": cursor, "color": color}
    )


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    show_default=True,
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None)
def main(log_level, log_file):
    """Pick values from a tree in the terminal."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=log_file,
    )


@main.command()
@_session_options
def demo(enter_activates, cursor, color):
    """Select values from the sample namespaces."""
    config = _config(enter_activates, cursor, color)
    namespaces = sample_namespaces()
    try:
        run_tree(namespaces, config)
    except (TreeError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    for name in selected_values(namespaces):
        click.echo(name)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_session_options
def pick(file, enter_activates, cursor, color):
    """Select leaves from a JSON tree in FILE."""
    config = _config(enter_activates, cursor, color)
    try:
        items = load_items(file)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{file}: invalid JSON: {e}") from e
    except (OSError, ValueError) as e:
        raise click.ClickException(f"{file}: {e}") from e

    try:
        tree = run_tree(items, config)
    except (TreeError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    for value in tree.selected_leaves():
        click.echo(value.name)


if __name__ == "__main__":
    main()
