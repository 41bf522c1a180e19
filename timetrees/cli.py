"""Command line interface: ``timetrees plot|info|newick PATH``."""

import logging
from typing import List

import click

from timetrees.exceptions import TimeTreeError
from timetrees.io import read_newick
from timetrees.logger import tt_logger
from timetrees.plot.ascii_layout import DEFAULT_WIDTH, PlotConfig, render_with_config
from timetrees.tree import TimeTree


def load_trees(path: str, sort: bool = False, reverse: bool = False) -> List[TimeTree]:
    try:
        trees = read_newick(path, force_list=True)
    except TimeTreeError as e:
        raise click.ClickException(f"{path}: {e}")

    if sort:
        trees = [tree.get_sorted(reverse=reverse) for tree in trees]
    for i, tree in enumerate(trees):
        tt_logger.log_tree(tree, title=f"Tree {i + 1}")
    return trees


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log parsing and layout details.")
def cli(verbose):
    """Parse and draw rooted phylogenetic time trees."""
    if verbose:
        tt_logger.disabled = False
        tt_logger.set_level(logging.DEBUG)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--width", default=DEFAULT_WIDTH, show_default=True, help="Columns used for the drawing.")
@click.option("--labels/--no-labels", default=True, help="Append leaf labels.")
@click.option("--dots/--no-dots", default=True, help="Connect leaves to labels with dots.")
@click.option("--sort/--no-sort", default=False, help="Order children by clade size first.")
@click.option("--reverse", is_flag=True, help="Put the largest clades first when sorting.")
def plot(path, width, labels, dots, sort, reverse):
    """Draw every tree in PATH as ASCII art."""
    config = PlotConfig(width=width, label_leaves=labels, dots=dots)
    trees = load_trees(path, sort=sort, reverse=reverse)
    for i, tree in enumerate(trees):
        if i > 0:
            click.echo()
        try:
            lines = render_with_config(tree, config)
        except (TimeTreeError, ValueError) as e:
            raise click.ClickException(str(e))
        for line in lines:
            click.echo(line)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def info(path):
    """Summarize every tree in PATH."""
    for tree in load_trees(path):
        click.echo(f"{tree} of height {tree.height}")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--sort/--no-sort", default=False, help="Order children by clade size first.")
@click.option("--reverse", is_flag=True, help="Put the largest clades first when sorting.")
def newick(path, sort, reverse):
    """Write every tree in PATH back out as normalized Newick."""
    for tree in load_trees(path, sort=sort, reverse=reverse):
        click.echo(tree.to_newick())


if __name__ == "__main__":
    cli()
