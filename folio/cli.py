"""Command-line interface for Folio.

This module defines the CLI commands using Click framework.
The commands inspect a content tree the way the site would see it.

Commands:
- pages: List every page.
- articles: List published articles, newest first.
- show: Print the metadata and relationships of one page.
- category: List the pages and articles assigned to a category.
- menu: Print the navigation menu tree.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from . import __version__
from .config import ConfigError
from .menu import MenuNode
from .paths import PageNotFoundError
from .repository import ContentRepository


@click.group()
@click.version_option(version=__version__, prog_name="folio")
@click.option(
    "--project",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Project root containing folio.yaml",
)
@click.option("--verbose", is_flag=True, help="Log cache and parsing activity")
@click.pass_context
def cli(ctx: click.Context, project: Path, verbose: bool):
    """Folio flat-file content repository."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        ctx.obj = ContentRepository.from_project(project.resolve())
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@click.pass_obj
def pages(repository: ContentRepository):
    """List every page."""
    for page in repository.find_all():
        click.echo(f"{page.abspath}\t{page.heading or ''}")


@cli.command()
@click.pass_obj
def articles(repository: ContentRepository):
    """List published articles, newest first."""
    for page in repository.find_articles():
        click.echo(f"{page.date:%Y-%m-%d}\t{page.abspath}\t{page.heading or ''}")


@cli.command()
@click.argument("path")
@click.pass_obj
def show(repository: ContentRepository, path: str):
    """Show metadata and relationships of the page at PATH."""
    page = _find(repository, path)
    parent = page.parent
    click.echo(f"Path: {page.abspath}")
    click.echo(f"File: {page.filename}")
    click.echo(f"Title: {page.title}")
    click.echo(f"Heading: {page.heading or ''}")
    click.echo(f"Parent: {parent.abspath if parent else ''}")
    click.echo(f"Categories: {', '.join(c.abspath for c in page.categories)}")
    if page.date:
        click.echo(f"Date: {page.date:%d %B %Y}")
    for key, value in sorted(page.metadata.items()):
        click.echo(f"  {key}: {value}")
    if page.summary:
        click.echo("")
        click.echo(page.summary.strip())


@cli.command()
@click.argument("path")
@click.pass_obj
def category(repository: ContentRepository, path: str):
    """List pages and articles assigned to the category at PATH."""
    page = _find(repository, path)
    click.echo("Pages:")
    for child in page.pages:
        click.echo(f"  {child.abspath}\t{child.heading or ''}")
    click.echo("Articles:")
    for article in page.articles:
        click.echo(f"  {article.date:%Y-%m-%d}\t{article.abspath}\t{article.heading or ''}")


@cli.command()
@click.pass_obj
def menu(repository: ContentRepository):
    """Print the navigation menu tree."""
    _echo_nodes(repository.menu().full_menu(), depth=0)


def _find(repository: ContentRepository, path: str):
    try:
        return repository.find_by_path(path)
    except PageNotFoundError as exc:
        raise click.ClickException(str(exc)) from exc


def _echo_nodes(nodes: tuple[MenuNode, ...], depth: int) -> None:
    for node in nodes:
        click.echo(f"{'  ' * depth}{node.page.abspath}")
        _echo_nodes(node.children, depth + 1)


def main():
    """Entry point for the CLI application."""
    cli()
