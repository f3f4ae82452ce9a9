"""CLI entry point for Merkleproof."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from merkleproof_core.config import MerkleproofConfig, load_config
from merkleproof_core.config.loader import DEFAULT_CONFIG_TEMPLATE
from merkleproof_core.merkle import (
    AtRoot,
    EmptyInputError,
    LocatedSibling,
    MerkleNode,
    MerkleTree,
    SiblingOnLeft,
)

app = typer.Typer(
    name="merkleproof",
    help="Build Merkle trees and check leaf inclusion without a proof object.",
)

config_app = typer.Typer(help="Manage Merkleproof configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: MerkleproofConfig | None = None


def _hash_out() -> Console:
    """Console for hash output: never wraps, whatever the width."""
    return Console(soft_wrap=True, highlight=False)


_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "level": record.levelname.lower(),
                "logger": record.name,
                "message": record.getMessage(),
            }
        )


def _configure_logging(cfg: MerkleproofConfig) -> None:
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(show_path=False)
    logging.basicConfig(
        level=_LOG_LEVELS[cfg.log_level],
        handlers=[handler],
        force=True,
    )


def _get_config() -> MerkleproofConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to merkleproof.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _configure_logging(_config)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _collect_values(values: list[str] | None, file: Path | None) -> list[str]:
    """Positional values first, then one value per line from *file*."""
    collected = list(values or [])
    if file is not None:
        # blank lines are empty leaf values, not separators
        collected.extend(file.read_text(encoding="utf-8").splitlines())
    return collected


def _build(
    values: list[str] | None,
    file: Path | None,
    no_hash: bool,
    digests: bool,
) -> MerkleTree:
    """Build a tree from CLI input, exiting with an error on bad input."""
    cfg = _get_config()
    hashing_enabled = cfg.merkle.hashing_enabled and not no_hash
    try:
        items = _collect_values(values, file)
        if digests:
            return MerkleTree.from_digests(
                items, hashing_enabled, cfg.merkle.algorithm
            )
        return MerkleTree.from_values(
            [v.encode() for v in items], hashing_enabled, cfg.merkle.algorithm
        )
    except EmptyInputError:
        rprint("[red]Error:[/red] no leaf values given.")
        raise typer.Exit(1)
    except (OSError, UnicodeDecodeError) as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _position(found: LocatedSibling) -> str:
    if isinstance(found, AtRoot):
        return "root"
    if isinstance(found, SiblingOnLeft):
        return "left"
    return "right"


def _add_branch(parent: Tree, node: MerkleNode) -> None:
    for child in node.children():
        label = escape(child.hash)
        branch = parent.add(f"[green]{label}[/green]" if child.is_leaf else label)
        _add_branch(branch, child)


ValuesArg = Annotated[list[str] | None, typer.Argument(help="Leaf values, in order")]
FileOpt = Annotated[
    Path | None, typer.Option("--file", "-f", help="Read one leaf value per line")
]
NoHashOpt = Annotated[
    bool, typer.Option("--no-hash", help="Concatenate child hashes instead of hashing")
]
DigestsOpt = Annotated[
    bool, typer.Option("--digests", help="Values are already-computed leaf hashes")
]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def root(
    values: ValuesArg = None,
    file: FileOpt = None,
    no_hash: NoHashOpt = False,
    digests: DigestsOpt = False,
) -> None:
    """Print the root hash of the tree built from VALUES."""
    tree = _build(values, file, no_hash, digests)
    _hash_out().print(escape(tree.root_hash))


@app.command()
def show(
    values: ValuesArg = None,
    file: FileOpt = None,
    no_hash: NoHashOpt = False,
    digests: DigestsOpt = False,
) -> None:
    """Render the tree built from VALUES."""
    tree = _build(values, file, no_hash, digests)
    view = Tree(
        f"[bold]{escape(tree.root_hash)}[/bold] "
        f"({tree.size} leaves, height {tree.height})"
    )
    _add_branch(view, tree.root)
    rprint(view)


@app.command("locate")
def locate_cmd(
    target: Annotated[str, typer.Option("--hash", help="Hash to search for")],
    values: ValuesArg = None,
    file: FileOpt = None,
    no_hash: NoHashOpt = False,
    digests: DigestsOpt = False,
) -> None:
    """Find the sibling of a hash in the tree built from VALUES."""
    tree = _build(values, file, no_hash, digests)
    found = tree.locate(target)
    if found is None:
        _hash_out().print(f"[yellow]Not found:[/yellow] {escape(target)}")
        raise typer.Exit(1)
    _hash_out().print(f"[bold]{_position(found)}[/bold] {escape(found.hash)}")


@app.command("verify")
def verify_cmd(
    values: ValuesArg = None,
    target: Annotated[
        str | None, typer.Option("--hash", help="Candidate hash to verify")
    ] = None,
    leaf: Annotated[
        str | None, typer.Option("--leaf", help="Candidate leaf value, hashed first")
    ] = None,
    show_path: Annotated[
        bool, typer.Option("--path", help="Print the audit path")
    ] = False,
    file: FileOpt = None,
    no_hash: NoHashOpt = False,
    digests: DigestsOpt = False,
) -> None:
    """Check that a hash (or leaf value) belongs to the tree built from VALUES."""
    if (target is None) == (leaf is None):
        rprint("[red]Error:[/red] pass exactly one of --hash or --leaf.")
        raise typer.Exit(1)

    tree = _build(values, file, no_hash, digests)
    candidate = target if target is not None else tree.hasher.leaf(leaf.encode())
    path = tree.audit_path(candidate)

    if path is None:
        _hash_out().print(f"[red]Not verified:[/red] {escape(candidate)}")
        raise typer.Exit(1)

    _hash_out().print(f"[green]Verified:[/green] {escape(candidate)}")
    if show_path:
        table = Table(title=f"Audit path ({len(path)} steps)")
        table.add_column("Step", justify="right")
        table.add_column("Position")
        table.add_column("Hash")
        for i, step in enumerate(path, 1):
            table.add_row(str(i), _position(step), escape(step.hash))
        rprint(table)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default merkleproof.yaml in current directory."""
    target = Path("merkleproof.yaml")
    if target.exists() and not force:
        rprint("[yellow]merkleproof.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
