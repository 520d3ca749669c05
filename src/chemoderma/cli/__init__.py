"""ChemoDERMA CLI: inspect the ontology and preview disclosure states.

Entry point for the `chemoderma` command. Requires ``pip install chemoderma-explorer[cli]``.

Commands:
    inspect     Show tree structure (counts by type, depth, root)
    view        Show visible nodes and positions for a set of expanded ids
    details     Show the clinical attributes of a phenotype
"""

from __future__ import annotations


def _require_typer():
    """Check that typer is available."""
    try:
        import typer  # noqa: F401
    except ImportError:
        import sys

        print(
            "Error: typer is required for the CLI. Install with: pip install chemoderma-explorer[cli]",
            file=sys.stderr,
        )
        raise SystemExit(1) from None


def create_app():
    """Create the Typer app with all commands."""
    _require_typer()

    import typer

    from chemoderma.cli.tree_cmd import register_commands

    app = typer.Typer(
        name="chemoderma",
        help="ChemoDERMA ontology explorer CLI.",
        no_args_is_help=True,
    )
    register_commands(app)

    return app


def main():
    """CLI entry point."""
    app = create_app()
    app()
