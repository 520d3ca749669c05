"""Tree CLI commands: inspect, view, details."""

from __future__ import annotations

from collections import Counter
from typing import Annotated

import typer

from chemoderma.cli._config import ExplorerConfig, load_config
from chemoderma.cli._format import format_coord, print_json, print_lines, print_table, truncate_value
from chemoderma.dataset import load_tree
from chemoderma.exceptions import DatasetLoadError, MalformedTreeError
from chemoderma.explorer.session import ExplorerSession
from chemoderma.viz import LAYOUTS, DisclosureState, hidden_descendant_count

DatasetArg = Annotated[
    str | None,
    typer.Argument(help="Dataset path or URL (default: [tool.chemoderma].dataset)"),
]
JsonOpt = Annotated[bool, typer.Option("--json", help="Output as JSON")]
OutputOpt = Annotated[str | None, typer.Option("--output", help="Write JSON to file")]


def open_session(dataset: str | None, layout: str | None = None) -> tuple[ExplorerSession, ExplorerConfig]:
    """Build a session from config and load the dataset, exiting on failure."""
    config = load_config()
    layout_name = layout or config.layout
    layout_fn = LAYOUTS.get(layout_name)
    if layout_fn is None:
        print(f"Error: Unknown layout '{layout_name}'. Use one of: {', '.join(LAYOUTS)}")
        raise typer.Exit(1)

    source = dataset or config.dataset
    try:
        tree = load_tree(source)
    except DatasetLoadError as e:
        print(f"Error: {e}")
        raise typer.Exit(1) from e

    session = ExplorerSession(
        layout_fn=layout_fn,
        initial_spacing=config.initial_spacing,
        filtered_spacing=config.filtered_spacing,
    )
    try:
        session.load_tree(tree, source=source)
    except MalformedTreeError as e:
        print(f"Error: {e}")
        raise typer.Exit(1) from e
    return session, config


def inspect_cmd(
    dataset: DatasetArg = None,
    as_json: JsonOpt = False,
    output: OutputOpt = None,
):
    """Show tree structure (node counts by type, depth, root)."""
    session, _ = open_session(dataset)
    graph = session.graph
    assert graph is not None

    type_counts = Counter(node.type for node in graph.nodes)
    max_depth = graph.max_depth

    if as_json:
        data = {
            "root_id": graph.root_id,
            "root_name": graph.root.label,
            "node_count": len(graph.nodes),
            "edge_count": len(graph.edges),
            "max_depth": max_depth,
            "types": dict(sorted(type_counts.items())),
        }
        print_json("inspect", data, output)
        return

    print(f"\nTree: {graph.root.label} | {len(graph.nodes)} nodes | {len(graph.edges)} edges | depth {max_depth}\n")
    rows = [[node_type, str(count)] for node_type, count in sorted(type_counts.items())]
    print_lines(print_table(["Type", "Count"], rows))
    print(f"\n  Root id: {graph.root_id}")


def view_cmd(
    dataset: DatasetArg = None,
    expand: Annotated[
        list[str] | None,
        typer.Option("--expand", "-e", help="Node id to expand (repeatable)"),
    ] = None,
    expand_all: Annotated[bool, typer.Option("--all", help="Expand every node")] = False,
    layout: Annotated[str | None, typer.Option("--layout", help="sugiyama or layered")] = None,
    as_json: JsonOpt = False,
    output: OutputOpt = None,
):
    """Show the visible nodes and their positions for a set of expanded ids."""
    session, _ = open_session(dataset, layout)
    graph = session.graph
    assert graph is not None

    unknown = [node_id for node_id in expand or () if node_id not in graph]
    if expand_all:
        session.expand_all()
    else:
        session.set_disclosure(DisclosureState.of(expand or ()))

    if as_json:
        data = {
            "root_id": graph.root_id,
            "expanded": list(session.disclosure),
            "unknown_ids": unknown,
            "nodes": [
                {
                    "id": node.id,
                    "type": node.type,
                    "label": node.label,
                    "position": node.position.as_dict() if node.position else None,
                }
                for node in session.visible_nodes
            ],
            "edges": [
                {"id": edge.id, "source": edge.source, "target": edge.target}
                for edge in session.visible_edges
            ],
        }
        print_json("view", data, output)
        return

    print(
        f"\nVisible: {len(session.visible_nodes)}/{len(graph.nodes)} nodes | "
        f"{len(session.visible_edges)} edges\n"
    )
    visible_ids = {node.id for node in session.visible_nodes}
    rows = []
    for node in session.visible_nodes:
        hidden = hidden_descendant_count(graph, session.disclosure, node.id, visible_ids)
        rows.append(
            [
                node.id,
                node.type,
                truncate_value(node.label, max_chars=40),
                format_coord(node.position.x if node.position else None),
                format_coord(node.position.y if node.position else None),
                str(hidden) if hidden else "—",
            ]
        )
    print_lines(print_table(["Node", "Type", "Label", "X", "Y", "Hidden"], rows))
    for node_id in unknown:
        print(f"\n  Warning: '{node_id}' is not in the graph")


def details_cmd(
    node_id: Annotated[str, typer.Argument(help="Phenotype node id")],
    dataset: DatasetArg = None,
    as_json: JsonOpt = False,
    output: OutputOpt = None,
):
    """Show the clinical attributes of a phenotype."""
    session, _ = open_session(dataset)
    graph = session.graph
    assert graph is not None

    node = graph.get_node(node_id)
    if node is None or not node.is_phenotype:
        print(f"Error: '{node_id}' is not a phenotype in this dataset")
        raise typer.Exit(1)

    session.click(node)
    details = session.selected
    assert details is not None

    if as_json:
        print_json("details", details.to_dict(), output)
        return

    print(f"\n{details.name}\n")
    for heading, value in details.sections():
        print(f"  {heading}")
        if isinstance(value, list):
            for item in value:
                print(f"    • {item}")
        else:
            print(f"    {value}")
        print()


def register_commands(app: typer.Typer) -> None:
    """Register tree commands on the top-level app."""
    app.command("inspect")(inspect_cmd)
    app.command("view")(view_cmd)
    app.command("details")(details_cmd)
