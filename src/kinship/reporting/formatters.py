"""
Report formatters.

Formatters only read the resolved graph's exported view (name, kind, edges,
meta); they never resolve anything themselves.
"""

import csv
import html
import io
import json
from abc import ABC, abstractmethod
from pathlib import Path

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from kinship.core.exceptions import OutputError
from kinship.core.logging import logger
from kinship.graph.object_graph import ObjectGraph


class Formatter(ABC):
    @abstractmethod
    def render(self, graph: ObjectGraph) -> str:
        pass

    def write(self, rendered: str, output_path: Path) -> Path:
        """Write a rendered report, creating parent directories."""
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(rendered, encoding="utf-8")
        except OSError as e:
            raise OutputError(
                f"Could not write report to {output_path}: {e}",
                context={"path": str(output_path)},
                cause=e,
            ) from e
        logger.info("Report written", path=str(output_path), bytes=len(rendered))
        return output_path


class JsonFormatter(Formatter):
    def render(self, graph: ObjectGraph) -> str:
        return json.dumps(graph.to_dict(), indent=2) + "\n"


class CsvFormatter(Formatter):
    """One row per edge: source, target, source kind, dangling flag."""

    def render(self, graph: ObjectGraph) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(["source", "target", "kind", "dangling"])
        for node in graph:
            for target in node.edge_targets:
                writer.writerow([node.name, target, node.kind.value, str(target not in graph).lower()])
        return buffer.getvalue()


class TextFormatter(Formatter):
    """Tree per node; dangling targets are marked."""

    def render(self, graph: ObjectGraph) -> str:
        console = Console(file=io.StringIO(), width=120, color_system=None, highlight=False)
        for node in graph:
            tree = Tree(Text(f"{node.name} ({node.kind.value})"))
            for target in node.edge_targets:
                tree.add(Text(target if target in graph else f"{target} [dangling]"))
            console.print(tree, markup=False)
        console.print(
            f"{len(graph)} nodes, {sum(len(node.edges) for node in graph)} edges, "
            f"{len(graph.dangling_targets())} dangling targets",
            markup=False,
        )
        return console.file.getvalue()


class HtmlFormatter(Formatter):
    TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: sans-serif; margin: 2em; }}
table {{ border-collapse: collapse; }}
th, td {{ border: 1px solid #ccc; padding: 0.3em 0.6em; text-align: left; vertical-align: top; }}
.dangling {{ color: #a33; font-style: italic; }}
</style>
</head>
<body>
<h1>{title}</h1>
<p>{summary}</p>
<table>
<thead><tr><th>Name</th><th>Kind</th><th>Edges</th><th>Associations</th></tr></thead>
<tbody>
{rows}
</tbody>
</table>
<script type="application/json" id="graph-data">{data}</script>
</body>
</html>
"""

    def render(self, graph: ObjectGraph) -> str:
        rows = []
        for node in graph:
            edges = "<br>".join(
                html.escape(target)
                if target in graph
                else f'<span class="dangling">{html.escape(target)}</span>'
                for target in node.edge_targets
            )
            associations = "<br>".join(
                html.escape(", ".join(f"{key}: {value}" for key, value in record.items()))
                for record in node.meta
            )
            rows.append(
                f"<tr><td>{html.escape(node.name)}</td><td>{node.kind.value}</td>"
                f"<td>{edges}</td><td>{associations}</td></tr>"
            )

        summary = f"{len(graph)} nodes, {sum(len(node.edges) for node in graph)} edges"
        data = json.dumps(graph.to_dict()).replace("</", "<\\/")
        return self.TEMPLATE.format(
            title="Object graph", summary=summary, rows="\n".join(rows), data=data
        )
