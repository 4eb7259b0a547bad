"""
Analyzer - produces an ObjectGraph from one or more source units.

Usage:
```
analyzer = Analyzer.for_files("app/models")
graph = analyzer.graph
analyzer.report("json", "coupling.json")
```
"""

from functools import cached_property
from pathlib import Path
from typing import Iterable, List, Optional, Union

from kinship.analysis.builder import GraphBuilder, combine
from kinship.analysis.resolver import EdgeResolver
from kinship.core.exceptions import ParseError, StructuralError
from kinship.core.logging import PerformanceLogger, logger
from kinship.core.settings import Settings
from kinship.core.tracing import MetricsCollector, tracer
from kinship.graph.object_graph import ObjectGraph
from kinship.reporting.formats import get_formatter
from kinship.sources import SourceUnit, expand_paths, read_sources
from kinship.syntax.factory import detect_language, get_provider


class Analyzer:
    """
    Analysis of a batch of source units.

    Units are read and parsed lazily: nothing happens until ``graph`` (or
    anything that needs it) is first accessed.
    """

    def __init__(
        self,
        units: Iterable[SourceUnit],
        settings: Optional[Settings] = None,
        language: Optional[str] = None,
    ):
        self.units = units
        self.settings = settings or Settings()
        self.language = language
        self.metrics = MetricsCollector()
        self.perf = PerformanceLogger()

    @classmethod
    def for_files(cls, *paths: Union[str, Path], settings: Optional[Settings] = None):
        """
        Analyzer over files and directories.

        Paths are expanded immediately, so a missing path fails here; files
        are only read when the graph is built.
        """
        settings = settings or Settings()
        files = expand_paths(
            [str(path) for path in paths], settings.get("sources.extensions", [".rb"])
        )
        logger.info("Sources collected", files=len(files))
        return cls(read_sources(files, settings.get("sources.encoding", "utf-8")), settings)

    @classmethod
    def for_source(cls, *sources: str, language: str = "ruby", settings: Optional[Settings] = None):
        """Analyzer over in-memory source strings."""
        units = [SourceUnit(origin=f"<source {index}>", text=text) for index, text in enumerate(sources)]
        return cls(units, settings, language=language)

    @cached_property
    def graph(self) -> ObjectGraph:
        """Resolved graph of every unit."""
        with self.perf.measure("build_raw_graphs"):
            combined = combine(self._raw_graphs())
        self.metrics.gauge("analyzer.nodes", len(combined))

        with self.perf.measure("resolve_edges", nodes=len(combined)):
            graph = EdgeResolver(combined, self.metrics).resolve()

        logger.info("Graph resolved", nodes=len(graph), **self.stats)
        return graph

    def classes(self) -> List[str]:
        """Names of every known class and module."""
        return self.graph.names

    @property
    def stats(self) -> dict:
        return {name.replace(".", "_"): value for name, value in self.metrics.get_metrics().items()}

    def report(self, format: str, output_path: Optional[Union[str, Path]] = None) -> str:
        """
        Render the graph.

        The format is checked before any source is touched.

        Raises:
            UnknownFormatError: ``format`` is not a known report format
        """
        formatter = get_formatter(format)
        rendered = formatter.render(self.graph)
        if output_path is not None:
            formatter.write(rendered, Path(output_path))
        return rendered

    def _raw_graphs(self) -> Iterable[ObjectGraph]:
        builder = GraphBuilder(self.metrics)
        skip_invalid = bool(self.settings.get("analysis.skip_invalid_sources", False))

        for unit in self.units:
            language = self.language or detect_language(unit.origin)
            provider = get_provider(language)
            try:
                with tracer.span("analyze_unit", {"origin": unit.origin}):
                    tree = provider.parse(unit.text, unit.origin)
                    graph = builder.graph_from(tree, unit.origin)
            except (ParseError, StructuralError) as e:
                e.context.setdefault("origin", unit.origin)
                if not skip_invalid:
                    raise
                logger.error("Skipping source unit", origin=unit.origin, error=e.message)
                self.metrics.increment("analyzer.units_skipped")
                continue

            self.metrics.increment("analyzer.units_parsed")
            yield graph
