"""Static rendering of a metrics report.

Produces a force-directed layout image, a bar chart of the distance
histogram and a plain-text summary. Figures are built with the matplotlib
object API (``Figure``) so rendering never depends on an interactive backend.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import networkx as nx
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure

from stationnet.config import RenderConfig
from stationnet.graph import StationGraph, to_digraph, to_undirected
from stationnet.logging import get_logger
from stationnet.metrics import MetricsReport
from stationnet.utils.output_paths import ensure_parent_dir

logger = get_logger(__name__)

Position = Tuple[float, float]


def format_table(
    headers: List[str],
    rows: List[List[Any]],
    min_width: int = 6,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers.
        rows: Data rows.
        min_width: Minimum column width.
        max_col_width: Clip cells longer than this with "...".

    Returns:
        Formatted table string, or "" when there are no rows.
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = [
        max(max(len(row[i]) for row in all_data), min_width)
        for i in range(len(clipped_headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(clipped_headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in clipped_rows)
    return "\n".join(lines)


def compute_layout(
    graph: StationGraph, seed: Optional[int], iterations: int = 50
) -> Dict[int, Position]:
    """Spring layout over the undirected simple view of the graph.

    The result is identical for identical ``seed`` values; ``None`` gives a
    different layout on every call.
    """
    positions = nx.spring_layout(to_undirected(graph), seed=seed, iterations=iterations)
    return {node: (float(xy[0]), float(xy[1])) for node, xy in positions.items()}


@dataclass(frozen=True)
class RenderResult:
    """Files written by the renderer and the seed the layout used."""

    layout_path: Optional[Path]
    histogram_path: Optional[Path]
    seed: Optional[int]
    summary: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layout_path": str(self.layout_path) if self.layout_path else None,
            "histogram_path": str(self.histogram_path) if self.histogram_path else None,
            "seed": self.seed,
        }


class ReportRenderer:
    """Render a ``MetricsReport`` as images and text."""

    def __init__(self, config: Optional[RenderConfig] = None) -> None:
        self.config = config or RenderConfig()

    def render_layout(
        self,
        graph: StationGraph,
        report: MetricsReport,
        path: Path,
        seed: Optional[int],
    ) -> Path:
        """Draw stations sized by degree and coloured by strong component.

        Returns:
            The path of the written image.
        """
        cfg = self.config
        if seed is None:
            logger.warning("Layout seed is not set; the layout will not be reproducible")

        pos = compute_layout(graph, seed, cfg.iterations)
        simple = to_digraph(graph)
        nodes = list(simple.nodes)
        sizes = [cfg.node_size_base + cfg.node_size_scale * graph.degree(n) for n in nodes]
        colors = [report.vertex_to_component.get(n, 0) for n in nodes]

        fig = Figure(figsize=cfg.figsize, dpi=cfg.dpi)
        ax = fig.add_subplot()
        if nodes:
            nx.draw_networkx_edges(
                simple, pos, ax=ax, arrows=True, arrowsize=6, width=0.5, alpha=0.4
            )
            nx.draw_networkx_nodes(
                simple,
                pos,
                nodelist=nodes,
                ax=ax,
                node_size=sizes,
                node_color=colors,
                cmap="tab20",
                vmin=0,
                vmax=max(report.component_count - 1, 1),
            )
            if cfg.with_labels:
                labels = {n: simple.nodes[n].get("name") or str(n) for n in nodes}
                nx.draw_networkx_labels(simple, pos, labels=labels, ax=ax, font_size=5)
        ax.set_title(
            f"{report.vertex_count} stations, {report.edge_count} routes, "
            f"{report.component_count} strong components (seed={seed})"
        )
        ax.set_axis_off()

        ensure_parent_dir(path)
        fig.savefig(path, bbox_inches="tight")
        logger.info("Layout image saved to: %s", path)
        return path

    def render_distance_histogram(self, report: MetricsReport, path: Path) -> Path:
        """Bar chart of ordered pairs per hop distance.

        Returns:
            The path of the written image.
        """
        hist = report.distance_histogram
        frame = pd.DataFrame(
            {"hops": list(hist.counts.keys()), "pairs": list(hist.counts.values())}
        )

        fig = Figure(figsize=(6.4, 4.0), dpi=self.config.dpi)
        ax = fig.add_subplot()
        if frame.empty:
            ax.text(0.5, 0.5, "No reachable station pairs", ha="center", va="center")
            ax.set_axis_off()
        else:
            sns.barplot(data=frame, x="hops", y="pairs", ax=ax, color="steelblue")
            ax.set_xlabel("Shortest path length (hops)")
            ax.set_ylabel("Ordered station pairs")
            ax.grid(True, axis="y", linestyle=":", linewidth=0.5)
        ax.set_title(f"Geodesic distances ({hist.unreachable} unreachable pairs)")

        ensure_parent_dir(path)
        fig.savefig(path, bbox_inches="tight")
        logger.info("Distance histogram saved to: %s", path)
        return path

    def format_summary(self, report: MetricsReport, top_n: Optional[int] = None) -> str:
        """Return the text report printed at the end of a run."""
        top_n = self.config.top_n if top_n is None else top_n
        mean = (
            "undefined"
            if math.isnan(report.mean_distance)
            else f"{report.mean_distance:.4f}"
        )
        lines = [
            "NETWORK SUMMARY",
            "-" * 60,
            f"   Stations: {report.vertex_count:,}",
            f"   Routes: {report.edge_count:,}",
            f"   Density: {report.density:.6f} (raw {report.raw_density:.6f})",
            f"   Mean distance: {mean}",
            f"   Diameter: {report.diameter} "
            f"({' -> '.join(str(n) for n in report.diameter_path)})",
            "",
            "DISTANCE HISTOGRAM",
            "-" * 60,
        ]
        hist = report.distance_histogram
        hist_rows: List[List[Any]] = [[hops, count] for hops, count in hist.counts.items()]
        hist_rows.append(["unreachable", hist.unreachable])
        lines.append(format_table(["Hops", "Pairs"], hist_rows))

        lines += ["", f"TOP {top_n} STATIONS BY DEGREE", "-" * 60]
        degree_rows: List[List[Any]] = [
            [entry.station.id, entry.station.name, entry.degree]
            for entry in report.degree_table[:top_n]
        ]
        lines.append(
            format_table(["Id", "Station", "Degree"], degree_rows, max_col_width=40)
            or "   (no stations)"
        )

        lines += ["", "STRONGLY CONNECTED COMPONENTS", "-" * 60]
        lines.append(f"   Count: {report.component_count}")
        shown = ", ".join(str(s) for s in report.component_sizes[:10])
        more = "..." if len(report.component_sizes) > 10 else ""
        lines.append(f"   Sizes: {shown}{more}")
        return "\n".join(lines)

    def render(
        self,
        graph: StationGraph,
        report: MetricsReport,
        layout_path: Optional[Path],
        histogram_path: Optional[Path],
        seed: Optional[int],
    ) -> RenderResult:
        """Write whichever images have a path and build the text summary."""
        layout = (
            self.render_layout(graph, report, layout_path, seed)
            if layout_path is not None
            else None
        )
        histogram = (
            self.render_distance_histogram(report, histogram_path)
            if histogram_path is not None
            else None
        )
        return RenderResult(
            layout_path=layout,
            histogram_path=histogram,
            seed=seed,
            summary=self.format_summary(report),
        )
