"""HTML rendering for the dashboard.

Usage:
    dashboard = Dashboard.from_directory("data/")
    dashboard.click_node("12")
    dashboard.save_html("dashboard.html")
    dashboard.visualize()  # notebook widget
"""

from cmfgraph.viz.html import HtmlSurface
from cmfgraph.viz.styles import CATEGORY10, DEFAULT_STYLE, GraphStyle, GroupPalette
from cmfgraph.viz.widget import NotebookWidget

__all__ = [
    "CATEGORY10",
    "DEFAULT_STYLE",
    "GraphStyle",
    "GroupPalette",
    "HtmlSurface",
    "NotebookWidget",
]
