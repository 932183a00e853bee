"""Notebook display of a dashboard snapshot."""

from __future__ import annotations

import html as html_module

# Room for the sidebar and search bar around the SVG viewport
SIDEBAR_WIDTH = 380
SEARCH_BAR_HEIGHT = 60


class NotebookWidget:
    """Shows a rendered dashboard page inline in Jupyter or VSCode.

    The page is embedded through an iframe ``srcdoc`` so its stylesheet
    stays isolated from the notebook's. Snapshots carry no script, so the
    frame is sandboxed without script execution.
    """

    def __init__(self, html_content: str, width: int, height: int):
        self.html_content = html_content
        self.width = width
        self.height = height

    @classmethod
    def for_viewport(cls, html_content: str, width: float, height: float) -> NotebookWidget:
        """Size the frame to fit a graph viewport plus the surrounding chrome."""
        return cls(html_content, int(width) + SIDEBAR_WIDTH, int(height) + SEARCH_BAR_HEIGHT)

    def __repr__(self) -> str:
        return f"NotebookWidget({self.width}x{self.height})"

    def _repr_html_(self) -> str:
        srcdoc = html_module.escape(self.html_content, quote=True)
        size = f"width: {self.width}px; max-width: 100%; height: {self.height}px;"
        return (
            f'<iframe srcdoc="{srcdoc}" width="{self.width}" height="{self.height}" '
            f'frameborder="0" style="border: none; display: block; {size}" '
            f'sandbox="allow-same-origin"></iframe>'
        )
