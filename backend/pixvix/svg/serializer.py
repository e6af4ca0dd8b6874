"""Write SVG markup for merged cell rectangles."""

from __future__ import annotations

from typing import Any
from xml.sax.saxutils import escape


def serialize_svg(
    elements: list[dict[str, Any]],
    view_w: int,
    view_h: int,
    width: int,
    height: int,
    title: str = "",
) -> str:
    """Generate SVG markup from element definitions.

    ``view_w``/``view_h`` set the viewBox (cell units); ``width``/``height``
    set the rendered size.
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {view_w} {view_h}"'
        f' width="{width}" height="{height}" shape-rendering="crispEdges">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")

    for elem in elements:
        tag = elem.get("tag", "rect")
        attrs = {k: v for k, v in elem.items() if k != "tag"}
        attr_str = " ".join(f'{k}="{v}"' for k, v in attrs.items())
        lines.append(f"  <{tag} {attr_str}/>")

    lines.append("</svg>")
    return "\n".join(lines)
