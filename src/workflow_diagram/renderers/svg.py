"""SVG renderer — renders a DiagramView to an SVG string."""

from __future__ import annotations

from workflow_diagram.layout.types import format_coord
from workflow_diagram.view import DiagramView, EdgeView, NodeView

# ─── Constants ──────────────────────────────────────────────────────────────

FONT_SIZE = 14
FONT_FAMILY = "sans-serif"
GRID_EVERY = 5  # grid lines are drawn every GRID_EVERY grid units

_BOX_STYLE = 'fill="white" stroke="#24292f" stroke-width="1.5"'
_BOX_SELECTED_STYLE = 'fill="#ddf4ff" stroke="#0969da" stroke-width="2.5"'
_BOX_HOVERED_STYLE = 'fill="#f6f8fa" stroke="#0969da" stroke-width="1.5"'
_EDGE_STYLE = 'fill="none" stroke="#8c959f" stroke-width="1.5"'
_EDGE_HIGHLIGHT_STYLE = 'fill="none" stroke="#0969da" stroke-width="2.5"'


def _escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _font(size: int = FONT_SIZE) -> str:
    return f'font-family="{FONT_FAMILY}" font-size="{size}"'


# ─── Background ─────────────────────────────────────────────────────────────


def _render_defs(grid_unit: int) -> list[str]:
    cell = grid_unit * GRID_EVERY
    return [
        "<defs>",
        f'  <pattern id="grid" width="{cell}" height="{cell}" patternUnits="userSpaceOnUse">',
        f'    <path d="M {cell} 0 L 0 0 0 {cell}" fill="none" stroke="#e0e0e0" stroke-width="1"/>',
        "  </pattern>",
        '  <marker id="arrowhead" markerWidth="10" markerHeight="7" refX="10" refY="3.5" orient="auto">',
        '    <polygon points="0 0, 10 3.5, 0 7" fill="#8c959f"/>',
        "  </marker>",
        '  <marker id="arrowhead-hl" markerWidth="10" markerHeight="7" refX="10" refY="3.5" orient="auto">',
        '    <polygon points="0 0, 10 3.5, 0 7" fill="#0969da"/>',
        "  </marker>",
        "</defs>",
    ]


# ─── Shape Rendering ────────────────────────────────────────────────────────


def _render_node(node: NodeView) -> str:
    x, y, w, h = node.x, node.y, node.width, node.height
    if node.selected:
        style, css = _BOX_SELECTED_STYLE, "job-box selected"
    elif node.hovered:
        style, css = _BOX_HOVERED_STYLE, "job-box hovered"
    else:
        style, css = _BOX_STYLE, "job-box"

    x_s, y_s = format_coord(x), format_coord(y)
    cx, cy = format_coord(x + w / 2), format_coord(y + h / 2)
    job_id = _escape(node.id)
    return "\n".join(
        [
            f'<g class="job-node" data-job-id="{job_id}">',
            f'  <rect class="{css}" x="{x_s}" y="{y_s}" width="{w}" height="{h}" rx="6" {style}/>',
            f'  <text class="job-text" x="{cx}" y="{cy}" dominant-baseline="central" '
            f'text-anchor="middle" {_font()}>{job_id}</text>',
            "</g>",
        ]
    )


# ─── Edge Rendering ─────────────────────────────────────────────────────────


def _render_edge(edge: EdgeView) -> str:
    if edge.highlighted:
        style, css, marker = _EDGE_HIGHLIGHT_STYLE, "dependency-arrow highlighted", "arrowhead-hl"
    else:
        style, css, marker = _EDGE_STYLE, "dependency-arrow", "arrowhead"
    source, target = _escape(edge.source), _escape(edge.target)
    return (
        f'<path class="{css}" data-source="{source}" data-target="{target}" '
        f'd="{edge.path.to_svg()}" {style} marker-end="url(#{marker})"/>'
    )


# ─── Public Renderer ────────────────────────────────────────────────────────


class SvgRenderer:
    """SVG renderer — consumes a DiagramView, produces an SVG string."""

    def render(self, view: DiagramView) -> str:
        if view.is_empty:
            return ""

        svg_w = format_coord(view.width * view.scale)
        svg_h = format_coord(view.height * view.scale)

        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" class="flow-svg" width="{svg_w}" height="{svg_h}" '
            f'viewBox="0 0 {svg_w} {svg_h}">',
            *_render_defs(view.grid_unit),
            f'<rect width="{svg_w}" height="{svg_h}" fill="url(#grid)"/>',
            f'<g transform="scale({format_coord(view.scale)})">',
        ]

        # Edges first so job boxes are drawn on top; highlighted edges last.
        for edge in sorted(view.edges, key=lambda e: e.highlighted):
            parts.append(_render_edge(edge))

        for node in view.nodes:
            parts.append(_render_node(node))

        parts.append("</g>")
        parts.append("</svg>")
        return "\n".join(parts)
