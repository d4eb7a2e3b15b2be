"""Tests for renderers/svg.py."""

from __future__ import annotations

from workflow_diagram.diagram import Diagram
from workflow_diagram.renderers.svg import SvgRenderer
from workflow_diagram.view import empty_view


def diamond() -> Diagram:
    diagram = Diagram()
    diagram.set_graph({"A": {}, "B": {"needs": "A"}, "C": {"needs": "A"}, "D": {"needs": ["B", "C"]}})
    return diagram


class TestSvgRenderer:
    def test_empty_view(self):
        assert SvgRenderer().render(empty_view()) == ""

    def test_canvas_size_and_grid(self):
        svg = diamond().render_svg()
        assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" class="flow-svg" width="1200" height="600"')
        assert '<pattern id="grid" width="100" height="100"' in svg
        assert 'fill="url(#grid)"' in svg

    def test_edge_paths(self):
        svg = diamond().render_svg()
        assert 'data-source="A" data-target="B" d="M 200 300 H 220 V 260 H 240"' in svg

    def test_highlighted_edges_drawn_last(self):
        diagram = diamond()
        diagram.interaction.pointer_enter("A")
        svg = diagram.render_svg()
        assert svg.count('class="dependency-arrow highlighted"') == 2
        assert svg.index('data-source="B" data-target="D"') < svg.index('data-source="A" data-target="B"')

    def test_selected_and_hovered_boxes(self):
        diagram = diamond()
        diagram.interaction.pointer_enter("C")
        diagram.interaction.selected = "B"
        svg = diagram.render_svg()
        assert svg.count("job-box selected") == 1
        assert svg.count("job-box hovered") == 1

    def test_zoom_scales_canvas(self):
        diagram = diamond()
        diagram.viewport.zoom("out")
        diagram.viewport.zoom("out")
        diagram.viewport.zoom("out")
        diagram.viewport.zoom("out")
        svg = diagram.render_svg()
        assert 'width="600" height="300"' in svg
        assert 'transform="scale(0.5)"' in svg

    def test_job_ids_are_escaped(self):
        diagram = Diagram()
        diagram.set_graph({"a<b>&c": {}})
        svg = diagram.render_svg()
        assert "a&lt;b&gt;&amp;c" in svg
        assert "a<b>" not in svg
