from workflow_diagram.renderers.base import Renderer
from workflow_diagram.renderers.svg import SvgRenderer

__all__ = ["Renderer", "SvgRenderer"]
