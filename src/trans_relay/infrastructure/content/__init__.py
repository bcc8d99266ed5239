from .loader import ContentLoader
from .renderer import Renderer, render_to_html

__all__ = ["ContentLoader", "Renderer", "render_to_html"]
