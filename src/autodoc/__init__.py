"""Autodoc - API documentation extracted from JSDoc comments."""

try:
    from importlib.metadata import version

    __version__ = version("autodoc")
except Exception:
    __version__ = "0.0.0.dev0+local"  # Fallback for development

from autodoc.library import Autodoc, generate, parse

__all__ = ["Autodoc", "generate", "parse", "__version__"]
