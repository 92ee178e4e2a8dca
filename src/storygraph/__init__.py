"""storygraph: story graph core for visual-novel authoring tools."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("storygraph")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["__version__"]
