"""fogcat - manage FogBugz cases from the command line."""

from fogcat._version import version as __version__

__all__ = ["__version__"]
