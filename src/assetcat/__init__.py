"""assetcat package

Scans namespaced image catalogs (``*.xcassets``) and produces a
collision-free accessor tree that a code renderer turns into typed resource
accessors.

Prefer :mod:`assetcat.api` for programmatic use and :mod:`assetcat.cli` for
the command line.
"""

from ._version import __version__  # noqa: F401

__all__ = ["__version__"]
