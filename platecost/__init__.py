"""Plate Cost Comparator.

Monthly cost comparison of chemistry-free and traditional plate
production workflows.  The calculation packages (``config``, ``ingest``,
``engine``, ``presentation``, ``storage``) have no dependency on any UI
framework; ``app`` and ``cli`` are the user-facing surfaces.
"""

__version__ = "0.1.0"
