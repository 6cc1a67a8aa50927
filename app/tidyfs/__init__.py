"""tidyfs - Filesystem maintenance for a single workstation.

Cache cleanup, content-based duplicate detection, and filename
normalization, all routed through a preview-aware execution gate.
"""

__version__ = "0.1.0"
