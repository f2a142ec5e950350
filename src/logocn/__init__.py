"""logocn: brand logo resolution backed by a cached Simple Icons catalog."""

from __future__ import annotations

__version__ = "0.1.0"
