from __future__ import annotations


class ExtractionError(RuntimeError):
    """Fatal extraction failure (unreadable input, failed mandatory seek, bad config)."""
