"""Ingestion layer.

This package contains the adapters that turn worker payloads into
normalized :class:`pytrains.models.TrainRecord` objects.
"""

__all__: list[str] = []
