"""Public interface for the Sonarr/Radarr/Lidarr/Readarr adapter."""

from __future__ import annotations

from .client import ArrClient
from .mappings import (
    IndexerFieldMapping,
    LidarrMapping,
    RadarrMapping,
    ReadarrMapping,
    SonarrMapping,
    TorznabFieldMapping,
    jackett_id_from_url,
    mapping_for,
)
from .schema import FieldPayload, IndexerResource, SystemStatus

__all__ = [
    "ArrClient",
    "FieldPayload",
    "IndexerFieldMapping",
    "IndexerResource",
    "LidarrMapping",
    "RadarrMapping",
    "ReadarrMapping",
    "SonarrMapping",
    "SystemStatus",
    "TorznabFieldMapping",
    "jackett_id_from_url",
    "mapping_for",
]
