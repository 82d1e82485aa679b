"""Public API for the chunk_manager package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Action API
# ----------------------------------------------------------------------
from chunk_manager.actions.orchestrator import ActionOrchestrator

# ----------------------------------------------------------------------
# Heatmap API
# ----------------------------------------------------------------------
from chunk_manager.core.color.density import (
    EMPTY_CELL,
    GREEN_PALETTE,
    bucket_color,
    color_by_level,
    color_level,
    heatmap_rows,
    palette_colors,
    text_color,
)

# ----------------------------------------------------------------------
# Domain Types
# ----------------------------------------------------------------------
from chunk_manager.core.domain.dataset import build_bucket, build_dataset, build_group
from chunk_manager.core.domain.identity import bucket_key, chunk_file_name
from chunk_manager.core.domain.selection import SelectionModel, UnknownBucketError
from chunk_manager.core.domain.types import (
    Bucket,
    ChunkDataset,
    ChunkDate,
    ChunkGroup,
    ChunkRequest,
    DeleteResult,
    DownloadFile,
    SelectionSummary,
)
from chunk_manager.core.events.event_bus import EventBus
from chunk_manager.core.ports.chunk_service import ChunkService

# ----------------------------------------------------------------------
# Config API
# ----------------------------------------------------------------------
from chunk_manager.runtime.config import AppConfig

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Actions
    "ActionOrchestrator",
    "ChunkService",
    "EventBus",

    # Selection
    "SelectionModel",
    "UnknownBucketError",

    # Domain
    "Bucket",
    "ChunkDataset",
    "ChunkDate",
    "ChunkGroup",
    "ChunkRequest",
    "DeleteResult",
    "DownloadFile",
    "SelectionSummary",
    "build_bucket",
    "build_dataset",
    "build_group",
    "bucket_key",
    "chunk_file_name",

    # Heatmap
    "EMPTY_CELL",
    "GREEN_PALETTE",
    "bucket_color",
    "color_by_level",
    "color_level",
    "heatmap_rows",
    "palette_colors",
    "text_color",

    # Config
    "AppConfig",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("chunk-manager")
except PackageNotFoundError:
    __version__ = "0.0.0"
