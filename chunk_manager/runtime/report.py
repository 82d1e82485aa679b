from __future__ import annotations

from typing import TYPE_CHECKING

from chunk_manager.core.color.density import heatmap_rows, palette_colors
from chunk_manager.runtime.formatting import (
    format_bytes,
    format_compression_ratio,
    format_hour_label,
    format_minute_label,
    format_number,
    format_with_commas,
)

if TYPE_CHECKING:
    from chunk_manager.core.domain.selection import SelectionModel
    from chunk_manager.core.domain.types import ChunkDataset, DeleteResult, DownloadFile


# One glyph per density level, light to dark.
LEVEL_GLYPHS = ".:-=+*#@"
EMPTY_GLYPH = " "


# ---------------------------------------------------------------------------
# Pretty printers
# ---------------------------------------------------------------------------

def print_dataset_summary(dataset: ChunkDataset, selection: SelectionModel) -> None:
    summary = selection.selection_summary()

    print(f"Groups: {len(dataset.groups)}")
    print(f"Chunks: {format_with_commas(dataset.data_chunk_count)}")
    print(f"Records: {format_number(dataset.data_count)}")
    print(f"Size on disk: {format_bytes(dataset.size_on_disk)}")
    print(f"Compression ratio: {format_compression_ratio(dataset.compression_ratio)}")
    print(
        f"Records per chunk: {format_with_commas(dataset.min_data_count)}"
        f" - {format_with_commas(dataset.max_data_count)}"
    )
    print()

    print(
        f"Selected: {summary.count} chunks | "
        f"{format_bytes(summary.total_size)} | "
        f"{format_number(summary.total_records)} records"
    )

    if summary.count == 0:
        return

    print("Groups:")
    for group in dataset.groups:
        if selection.is_group_fully_selected(group.hour):
            state = "all"
        elif selection.is_group_partially_selected(group.hour):
            state = "partial"
        else:
            continue
        print(
            f"  - {format_hour_label(group.hour)}: {state} | "
            f"{len(group.buckets)} chunks | {format_bytes(group.size_on_disk)}"
        )


def print_heatmap(dataset: ChunkDataset, selection: SelectionModel) -> None:
    rows = heatmap_rows(dataset)

    header = "".join(
        format_minute_label(minute)[0] if minute % 10 == 0 else " " for minute in range(60)
    )
    print(f"{'':>6} {header}")

    for row in rows:
        glyphs = []
        for cell in row.cells:
            glyphs.append(EMPTY_GLYPH if cell.level is None else LEVEL_GLYPHS[cell.level])
        marker = " "
        if selection.is_group_fully_selected(row.hour):
            marker = "*"
        elif selection.is_group_partially_selected(row.hour):
            marker = "~"
        print(f"{format_hour_label(row.hour):>5}{marker} {''.join(glyphs)}")

    print()
    legend = "  ".join(
        f"{LEVEL_GLYPHS[level]}={color}" for level, color in enumerate(palette_colors())
    )
    print(f"Legend: {legend}")


def print_download_result(files: list[DownloadFile]) -> None:
    print(f"Download URLs: {len(files)}")
    for f in files:
        print(
            f"  - {f.file_id} {f.file_name} | {format_bytes(f.file_size)} | "
            f"expires {f.expiration_date}"
        )
        print(f"      {f.download_url}")


def print_delete_result(result: DeleteResult) -> None:
    print(f"Delete status: {result.status}")
    print(f"  {result.additional_info}")
    if result.failed_file_ids:
        print(f"  Failed: {', '.join(result.failed_file_ids)}")
