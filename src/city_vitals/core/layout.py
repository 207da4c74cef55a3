"""Layout engine — vertical stacking of label/meter rows for enabled stats.

Pure functions, no state between calls: the same enabled set always yields
the same LayoutResult. Units are whatever the host measures in (terminal
cells for the Textual host).

// [LAW:one-source-of-truth] Catalog order decides row order, never enable order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from city_vitals.core.stat_catalog import StatDefinition, sort_by_catalog


class RowKind(Enum):
    LABEL = "label"
    METER = "meter"


@dataclass(frozen=True)
class Padding:
    top: int = 0
    bottom: int = 0

    @property
    def vertical(self) -> int:
        return self.top + self.bottom


@dataclass(frozen=True)
class LayoutMetrics:
    """Static sizing inputs for compute_layout()."""

    title_bar_height: int = 2
    label_height: int = 1
    meter_height: int = 1
    padding: Padding = Padding(0, 0)

    def row_height(self, kind: RowKind) -> int:
        return self.label_height if kind == RowKind.LABEL else self.meter_height


DEFAULT_METRICS = LayoutMetrics()


@dataclass(frozen=True)
class LayoutRow:
    stat: StatDefinition
    kind: RowKind
    offset: int    # top edge, measured from the panel's top
    height: int
    z_order: int


@dataclass(frozen=True)
class LayoutResult:
    rows: tuple[LayoutRow, ...]
    content_height: int
    panel_height: int
    padding: Padding = Padding()

    @property
    def stats(self) -> list[StatDefinition]:
        """Stats in row order, one entry per label/meter pair."""
        return [row.stat for row in self.rows if row.kind == RowKind.LABEL]

    def rows_for(self, stat_id) -> list[LayoutRow]:
        return [row for row in self.rows if row.stat.id == stat_id]


def compute_layout(
    enabled_stats: Iterable[StatDefinition],
    start_offset: int | None = None,
    padding: Padding | None = None,
    metrics: LayoutMetrics = DEFAULT_METRICS,
) -> LayoutResult:
    """Stack a label row and a meter row per enabled stat.

    Args:
        enabled_stats: Stats to show; re-sorted into catalog order.
        start_offset: Top of the first row. Defaults to the title bar height.
        padding: Per-row padding. Defaults to metrics.padding.
        metrics: Row and title bar sizes.

    Each row advances the cursor by padding.top + height + padding.bottom.
    panel_height is exactly title_bar_height + content_height; there is no
    maximum.
    """
    pad = padding if padding is not None else metrics.padding
    cursor = metrics.title_bar_height if start_offset is None else start_offset
    z_order = 1
    content_height = 0
    rows: list[LayoutRow] = []

    for stat in sort_by_catalog(enabled_stats):
        for kind in (RowKind.LABEL, RowKind.METER):
            height = metrics.row_height(kind)
            rows.append(LayoutRow(
                stat=stat,
                kind=kind,
                offset=cursor + pad.top,
                height=height,
                z_order=z_order,
            ))
            advance = height + pad.vertical
            cursor += advance
            content_height += advance
            z_order += 1

    return LayoutResult(
        rows=tuple(rows),
        content_height=content_height,
        panel_height=metrics.title_bar_height + content_height,
        padding=pad,
    )
