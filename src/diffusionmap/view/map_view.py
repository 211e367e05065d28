"""
Map View
========
Draws the backdrop, the entities and the active edges of a Snapshot on a
QGraphicsScene that uses the model's 600 x 700 plane directly.

The static scene (backdrop, entity items) is built once; `show_snapshot`
only restyles items and rebuilds the edge paths.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QRectF, QPointF, Signal
from PySide6.QtGui import QPen, QBrush, QColor, QPainterPath, QPainter, QFont
from PySide6.QtWidgets import (
    QGraphicsView, QGraphicsScene, QGraphicsPathItem, QGraphicsEllipseItem,
    QGraphicsSimpleTextItem, QGraphicsSceneHoverEvent
)

from diffusionmap.config import VIEWBOX_WIDTH, VIEWBOX_HEIGHT
from diffusionmap.model.entities import Entity
from diffusionmap.model.geography import BACKDROP, Feature, FeatureKind
from diffusionmap.model.snapshot import Snapshot, pulse_radius, hub_ring_radius

logger = logging.getLogger(__name__)

BACKGROUND = QColor("#060b14")
LAND_FILL = QColor("#0f172a")
LAND_EDGE = QColor("#334155")
WATER = QColor("#0ea5e9")
LABEL = QColor("#94a3b8")
EDGE_COLOR = QColor("#fbbf24")


def feature_path(feature: Feature) -> QPainterPath:
    path = QPainterPath(QPointF(*feature.start))
    for point in feature.points:
        path.lineTo(QPointF(*point))
    for seg in feature.curves:
        path.quadTo(QPointF(*seg.control), QPointF(*seg.end))
    if feature.closed:
        path.closeSubpath()
    return path


TOOLTIP_BAR_WIDTH = 80
BAR_TRACK = "#334155"


def intensity_bar(value: float, color: str, width: int = TOOLTIP_BAR_WIDTH) -> str:
    """
    Rich-text bar for a tooltip, filled in proportion to `value`.

    Args:
        value: Intensity in [0, 1].
        color: Fill colour (the active layer's accent).
        width: Total bar width in pixels.

    Returns:
        A one-row HTML table; Qt tooltips render it as a bar.
    """
    filled = round(max(0.0, min(1.0, value)) * width)
    cells = []
    if filled:
        cells.append(f'<td width="{filled}" height="4" bgcolor="{color}"></td>')
    if width - filled:
        cells.append(f'<td width="{width - filled}" height="4" bgcolor="{BAR_TRACK}"></td>')
    return f'<table cellspacing="0" cellpadding="0"><tr>{"".join(cells)}</tr></table>'


def entity_tooltip(entity: Entity, snapshot: Snapshot) -> str:
    value = snapshot.intensity_of(entity.key)
    return (
        f"<b>{entity.name}</b> [{entity.category.value.upper()}]<br>"
        f"{snapshot.subtitle(entity)}<br>"
        f"强度: {value:.2f}"
        f"{intensity_bar(value, snapshot.layer.color)}"
    )


def _circle_rect(x: float, y: float, r: float) -> QRectF:
    return QRectF(x - r, y - r, 2 * r, 2 * r)


class EntityItem(QGraphicsEllipseItem):
    """Core dot of one entity; owns its rings and label as siblings in the scene."""

    def __init__(self, entity: Entity, view: MapView) -> None:
        r = 4.0 if entity.is_hub else 2.0
        super().__init__(_circle_rect(entity.x, entity.y, r))
        self.entity = entity
        self._view = view
        self.setAcceptHoverEvents(True)
        self.setCursor(Qt.PointingHandCursor)
        self.setPen(QPen(Qt.NoPen))
        self.setZValue(5)

        self.pulse = QGraphicsEllipseItem()
        self.pulse.setBrush(QBrush(Qt.NoBrush))
        self.pulse.setZValue(3)

        self.hub_ring: Optional[QGraphicsEllipseItem] = None
        if entity.is_hub:
            self.hub_ring = QGraphicsEllipseItem()
            self.hub_ring.setBrush(QBrush(Qt.NoBrush))
            self.hub_ring.setZValue(3)

        self.label = QGraphicsSimpleTextItem(entity.name)
        font = QFont()
        font.setPointSizeF(8)
        font.setBold(True)
        self.label.setFont(font)
        self.label.setBrush(QBrush(LABEL))
        rect = self.label.boundingRect()
        self.label.setPos(entity.x - rect.width() / 2, entity.y - 12 - rect.height())
        self.label.setZValue(6)

    def add_to(self, scene: QGraphicsScene) -> None:
        scene.addItem(self.pulse)
        if self.hub_ring is not None:
            scene.addItem(self.hub_ring)
        scene.addItem(self)
        scene.addItem(self.label)

    def restyle(self, snapshot: Snapshot) -> None:
        value = snapshot.intensity_of(self.entity.key)
        color = QColor(snapshot.layer.color)

        self.setBrush(QBrush(color))

        ring_color = QColor(color)
        ring_color.setAlphaF(0.5)
        self.pulse.setPen(QPen(ring_color, 0.5))
        self.pulse.setRect(_circle_rect(self.entity.x, self.entity.y, pulse_radius(value)))

        if self.hub_ring is not None:
            ring_color.setAlphaF(0.3)
            self.hub_ring.setPen(QPen(ring_color, 0.5))
            self.hub_ring.setRect(_circle_rect(self.entity.x, self.entity.y, hub_ring_radius(value)))

        self.label.setVisible(snapshot.is_labelled(self.entity))
        self.setToolTip(entity_tooltip(self.entity, snapshot))

    def hoverEnterEvent(self, event: QGraphicsSceneHoverEvent) -> None:
        self._view.entity_hovered.emit(self.entity.key)
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event: QGraphicsSceneHoverEvent) -> None:
        self._view.entity_hovered.emit("")
        super().hoverLeaveEvent(event)


class MapView(QGraphicsView):
    # Entity key under the cursor, "" when the cursor leaves it
    entity_hovered = Signal(str)

    def __init__(self, entities: list[Entity], parent=None) -> None:
        super().__init__(parent)
        self.setRenderHint(QPainter.Antialiasing, True)
        self.setBackgroundBrush(QBrush(BACKGROUND))

        self._scene = QGraphicsScene(0, 0, VIEWBOX_WIDTH, VIEWBOX_HEIGHT, self)
        self.setScene(self._scene)

        self._build_backdrop()

        self.entity_items: dict[str, EntityItem] = {}
        for entity in entities:
            item = EntityItem(entity, self)
            item.add_to(self._scene)
            self.entity_items[entity.key] = item

        self.edge_items: list[QGraphicsPathItem] = []

    def _build_backdrop(self) -> None:
        for feature in BACKDROP:
            item = QGraphicsPathItem(feature_path(feature))
            match feature.kind:
                case FeatureKind.LAND:
                    item.setPen(QPen(LAND_EDGE, 1))
                    item.setBrush(QBrush(LAND_FILL))
                case FeatureKind.RIVER:
                    water = QColor(WATER)
                    water.setAlphaF(0.3)
                    pen = QPen(water, 8)
                    pen.setCapStyle(Qt.RoundCap)
                    item.setPen(pen)
                case FeatureKind.LAKE:
                    water = QColor(WATER)
                    water.setAlphaF(0.2)
                    item.setPen(QPen(Qt.NoPen))
                    item.setBrush(QBrush(water))
                case FeatureKind.CANAL:
                    water = QColor(WATER)
                    water.setAlphaF(0.3)
                    item.setPen(QPen(water, 1, Qt.DashLine))
            item.setZValue(0)
            self._scene.addItem(item)

    def show_snapshot(self, snapshot: Snapshot) -> None:
        for item in self.entity_items.values():
            item.restyle(snapshot)

        for item in self.edge_items:
            self._scene.removeItem(item)
        self.edge_items.clear()

        pen = QPen(EDGE_COLOR, 2)
        pen.setCapStyle(Qt.RoundCap)
        for edge in snapshot.active_edges:
            path = QPainterPath(QPointF(*edge.source.position))
            path.quadTo(QPointF(*edge.control_point()), QPointF(*edge.target.position))
            item = QGraphicsPathItem(path)
            item.setPen(pen)
            item.setOpacity(0.6)
            item.setZValue(2)
            self._scene.addItem(item)
            self.edge_items.append(item)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.fitInView(self._scene.sceneRect(), Qt.KeepAspectRatio)
