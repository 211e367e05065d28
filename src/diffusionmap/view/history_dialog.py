"""Dialog for plotting entity intensity over the whole timeline."""
from __future__ import annotations

import logging

import numpy as np
import pyqtgraph as pg
from pyqtgraph.exporters import ImageExporter
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QCheckBox, QComboBox,
    QPushButton, QScrollArea, QWidget, QLabel, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt, Signal

from diffusionmap.config import MIN_YEAR, MAX_YEAR
from diffusionmap.model.entities import Entity
from diffusionmap.model.intensity import IntensityModel
from diffusionmap.model.layers import Layer


logger = logging.getLogger(__name__)


class EntitySelectionWidget(QWidget):
    """Checkbox list of entities, hubs first."""

    selection_changed = Signal()

    def __init__(self, entities: list[Entity]) -> None:
        super().__init__()
        self.entities = {entity.key: entity for entity in entities}
        self.checkboxes: dict[str, QCheckBox] = {}

        layout = QVBoxLayout(self)

        header_layout = QHBoxLayout()
        header_layout.addWidget(QLabel("<b>城市</b>"))

        self.toggle_all_btn = QPushButton("全部取消")
        self.toggle_all_btn.setMaximumWidth(120)
        self.toggle_all_btn.clicked.connect(self._toggle_all)
        header_layout.addWidget(self.toggle_all_btn)
        header_layout.addStretch()

        layout.addLayout(header_layout)

        ordered = sorted(entities, key=lambda e: (not e.is_hub, e.key))
        for entity in ordered:
            checkbox = QCheckBox(f"{entity.name} ({entity.category.value})")
            # Hubs are the interesting curves; start with only those shown
            checkbox.setChecked(entity.is_hub)
            checkbox.stateChanged.connect(self._on_checkbox_changed)
            self.checkboxes[entity.key] = checkbox
            layout.addWidget(checkbox)

        layout.addStretch()

    def _on_checkbox_changed(self) -> None:
        self.selection_changed.emit()

    def _toggle_all(self) -> None:
        any_unchecked = any(not cb.isChecked() for cb in self.checkboxes.values())
        new_state = any_unchecked

        for checkbox in self.checkboxes.values():
            checkbox.blockSignals(True)
            checkbox.setChecked(new_state)
            checkbox.blockSignals(False)

        self.toggle_all_btn.setText("全部取消" if new_state else "全部选择")
        self.selection_changed.emit()

    def get_selected(self) -> list[Entity]:
        """
        Get the entities whose checkbox is ticked.

        Returns:
            Selected entities in display order (hubs first).
        """
        return [
            self.entities[key]
            for key, checkbox in self.checkboxes.items()
            if checkbox.isChecked()
        ]


class IntensityHistoryDialog(QDialog):
    """Intensity curves of the selected entities across [MIN_YEAR, MAX_YEAR]."""

    COLORS = [
        '#1f77b4',  # Blue
        '#ff7f0e',  # Orange
        '#2ca02c',  # Green
        '#d62728',  # Red
        '#9467bd',  # Purple
        '#8c564b',  # Brown
        '#e377c2',  # Pink
        '#7f7f7f',  # Gray
        '#bcbd22',  # Olive
        '#17becf',  # Cyan
    ]

    def __init__(
        self,
        entities: list[Entity],
        model: IntensityModel,
        layer: Layer,
        current_year: int,
        parent: QWidget | None = None
    ) -> None:
        """
        Args:
            entities: Entities offered for plotting.
            model: Intensity model evaluated over the whole timeline.
            layer: Layer shown when the dialog opens.
            current_year: Year marked by the dashed cursor line.
            parent: Parent widget.
        """
        super().__init__(parent)
        self.entities = entities
        self.model = model
        self.layer = Layer(layer)
        self.current_year = current_year
        self.years = np.arange(MIN_YEAR, MAX_YEAR + 1, dtype=np.float64)

        self.setWindowTitle("强度历史")
        self.resize(1100, 650)

        self._build_ui()
        self._update_plot()

    def _build_ui(self) -> None:
        main_layout = QHBoxLayout(self)

        # Left panel: Selection controls
        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_panel.setMaximumWidth(250)

        title = QLabel("<h3>选择城市</h3>")
        title.setAlignment(Qt.AlignCenter)
        left_layout.addWidget(title)

        self.combo_layer = QComboBox()
        for layer in Layer:
            self.combo_layer.addItem(layer.label, layer.value)
        self.combo_layer.setCurrentIndex(list(Layer).index(self.layer))
        self.combo_layer.currentIndexChanged.connect(self._on_layer_changed)
        left_layout.addWidget(self.combo_layer)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)

        self.selection = EntitySelectionWidget(self.entities)
        self.selection.selection_changed.connect(self._update_plot)
        scroll.setWidget(self.selection)
        left_layout.addWidget(scroll)

        export_btn = QPushButton("导出图片...")
        export_btn.clicked.connect(self._export_image)
        left_layout.addWidget(export_btn)

        close_btn = QPushButton("关闭")
        close_btn.clicked.connect(self.accept)
        left_layout.addWidget(close_btn)

        main_layout.addWidget(left_panel)

        # Right panel: Plot
        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground('w')
        self.plot_widget.showGrid(x=True, y=True, alpha=0.3)
        self.plot_widget.setLabel('bottom', '年份', color='black')
        self.plot_widget.setLabel('left', '强度', color='black')
        self.plot_widget.getAxis('bottom').setPen('k')
        self.plot_widget.getAxis('left').setPen('k')
        self.plot_widget.getAxis('bottom').setTextPen('k')
        self.plot_widget.getAxis('left').setTextPen('k')
        self.plot_widget.addLegend(offset=(10, 10))

        main_layout.addWidget(self.plot_widget, stretch=1)

    def _on_layer_changed(self, index: int) -> None:
        self.layer = Layer(self.combo_layer.itemData(index))
        self._update_plot()

    def _update_plot(self) -> None:
        """Redraw one curve per selected entity on the current layer."""
        selected = self.selection.get_selected()

        self.plot_widget.clear()
        self.plot_widget.setTitle(f'{self.layer.label} 强度历史', color='black', size='14pt')

        if not selected:
            text_item = pg.TextItem('请至少选择一个城市', color='gray', anchor=(0.5, 0.5))
            text_item.setPos(0.5, 0.5)
            self.plot_widget.addItem(text_item)
            self.plot_widget.setXRange(0, 1)
            self.plot_widget.setYRange(0, 1)
            return

        # Re-add legend after clearing
        self.plot_widget.addLegend(offset=(10, 10))

        for color_idx, entity in enumerate(selected):
            values = self.model.series(entity, self.years, self.layer)
            color = self.COLORS[color_idx % len(self.COLORS)]
            self.plot_widget.plot(self.years, values, pen=pg.mkPen(color=color, width=2), name=entity.name)

        cursor = pg.InfiniteLine(
            pos=self.current_year,
            angle=90,
            pen=pg.mkPen(color='k', width=1, style=Qt.DashLine),
            label=str(self.current_year),
            labelOpts={'position': 0.95, 'color': 'k', 'fill': (255, 255, 255, 150)}
        )
        self.plot_widget.addItem(cursor)

        self.plot_widget.setXRange(MIN_YEAR, MAX_YEAR)
        self.plot_widget.setYRange(0.0, 1.0)

    def _export_image(self) -> None:
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            "保存图片",
            f"intensity_{self.layer.value}.png",
            "PNG (*.png);;JPEG (*.jpg)"
        )

        if not file_path:
            return

        try:
            exporter = ImageExporter(self.plot_widget.plotItem)
            exporter.parameters()['width'] = 1920
            exporter.export(file_path)
            logger.info(f"Plot exported to {file_path}")

        except Exception as e:
            logger.exception("Failed to export plot")
            QMessageBox.critical(self, "导出失败", f"无法导出图片:\n{str(e)}")
