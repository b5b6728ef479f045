"""
Карточка лида для канбан-доски
"""

from PyQt5.QtCore import QMimeData, QPoint, Qt, pyqtSignal
from PyQt5.QtGui import QDrag, QMouseEvent
from PyQt5.QtWidgets import QFrame, QLabel, QVBoxLayout

from core.date_utils import format_date_id
from modules.crm.leads.models import LEAD_SOURCES, Lead
from modules.styles.general_styles import COLORS, SIZES, apply_label_style

MIME_PREFIX = "LeadCard:"


class LeadCard(QFrame):
    """Карточка лида в колонке канбана"""

    clicked = pyqtSignal(object)

    def __init__(self, lead: Lead, parent=None):
        super().__init__(parent)
        self.lead = lead
        self.drag_start_position = QPoint()
        self.setCursor(Qt.PointingHandCursor)
        self.init_ui()
        self.update_style()

    def init_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(4)
        layout.setContentsMargins(10, 10, 10, 10)

        name_label = QLabel(self.lead.full_name)
        name_label.setWordWrap(True)
        apply_label_style(name_label, 'normal')
        name_label.setStyleSheet(f"font-weight: bold; color: {COLORS['text_dark']};")
        layout.addWidget(name_label)

        details = []
        if self.lead.phone:
            details.append(f"📞 {self.lead.phone}")
        if self.lead.package_name:
            details.append(f"🕋 {self.lead.package_name}")
        if self.lead.source:
            details.append(f"🔗 {LEAD_SOURCES.get(self.lead.source, self.lead.source)}")
        if self.lead.follow_up_date:
            details.append(f"📅 Follow up: {format_date_id(self.lead.follow_up_date)}")

        for detail in details:
            label = QLabel(detail)
            apply_label_style(label, 'small')
            layout.addWidget(label)

    def update_style(self):
        self.setStyleSheet(f"""
            QFrame {{
                background: {COLORS['white']};
                border: 1px solid {COLORS['border']};
                border-radius: {SIZES['border_radius_normal']}px;
            }}
            QFrame:hover {{
                border: 2px solid {COLORS['primary']};
            }}
        """)

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton:
            self.drag_start_position = event.pos()
        super().mousePressEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent):
        """Двойной клик открывает карточку лида"""
        if event.button() == Qt.LeftButton:
            self.clicked.emit(self.lead)
            event.accept()
            return
        super().mouseDoubleClickEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        """Перетаскивание карточки в другую колонку"""
        if not (event.buttons() & Qt.LeftButton):
            return
        if (event.pos() - self.drag_start_position).manhattanLength() < 10:
            return

        drag = QDrag(self)
        mime_data = QMimeData()
        mime_data.setText(f"{MIME_PREFIX}{self.lead.id}")
        drag.setMimeData(mime_data)
        drag.setPixmap(self.grab())
        drag.setHotSpot(event.pos())
        drag.exec_(Qt.MoveAction)
