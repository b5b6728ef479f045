"""
Колонка канбан-доски лидов
"""

from typing import List

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import QFrame, QLabel, QScrollArea, QVBoxLayout, QWidget

from modules.crm.leads.lead_card import MIME_PREFIX, LeadCard
from modules.crm.leads.models import STATUS_COLORS, LeadStatus
from modules.styles.general_styles import apply_frame_style, apply_label_style


class LeadKanbanColumn(QFrame):
    """Колонка этапа воронки; сброс карточки запрашивает смену этапа"""

    lead_dropped = pyqtSignal(str, object)

    def __init__(self, status: LeadStatus, parent=None):
        super().__init__(parent)
        self.status = status
        self.cards: List[LeadCard] = []
        self.setAcceptDrops(True)
        self.init_ui()

    def init_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(8)
        layout.setContentsMargins(8, 8, 8, 8)
        apply_frame_style(self, 'column')

        header = QLabel(self.status.label)
        apply_label_style(header, 'h3')
        header.setStyleSheet(
            header.styleSheet() + f" border: none; border-top: 3px solid {STATUS_COLORS[self.status]};"
        )
        layout.addWidget(header)

        self.counter_label = QLabel("0")
        apply_label_style(self.counter_label, 'small')
        layout.addWidget(self.counter_label)

        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)
        scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        scroll_area.setStyleSheet("QScrollArea { border: none; background: transparent; }")

        self.cards_container = QWidget()
        self.cards_layout = QVBoxLayout(self.cards_container)
        self.cards_layout.setSpacing(8)
        self.cards_layout.setContentsMargins(0, 0, 0, 0)
        self.cards_layout.addStretch()

        scroll_area.setWidget(self.cards_container)
        layout.addWidget(scroll_area)

    def add_card(self, card: LeadCard):
        self.cards_layout.insertWidget(self.cards_layout.count() - 1, card)
        self.cards.append(card)
        self.update_counter()

    def clear(self):
        for card in self.cards:
            self.cards_layout.removeWidget(card)
            card.deleteLater()
        self.cards = []
        self.update_counter()

    def update_counter(self):
        self.counter_label.setText(str(len(self.cards)))

    @staticmethod
    def _lead_id_from(event) -> str:
        mime = event.mimeData()
        if mime.hasText() and mime.text().startswith(MIME_PREFIX):
            return mime.text()[len(MIME_PREFIX):]
        return ""

    def dragEnterEvent(self, event):
        if self._lead_id_from(event):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if self._lead_id_from(event):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        lead_id = self._lead_id_from(event)
        if not lead_id:
            event.ignore()
            return
        event.acceptProposedAction()
        self.lead_dropped.emit(lead_id, self.status)
