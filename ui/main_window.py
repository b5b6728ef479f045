from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout,
    QLabel, QPushButton, QStackedWidget, QFrame, QSizePolicy, QApplication
)
from PyQt5.QtCore import Qt
from loguru import logger

from modules.bookings.booking_repository import BookingRepository
from modules.bookings.departure_repository import DepartureRepository
from modules.crm.leads.analytics_widget import LeadAnalyticsWidget
from modules.crm.leads.conversion_service import LeadConversionService
from modules.crm.leads.lead_repository import LeadRepository
from modules.crm.leads.lead_service import LeadService
from modules.crm.leads.leads_widget import LeadsWidget
from modules.customers.customer_repository import CustomerRepository
from modules.customers.customer_service import CustomerService
from modules.customers.customers_widget import CustomersWidget
from modules.documents.document_service import DocumentService
from modules.documents.documents_widget import DocumentsWidget

# Импортируем единые стили
from modules.styles.general_styles import (
    SIZES, apply_sidebar_style, apply_label_style,
    apply_sidebar_button_style, apply_topbar_style
)
from modules.styles.ui_config import configure_window

# Импортируем менеджер базы данных
from core.database import DatabaseManager
from core.exceptions import DatabaseConnectionError
from config.settings import config

APP_TITLE = "🕋 Back Office Umrah & Haji"


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        configure_window(self, APP_TITLE)

        # Настройка размера окна под экран пользователя
        screen = QApplication.primaryScreen()
        if screen is not None:
            size = screen.availableGeometry()
            self.resize(int(size.width() * 0.95), int(size.height() * 0.95))

        # Без подключения окно открывается, разделы покажут ошибку при загрузке
        self.db_manager = DatabaseManager(config.database)
        try:
            self.db_manager.connect()
            logger.info("База данных подключена в главном окне")
        except DatabaseConnectionError as e:
            logger.error(f"Ошибка подключения к БД в главном окне: {e}")

        self._init_services()
        self.init_ui()

    def _init_services(self):
        """Репозитории и сервисы поверх общего подключения"""
        lead_repo = LeadRepository(self.db_manager)
        customer_repo = CustomerRepository(self.db_manager)
        departure_repo = DepartureRepository(self.db_manager)
        booking_repo = BookingRepository(self.db_manager)

        self.customer_repo = customer_repo
        self.lead_service = LeadService(lead_repo, departure_repo)
        self.conversion_service = LeadConversionService(
            self.db_manager, lead_repo, customer_repo, departure_repo, booking_repo
        )
        self.customer_service = CustomerService(customer_repo)
        self.document_service = DocumentService(config.export_dir)

    def init_ui(self):
        """Инициализация пользовательского интерфейса"""
        central_widget = QWidget()
        main_layout = QVBoxLayout(central_widget)
        main_layout.setSpacing(0)
        main_layout.setContentsMargins(0, 0, 0, 0)

        # --------- Верхняя панель (TopBar) ----------
        topbar = QFrame()
        apply_topbar_style(topbar)
        top_layout = QHBoxLayout(topbar)
        top_layout.setContentsMargins(30, 8, 40, 8)
        top_layout.addWidget(QLabel(f"{APP_TITLE} — {config.company.name}"))
        top_layout.addStretch()
        main_layout.addWidget(topbar)

        content_layout = QHBoxLayout()
        content_layout.setSpacing(0)
        content_layout.setContentsMargins(0, 0, 0, 0)

        # ------------- Боковая панель (Sidebar) --------------
        sidebar = QFrame()
        sidebar.setFixedWidth(SIZES['sidebar_width'])
        apply_sidebar_style(sidebar)
        side_layout = QVBoxLayout(sidebar)
        side_layout.setContentsMargins(16, 30, 12, 20)

        sections_title = QLabel("Menu")
        apply_label_style(sections_title, 'h1')
        side_layout.addWidget(sections_title, alignment=Qt.AlignLeft)
        side_layout.addSpacing(12)

        self.leads_widget = LeadsWidget(self.lead_service, self.conversion_service)
        self.analytics_widget = LeadAnalyticsWidget(self.lead_service)
        self.customers_widget = CustomersWidget(
            self.customer_repo, self.customer_service, self.document_service
        )
        self.documents_widget = DocumentsWidget(self.document_service)

        sections = [
            ('Lead 📋', self.leads_widget),
            ('Analitik 📈', self.analytics_widget),
            ('Jamaah 👥', self.customers_widget),
            ('Dokumen 📄', self.documents_widget),
        ]

        self.stacked = QStackedWidget()
        self.stacked.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        self.buttons = []
        for i, (name, widget) in enumerate(sections):
            btn = QPushButton(name)
            btn.setCheckable(True)
            btn.setAutoExclusive(True)
            btn.clicked.connect(lambda checked, n=i: self.on_section_clicked(n))
            apply_sidebar_button_style(btn)

            side_layout.addWidget(btn)
            self.stacked.addWidget(widget)
            self.buttons.append(btn)

        self.buttons[0].setChecked(True)
        side_layout.addStretch()

        content_layout.addWidget(sidebar)
        content_layout.addWidget(self.stacked)
        main_layout.addLayout(content_layout)

        self.setCentralWidget(central_widget)

    def on_section_clicked(self, index: int):
        """Переключение раздела; аналитика перечитывает лиды при открытии"""
        self.stacked.setCurrentIndex(index)
        if self.stacked.currentWidget() is self.analytics_widget:
            self.analytics_widget.load_leads()

    def closeEvent(self, event):
        self.db_manager.disconnect()
        super().closeEvent(event)
