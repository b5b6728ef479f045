from ui.main_window import MainWindow
from PyQt5.QtWidgets import QApplication
from PyQt5.QtCore import Qt
from loguru import logger
import sys

from config.settings import config


def setup_logging():
    """Файловый лог с ротацией в каталоге LOG_DIR"""
    config.log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(
        config.log_dir / "app.log",
        rotation="10 MB",
        retention="14 days",
        encoding="utf-8",
        level="INFO",
    )


if __name__ == "__main__":
    setup_logging()

    # Высокий DPI включается до создания приложения
    if hasattr(Qt, 'AA_EnableHighDpiScaling'):
        QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    if hasattr(Qt, 'AA_UseHighDpiPixmaps'):
        QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)

    app = QApplication(sys.argv)
    logger.info("Запуск приложения")

    win = MainWindow()
    win.show()

    sys.exit(app.exec_())
