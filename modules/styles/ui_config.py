"""
Конфигурация окон и диалогов PyQt5.
"""

from typing import Optional

from PyQt5.QtWidgets import QDialog, QMainWindow


class WindowConfig:
    """Размеры окон и диалогов."""

    DIALOG_SIZES = {
        "small": (420, 320),
        "medium": (600, 460),
        "large": (820, 640),
    }

    MIN_SIZES = {
        "dialog": (400, 300),
        "window": (1024, 700),
    }

    @staticmethod
    def configure_dialog(
        dialog: QDialog,
        title: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        size_preset: Optional[str] = None,
    ) -> None:
        """
        Настройка диалогового окна.

        Args:
            dialog: Экземпляр QDialog
            title: Заголовок окна
            width: Ширина окна (если не указан, используется size_preset)
            height: Высота окна (если не указан, используется size_preset)
            size_preset: Предустановленный размер ('small', 'medium', 'large')
        """
        dialog.setWindowTitle(title)

        if size_preset in WindowConfig.DIALOG_SIZES:
            preset_width, preset_height = WindowConfig.DIALOG_SIZES[size_preset]
            width = width or preset_width
            height = height or preset_height

        if width and height:
            dialog.resize(width, height)
        dialog.setMinimumSize(*WindowConfig.MIN_SIZES["dialog"])

    @staticmethod
    def configure_window(
        window: QMainWindow,
        title: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> None:
        window.setWindowTitle(title)
        if width and height:
            window.resize(width, height)
        window.setMinimumSize(*WindowConfig.MIN_SIZES["window"])


def configure_dialog(
    dialog: QDialog,
    title: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
    size_preset: Optional[str] = None,
) -> None:
    """Настройка диалогового окна."""
    WindowConfig.configure_dialog(dialog, title, width, height, size_preset)


def configure_window(
    window: QMainWindow,
    title: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> None:
    """Настройка главного окна приложения."""
    WindowConfig.configure_window(window, title, width, height)
