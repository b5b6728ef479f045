"""
Исключения приложения
"""

from typing import Optional


class AppError(Exception):
    """Базовое исключение приложения"""


class DatabaseError(AppError):
    """Ошибка работы с базой данных бэкенда"""


class DatabaseConnectionError(DatabaseError):
    """Нет подключения к базе данных"""


class DatabaseQueryError(DatabaseError):
    """Ошибка выполнения запроса"""


class LeadError(AppError):
    """Базовая ошибка модуля лидов"""


class LeadNotFoundError(LeadError):
    """Лид не найден"""

    def __init__(self, lead_id: str):
        super().__init__(f"Lead tidak ditemukan: {lead_id}")
        self.lead_id = lead_id


class LeadValidationError(LeadError):
    """Ошибка валидации данных лида (до отправки запроса)"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidTransitionError(LeadError):
    """Недопустимый переход статуса лида"""

    def __init__(self, current: str, target: str, reason: str = ""):
        message = f"Переход {current} -> {target} недопустим"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.current = current
        self.target = target


class LeadConversionError(LeadError):
    """Ошибка конвертации лида в бронирование"""

    def __init__(self, step: str, cause: Exception):
        super().__init__(f"Konversi gagal pada langkah '{step}': {cause}")
        self.step = step
        self.cause = cause


class CustomerError(AppError):
    """Базовая ошибка модуля клиентов"""


class CustomerValidationError(CustomerError):
    """Ошибка валидации данных клиента"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DocumentGenerationError(AppError):
    """Ошибка формирования документа"""
