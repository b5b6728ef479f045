"""
Модуль CRM: лиды и воронка продаж
"""
