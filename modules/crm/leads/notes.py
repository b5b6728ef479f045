"""
Журнал заметок лида.

В бэкенде заметки хранятся одним текстовым полем: блоки вида
``[dd/mm/YYYY HH:MM] текст``, новые сверху, разделены пустой строкой.
Здесь журнал представлен списком NoteEntry и сериализуется обратно
в тот же формат.
"""

import re
from datetime import datetime
from typing import List, Optional

from modules.crm.leads.models import NoteEntry

NOTE_TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M"
NOTE_SEPARATOR = "\n\n"

_HEADER_RE = re.compile(r"^\[(\d{2}/\d{2}/\d{4} \d{2}:\d{2})(?: \| ([^\]]+))?\] ?(.*)$", re.DOTALL)


def parse_notes(raw: Optional[str]) -> List[NoteEntry]:
    """Разбор текстового поля notes в список записей (новые первыми)"""
    if not raw or not raw.strip():
        return []

    entries: List[NoteEntry] = []
    for block in raw.split(NOTE_SEPARATOR):
        block = block.strip()
        if not block:
            continue
        match = _HEADER_RE.match(block)
        if not match:
            entries.append(NoteEntry(text=block))
            continue
        timestamp_raw, author, text = match.groups()
        try:
            timestamp = datetime.strptime(timestamp_raw, NOTE_TIMESTAMP_FORMAT)
        except ValueError:
            entries.append(NoteEntry(text=block))
            continue
        entries.append(NoteEntry(text=text.strip(), timestamp=timestamp, author=author.strip() if author else None))
    return entries


def format_note(entry: NoteEntry) -> str:
    if entry.timestamp is None:
        return entry.text
    stamp = entry.timestamp.strftime(NOTE_TIMESTAMP_FORMAT)
    if entry.author:
        return f"[{stamp} | {entry.author}] {entry.text}"
    return f"[{stamp}] {entry.text}"


def format_notes(entries: List[NoteEntry]) -> Optional[str]:
    """Сериализация журнала в текстовое поле (None для пустого журнала)"""
    if not entries:
        return None
    return NOTE_SEPARATOR.join(format_note(entry) for entry in entries)


def prepend_note(
    entries: List[NoteEntry],
    text: str,
    now: datetime,
    author: Optional[str] = None
) -> List[NoteEntry]:
    """Новый журнал с записью в начале; исходный список не меняется"""
    # Точность отметки в текстовом формате: минуты
    entry = NoteEntry(text=text.strip(), timestamp=now.replace(second=0, microsecond=0), author=author)
    return [entry] + list(entries)
