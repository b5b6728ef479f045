"""
Единые стили приложения back office
"""
from config.settings import config

UI_CONFIG = config.ui

BASE_FONT_SIZE = UI_CONFIG.font_size if UI_CONFIG.font_size > 0 else 14
FONT_FAMILY = UI_CONFIG.font_family or 'Arial'

FONT_SIZES = {
    'h1': f"{int(BASE_FONT_SIZE * 1.43)}px",
    'h2': f"{int(BASE_FONT_SIZE * 1.29)}px",
    'h3': f"{int(BASE_FONT_SIZE * 1.14)}px",
    'normal': f"{BASE_FONT_SIZE}px",
    'small': f"{int(BASE_FONT_SIZE * 0.86)}px",
    'xlarge': f"{int(BASE_FONT_SIZE * 1.71)}px",
}

SIZES = {
    'padding_small': 4,
    'padding_normal': 6,
    'padding_large': 10,
    'border_radius_small': 4,
    'border_radius_normal': 6,
    'border_radius_large': 8,
    'button_height': 28,
    'input_height': 28,
    'column_width': 230,
    'sidebar_width': 200,
    'topbar_height': 48,
}

# Палитра: зеленый травел-бренд
COLORS = {
    'primary': '#0F766E',
    'primary_dark': '#115E59',
    'secondary': '#F5F5F4',
    'white': '#FFFFFF',
    'text_dark': '#1F2937',
    'text_light': '#6B7280',
    'border': '#D6D3D1',
    'success': '#16A34A',
    'warning': '#D97706',
    'error': '#DC2626',
}

BUTTON_STYLES = {
    'primary': f"""
        QPushButton {{
            background: {COLORS['primary']};
            color: white;
            border: none;
            border-radius: {SIZES['border_radius_normal']}px;
            padding: 4px 10px;
            font-weight: bold;
            font-family: "{FONT_FAMILY}";
            font-size: {FONT_SIZES['normal']};
            min-height: {SIZES['button_height']}px;
        }}
        QPushButton:hover {{
            background: {COLORS['primary_dark']};
        }}
        QPushButton:disabled {{
            background: #cccccc;
            color: #666666;
        }}
    """,

    'outline': f"""
        QPushButton {{
            background: transparent;
            color: {COLORS['text_dark']};
            border: 1px solid {COLORS['border']};
            border-radius: {SIZES['border_radius_small']}px;
            padding: 3px 8px;
            font-family: "{FONT_FAMILY}";
            font-size: {FONT_SIZES['normal']};
            min-height: {SIZES['button_height'] - 4}px;
        }}
        QPushButton:hover {{
            background: {COLORS['secondary']};
            border-color: {COLORS['primary']};
        }}
    """,

    'danger': f"""
        QPushButton {{
            background: {COLORS['white']};
            color: {COLORS['error']};
            border: 1px solid {COLORS['error']};
            border-radius: {SIZES['border_radius_small']}px;
            padding: 3px 8px;
            font-family: "{FONT_FAMILY}";
            font-size: {FONT_SIZES['normal']};
            min-height: {SIZES['button_height'] - 4}px;
        }}
        QPushButton:hover {{
            background: {COLORS['error']};
            color: white;
        }}
    """,
}

INPUT_STYLES = {
    'default': f"""
        QLineEdit, QTextEdit, QDateEdit {{
            border: 2px solid {COLORS['border']};
            border-radius: {SIZES['border_radius_small']}px;
            padding: {SIZES['padding_small']}px {SIZES['padding_normal']}px;
            font-family: "{FONT_FAMILY}";
            font-size: {FONT_SIZES['normal']};
            background: {COLORS['white']};
            min-height: {SIZES['input_height']}px;
        }}
        QLineEdit:focus, QTextEdit:focus, QDateEdit:focus {{
            border-color: {COLORS['primary']};
        }}
    """
}

COMBOBOX_STYLES = {
    'default': f"""
        QComboBox {{
            border: 2px solid {COLORS['border']};
            border-radius: {SIZES['border_radius_small']}px;
            padding: {SIZES['padding_small']}px {SIZES['padding_normal']}px;
            font-family: "{FONT_FAMILY}";
            font-size: {FONT_SIZES['normal']};
            background: {COLORS['white']};
            min-width: 120px;
            min-height: {SIZES['input_height']}px;
        }}
        QComboBox:focus {{
            border-color: {COLORS['primary']};
        }}
    """
}

LABEL_STYLES = {
    'h1': f"font-family: \"{FONT_FAMILY}\"; font-size: {FONT_SIZES['h1']}; font-weight: bold; color: {COLORS['primary']}; margin-bottom: 10px;",
    'h2': f"font-family: \"{FONT_FAMILY}\"; font-size: {FONT_SIZES['h2']}; font-weight: bold; color: {COLORS['text_dark']}; margin-bottom: 8px;",
    'h3': f"font-family: \"{FONT_FAMILY}\"; font-size: {FONT_SIZES['h3']}; font-weight: bold; color: {COLORS['text_dark']};",
    'normal': f"font-family: \"{FONT_FAMILY}\"; font-size: {FONT_SIZES['normal']}; color: {COLORS['text_dark']};",
    'small': f"font-family: \"{FONT_FAMILY}\"; font-size: {FONT_SIZES['small']}; color: {COLORS['text_light']};",
    'metric': f"font-family: \"{FONT_FAMILY}\"; font-size: {FONT_SIZES['xlarge']}; font-weight: bold; color: {COLORS['text_dark']};",
}

FRAME_STYLES = {
    'card': f"""
        QFrame {{
            background: {COLORS['white']};
            border-radius: {SIZES['border_radius_large']}px;
            border: 1px solid {COLORS['border']};
            padding: {SIZES['padding_large']}px;
        }}
    """,

    'column': f"""
        QFrame {{
            background: {COLORS['secondary']};
            border-radius: {SIZES['border_radius_large']}px;
            border: 1px solid {COLORS['border']};
            min-width: {SIZES['column_width']}px;
        }}
    """,
}

TABLE_STYLES = {
    'default': f"""
        QTableWidget {{
            font-family: "{FONT_FAMILY}";
            font-size: {FONT_SIZES['normal']};
            border-radius: {SIZES['border_radius_normal']}px;
            background: {COLORS['white']};
            gridline-color: {COLORS['border']};
        }}
        QHeaderView::section {{
            background: {COLORS['primary']};
            color: white;
            font-weight: bold;
            font-family: "{FONT_FAMILY}";
            padding: 8px;
            border: none;
        }}
    """
}

SIDEBAR_STYLES = {
    'frame': f"""
        QFrame {{
            background: {COLORS['secondary']};
            border-right: 1px solid {COLORS['border']};
            min-width: {SIZES['sidebar_width']}px;
        }}
    """,

    'button': f"""
        QPushButton {{
            color: {COLORS['primary']};
            background: none;
            font-family: "{FONT_FAMILY}";
            font-size: {FONT_SIZES['h3']};
            border: none;
            padding: 12px 10px;
            text-align: left;
            border-radius: {SIZES['border_radius_large']}px;
            min-height: 40px;
        }}
        QPushButton:checked, QPushButton:hover {{
            background: #CCFBF1;
            font-weight: bold;
        }}
    """,
}

TOPBAR_STYLES = {
    'default': f"""
        QFrame {{
            background: {COLORS['primary']};
            min-height: {SIZES['topbar_height']}px;
        }}
        QLabel {{
            color: {COLORS['white']};
            font-family: "{FONT_FAMILY}";
            font-size: {FONT_SIZES['h2']};
            font-weight: bold;
        }}
    """
}

# Плашки результата проверки паспорта: (фон, текст)
NOTICE_COLORS = {
    'error': ('#FEE2E2', COLORS['error']),
    'warning': ('#FEF3C7', COLORS['warning']),
    'success': ('#DCFCE7', COLORS['success']),
}


def apply_button_style(widget, style_type='primary'):
    widget.setStyleSheet(BUTTON_STYLES.get(style_type, BUTTON_STYLES['primary']))


def apply_input_style(widget, style_type='default'):
    widget.setStyleSheet(INPUT_STYLES.get(style_type, INPUT_STYLES['default']))


def apply_label_style(widget, style_type='normal'):
    widget.setStyleSheet(LABEL_STYLES.get(style_type, LABEL_STYLES['normal']))


def apply_combobox_style(widget):
    widget.setStyleSheet(COMBOBOX_STYLES['default'])


def apply_frame_style(widget, style_type='card'):
    widget.setStyleSheet(FRAME_STYLES.get(style_type, FRAME_STYLES['card']))


def apply_table_style(widget):
    widget.setStyleSheet(TABLE_STYLES['default'])


def apply_notice_style(widget, severity: str):
    """Цветная плашка уведомления (error / warning / success)"""
    background, color = NOTICE_COLORS.get(severity, NOTICE_COLORS['warning'])
    widget.setStyleSheet(
        f"background: {background}; color: {color}; border: 1px solid {color}; "
        f"border-radius: {SIZES['border_radius_small']}px; padding: {SIZES['padding_normal']}px; "
        f"font-family: \"{FONT_FAMILY}\"; font-size: {FONT_SIZES['normal']};"
    )


def apply_badge_style(widget, color: str):
    widget.setStyleSheet(
        f"background: {color}; color: white; border-radius: {SIZES['border_radius_small']}px; "
        f"padding: 2px 6px; font-size: {FONT_SIZES['small']}; font-weight: bold;"
    )


def apply_sidebar_style(widget):
    widget.setStyleSheet(SIDEBAR_STYLES['frame'])


def apply_sidebar_button_style(widget):
    widget.setStyleSheet(SIDEBAR_STYLES['button'])


def apply_topbar_style(widget):
    widget.setStyleSheet(TOPBAR_STYLES['default'])
