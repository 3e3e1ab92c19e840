"""QSS stylesheet, palette, and timer-state colours for FocusDesk."""

from __future__ import annotations

from ..timer.engine import TimerState

# ── state colours (ring gradient pairs) ──────────────────────────────────
#    Each state maps to (primary, secondary) for the conical gradient.

STATE_COLORS: dict[TimerState, tuple[str, str]] = {
    TimerState.RUNNING_WORK:  ("#FF6B6B", "#FFA07A"),   # warm coral
    TimerState.RUNNING_BREAK: ("#4ECDC4", "#44B09E"),   # cool teal
    TimerState.IDLE_WORK:     ("#8A6F7A", "#6C5A66"),   # dim coral
    TimerState.IDLE_BREAK:    ("#557A78", "#466866"),   # dim teal
}

# Priority → accent used by the task board
PRIORITY_COLORS: dict[str, str] = {
    "high":   "#F38BA8",
    "medium": "#F9E2AF",
    "low":    "#A6E3A1",
}

PALETTE: dict[str, str] = {
    "bg":           "#18181B",
    "bg_secondary": "#232329",
    "surface":      "#2C2C35",
    "accent":       "#8B7CF6",
    "accent2":      "#A89CF9",
    "text":         "#E4E4E7",
    "text_muted":   "#8E8E9A",
    "success":      "#A6E3A1",
    "warning":      "#F9E2AF",
    "danger":       "#F38BA8",
    "border":       "#34343E",
}


def hex_to_rgba(hex_color: str, alpha: int) -> str:
    """Convert '#RRGGBB' + 0-255 alpha to 'rgba(R, G, B, A)'."""
    h = hex_color.lstrip("#")
    r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    return f"rgba({r}, {g}, {b}, {alpha})"


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Inter", "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 8px 20px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton:checked {{
        background-color: {p['accent']};
        color: {p['bg']};
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 12px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        border: 1px solid {p['border']};
        font-size: 13px;
        padding: 6px 14px;
        border-radius: 8px;
    }}

    QPushButton#secondaryButton:hover {{
        color: {p['text']};
        border-color: {p['text_muted']};
    }}

    /* ── inputs ──────────────────────────────────── */
    QLineEdit, QComboBox, QDateEdit, QTextEdit {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px 12px;
        font-size: 13px;
    }}

    QLineEdit:focus, QTextEdit:focus {{
        border-color: {p['accent']};
    }}

    /* ── tabs ────────────────────────────────────── */
    QTabWidget::pane {{
        border: none;
    }}

    QTabBar::tab {{
        background-color: transparent;
        color: {p['text_muted']};
        padding: 10px 24px;
        border: none;
        border-bottom: 2px solid transparent;
        font-weight: 600;
    }}

    QTabBar::tab:selected {{
        color: {p['accent']};
        border-bottom: 2px solid {p['accent']};
    }}

    /* ── cards ───────────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}

    QLabel#columnTitle {{
        font-size: 13px;
        font-weight: 700;
        color: {p['text_muted']};
    }}

    QLabel#muted {{
        font-size: 12px;
        color: {p['text_muted']};
    }}

    /* ── status bar ──────────────────────────────── */
    QStatusBar {{
        background-color: {p['bg']};
        color: {p['text_muted']};
        font-size: 12px;
        border-top: 1px solid {p['border']};
    }}
    """
