"""Light dashboard theme constants for the Dash app."""

BACKGROUND = "#FFFFFF"
PANEL = "#F7F7F8"
BORDER = "#DDDDDD"
TEXT = "#333333"
MUTED_TEXT = "#666666"
FAINT_TEXT = "#999999"

ACCENT = "#FF6B6B"
RESET_ACTIVE = "#EF4444"
RESET_IDLE = "#E5E7EB"

# Badge colours for active filters
BADGE_COLORS = {
    "position": "#DCFCE7",
    "minutes": "#F3E8FF",
    "search": "#DBEAFE",
    "metric": "#FEF9C3",
    "view": "#FFEDD5",
}

FONT_STACK = '"Inter", "Helvetica Neue", Arial, sans-serif'

# Scatter margins around the plot area (px)
MARGIN = dict(l=70, r=30, t=50, b=70)
BAR_HEIGHT = 450
