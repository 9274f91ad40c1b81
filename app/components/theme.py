"""Custom Plotly theme for taxtiers charts."""

from __future__ import annotations

import plotly.graph_objects as go
import plotly.io as pio

# --- Tier palette ---
CURRENT_COLOR = "#9E9E9E"
OPTIMIZE_COLOR = "#48BB78"
REDIRECT_COLOR = "#ECC94B"
WITHHOLD_COLOR = "#E85D3A"

TIER_COLORS: dict[str, str] = {
    "current": CURRENT_COLOR,
    "optimize": OPTIMIZE_COLOR,
    "redirect": REDIRECT_COLOR,
    "withhold": WITHHOLD_COLOR,
}

# Font stack
_FONT_FAMILY = "Inter, -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif"


def make_rgba(hex_color: str, alpha: float) -> str:
    """Convert hex color string to rgba() with given alpha."""
    hex_color = hex_color.lstrip("#")
    r = int(hex_color[0:2], 16)
    g = int(hex_color[2:4], 16)
    b = int(hex_color[4:6], 16)
    return f"rgba({r}, {g}, {b}, {alpha})"


def register_theme() -> None:
    """Register and activate the taxtiers Plotly template."""
    taxtiers_layout = go.Layout(
        font=dict(family=_FONT_FAMILY, size=13),
        title_font=dict(size=16),
        colorway=list(TIER_COLORS.values()),
        plot_bgcolor="white",
        paper_bgcolor="white",
        xaxis=dict(
            gridcolor="#E5E5E5",
            zerolinecolor="#BDBDBD",
            zerolinewidth=1,
        ),
        yaxis=dict(
            gridcolor="#E5E5E5",
            zerolinecolor="#BDBDBD",
            zerolinewidth=1,
            tickformat="$,.0f",
        ),
        hovermode="x unified",
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="left",
            x=0,
        ),
        margin=dict(l=60, r=20, t=60, b=40),
    )

    pio.templates["taxtiers"] = go.layout.Template(layout=taxtiers_layout)
    pio.templates.default = "taxtiers"
