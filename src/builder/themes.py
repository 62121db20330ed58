"""Default theme catalog."""

from .models import Theme, ThemeColors, ThemeFonts


MODERN = Theme(
    id="modern",
    name="Modern Blue",
    colors=ThemeColors(
        primary="#2563eb",
        secondary="#64748b",
        accent="#f59e0b",
        background="#ffffff",
        text="#1f2937",
        border="#e5e7eb",
    ),
    fonts=ThemeFonts(heading="Inter, sans-serif", body="Inter, sans-serif"),
)

ELEGANT = Theme(
    id="elegant",
    name="Elegant Dark",
    colors=ThemeColors(
        primary="#7c3aed",
        secondary="#6b7280",
        accent="#ef4444",
        background="#111827",
        text="#f9fafb",
        border="#374151",
    ),
    fonts=ThemeFonts(heading="Playfair Display, serif", body="Inter, sans-serif"),
)

MINIMAL = Theme(
    id="minimal",
    name="Minimal Clean",
    colors=ThemeColors(
        primary="#000000",
        secondary="#6b7280",
        accent="#10b981",
        background="#fafafa",
        text="#111827",
        border="#d1d5db",
    ),
    fonts=ThemeFonts(heading="Helvetica Neue, sans-serif", body="Helvetica Neue, sans-serif"),
)

DEFAULT_THEMES: tuple[Theme, ...] = (MODERN, ELEGANT, MINIMAL)


def get_theme(theme_id: str) -> Theme | None:
    """Look up a catalog theme by id."""
    for theme in DEFAULT_THEMES:
        if theme.id == theme_id:
            return theme
    return None


__all__ = ["MODERN", "ELEGANT", "MINIMAL", "DEFAULT_THEMES", "get_theme"]
