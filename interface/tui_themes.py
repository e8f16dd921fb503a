"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


def _palette(
    *,
    priority_a: str,
    priority_b: str,
    priority_c: str,
    priority_d: str,
    priority_other: str,
    primary: str,
    secondary: str,
    success: str,
    warning: str,
    danger: str,
    text: str,
    muted: str,
    subtle: str,
    border_inactive: str,
    selection_bg: str,
) -> Dict[str, str]:
    return {
        "": text,
        "text": text,
        "text.dim": muted,
        "text.dimmer": subtle,
        "title": f"{primary} bold",
        "title.inactive": subtle,
        "header": f"{secondary} bold",
        "border": border_inactive,
        "border.active": primary,
        "selected": f"bg:{selection_bg} {text} bold",
        "priority.a": f"{priority_a} bold",
        "priority.b": f"{priority_b} bold",
        "priority.c": f"{priority_c} bold",
        "priority.d": f"{priority_d} bold",
        "priority.other": priority_other,
        "due.overdue": f"{danger} bold",
        "due.today": f"{warning} bold",
        "due.future": success,
        "done": f"{subtle} strike",
        "checkbox": muted,
        "status": muted,
        "status.ok": f"{success} bold",
        "status.fail": f"{danger} bold",
        "help.key": f"{warning} bold",
        "help.category": f"{primary} bold",
        "editor": text,
        "editor.title": f"{primary} bold",
    }


THEMES: Dict[str, Dict[str, str]] = {
    "catppuccin": _palette(
        priority_a="#f38ba8",
        priority_b="#f9e2af",
        priority_c="#89b4fa",
        priority_d="#fab387",
        priority_other="#fab387",
        primary="#89b4fa",
        secondary="#74c7ec",
        success="#a6e3a1",
        warning="#f9e2af",
        danger="#f38ba8",
        text="#cdd6f4",
        muted="#bac2de",
        subtle="#a6adc8",
        border_inactive="#6c7086",
        selection_bg="#45475a",
    ),
    "nord": _palette(
        priority_a="#BF616A",
        priority_b="#EBCB8B",
        priority_c="#5E81AC",
        priority_d="#D08770",
        priority_other="#D08770",
        primary="#5E81AC",
        secondary="#88C0D0",
        success="#A3BE8C",
        warning="#EBCB8B",
        danger="#BF616A",
        text="#ECEFF4",
        muted="#E5E9F0",
        subtle="#D8DEE9",
        border_inactive="#4C566A",
        selection_bg="#434C5E",
    ),
    "everforest-dark": _palette(
        priority_a="#e67e80",
        priority_b="#dbbc7f",
        priority_c="#7fbbb3",
        priority_d="#d699b6",
        priority_other="#a7c080",
        primary="#a7c080",
        secondary="#7fbbb3",
        success="#a7c080",
        warning="#dbbc7f",
        danger="#e67e80",
        text="#d3c6aa",
        muted="#9da9a0",
        subtle="#859289",
        border_inactive="#543a48",
        selection_bg="#475258",
    ),
    "everforest-light": _palette(
        priority_a="#f85552",
        priority_b="#dfa000",
        priority_c="#35a77c",
        priority_d="#df69ba",
        priority_other="#8da101",
        primary="#8da101",
        secondary="#35a77c",
        success="#8da101",
        warning="#dfa000",
        danger="#f85552",
        text="#5c6a72",
        muted="#829181",
        subtle="#a6b0a0",
        border_inactive="#f0f2d4",
        selection_bg="#efebd4",
    ),
}

DEFAULT_THEME = "catppuccin"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    return Style.from_dict(get_theme_palette(theme))


__all__ = ["THEMES", "DEFAULT_THEME", "get_theme_palette", "build_style"]
