"""Common UI constants and styles."""

from .theme import Colors, Fonts, Spacing, Styles

__all__ = ['Colors', 'Fonts', 'Spacing', 'Styles']
