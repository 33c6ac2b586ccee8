"""
Centralized theme configuration for the desktop front end.

Single source of truth for colors, fonts, spacing and the few stylesheet
snippets the views share.

Usage:
    from sentirax.ui.common.theme import Colors, Fonts, Spacing, Styles

    label.setStyleSheet(Styles.label(Colors.TEXT_SECONDARY, Fonts.SIZE_SM))
    icon = qta.icon('fa5s.download', color=Colors.TEXT_WHITE)
"""
from typing import Optional


class Colors:
    """
    Color palette.

      Backgrounds: #0f1115 (primary), #161a21 (secondary), #1e232c (tertiary)
      Text:        #eef1f6 (primary), #9aa4b2 (secondary), #667085 (muted)
      Accent:      #6d5dfc (primary action), #22c55e (ready), #ef4444 (error)
    """

    ACCENT_PRIMARY = "#6d5dfc"
    ACCENT_PRIMARY_HOVER = "#8476ff"
    ACCENT_PRIMARY_PRESSED = "#5646e6"
    ACCENT_SUCCESS = "#22c55e"
    ACCENT_ERROR = "#ef4444"

    TEXT_PRIMARY = "#eef1f6"
    TEXT_SECONDARY = "#9aa4b2"
    TEXT_MUTED = "#667085"
    TEXT_DISABLED = "#5b6270"
    TEXT_WHITE = "#ffffff"

    BG_PRIMARY = "#0f1115"
    BG_SECONDARY = "#161a21"
    BG_TERTIARY = "#1e232c"
    BG_INPUT = "#12151b"
    BG_HOVER = "#272d38"

    BORDER_DEFAULT = "#2a303b"
    BORDER_LIGHT = "#3a4250"

    STATE_DISABLED_BG = "#1f232a"

    # Overlay scrim behind the preview content
    SCRIM = "rgba(0, 0, 0, 190)"


class Fonts:
    FAMILY = '"Inter", "Segoe UI", sans-serif'

    SIZE_SM = 12
    SIZE_MD = 13
    SIZE_LG = 15
    SIZE_XL = 18
    SIZE_TITLE = 26

    WEIGHT_NORMAL = 400
    WEIGHT_MEDIUM = 500
    WEIGHT_SEMIBOLD = 600
    WEIGHT_BOLD = 700


class Spacing:
    """Spacing and sizing constants."""

    XS = 4
    SM = 8
    MD = 12
    LG = 16
    XL = 24
    XXL = 40

    RADIUS_MD = 6
    RADIUS_LG = 10
    RADIUS_XL = 14

    ICON_LG = 24

    CONTROL_HEIGHT = 44
    THUMBNAIL_WIDTH = 320
    THUMBNAIL_HEIGHT = 180
    PREVIEW_MAX_WIDTH = 960
    PREVIEW_MAX_HEIGHT = 640


class Styles:
    """Pre-built stylesheet snippets for programmatic styling."""

    @staticmethod
    def label(
        color: str = Colors.TEXT_PRIMARY,
        size: int = Fonts.SIZE_MD,
        weight: int = Fonts.WEIGHT_NORMAL,
        bg: Optional[str] = None,
    ) -> str:
        """Generate label stylesheet with size validation."""
        # Qt warns on font sizes <= 0
        safe_size = max(1, size) if size else Fonts.SIZE_MD
        style = f"color: {color}; font-size: {safe_size}px; font-weight: {weight};"
        if bg is not None:
            style += f" background-color: {bg}; border-radius: {Spacing.RADIUS_MD}px;"
        return f"QLabel {{ {style} }}"

    @staticmethod
    def button_primary() -> str:
        return f"""
            QPushButton {{
                background-color: {Colors.ACCENT_PRIMARY};
                border: 1px solid {Colors.ACCENT_PRIMARY};
                border-radius: {Spacing.RADIUS_LG}px;
                color: {Colors.TEXT_WHITE};
                font-weight: {Fonts.WEIGHT_SEMIBOLD};
                padding: 10px 20px;
            }}
            QPushButton:hover {{
                background-color: {Colors.ACCENT_PRIMARY_HOVER};
                border-color: {Colors.ACCENT_PRIMARY_HOVER};
            }}
            QPushButton:pressed {{
                background-color: {Colors.ACCENT_PRIMARY_PRESSED};
                border-color: {Colors.ACCENT_PRIMARY_PRESSED};
            }}
            QPushButton:disabled {{
                background-color: {Colors.STATE_DISABLED_BG};
                border-color: {Colors.STATE_DISABLED_BG};
                color: {Colors.TEXT_DISABLED};
            }}
        """

    @staticmethod
    def button_secondary() -> str:
        return f"""
            QPushButton {{
                background-color: {Colors.BG_TERTIARY};
                border: 1px solid {Colors.BORDER_DEFAULT};
                border-radius: {Spacing.RADIUS_LG}px;
                color: {Colors.TEXT_PRIMARY};
                padding: 10px 16px;
                font-weight: {Fonts.WEIGHT_MEDIUM};
                text-align: left;
            }}
            QPushButton:hover {{
                background-color: {Colors.BG_HOVER};
                border-color: {Colors.ACCENT_PRIMARY};
            }}
            QPushButton:disabled {{
                background-color: {Colors.STATE_DISABLED_BG};
                border-color: {Colors.STATE_DISABLED_BG};
                color: {Colors.TEXT_DISABLED};
            }}
        """

    @staticmethod
    def button_flat() -> str:
        return f"""
            QPushButton {{
                background-color: transparent;
                color: {Colors.TEXT_SECONDARY};
                border: none;
                padding: {Spacing.XS}px;
            }}
            QPushButton:hover {{
                color: {Colors.TEXT_PRIMARY};
                background-color: rgba(255, 255, 255, 0.08);
                border-radius: {Spacing.RADIUS_LG}px;
            }}
        """

    @staticmethod
    def input_field() -> str:
        return f"""
            QLineEdit {{
                background-color: {Colors.BG_INPUT};
                color: {Colors.TEXT_PRIMARY};
                border: 1px solid {Colors.BORDER_DEFAULT};
                border-radius: {Spacing.RADIUS_LG}px;
                padding: 0 {Spacing.MD}px;
                font-size: {Fonts.SIZE_LG}px;
                selection-background-color: {Colors.ACCENT_PRIMARY};
            }}
            QLineEdit:focus {{
                border-color: {Colors.ACCENT_PRIMARY};
            }}
        """

    @staticmethod
    def card() -> str:
        return f"""
            QFrame#resultCard {{
                background-color: {Colors.BG_SECONDARY};
                border: 1px solid {Colors.BORDER_DEFAULT};
                border-radius: {Spacing.RADIUS_XL}px;
            }}
        """

    @staticmethod
    def status_dot(color: str) -> str:
        return f"background-color: {color}; border-radius: 4px;"
