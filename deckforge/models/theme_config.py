"""
Theme Configuration Models for Deckforge

Design tokens are a theme's canonical palette, typography, spacing and shadow
values. One DesignTokens bundle is selected per deck and shared read-only by
every slide.
"""

from typing import Dict, List

from pydantic import BaseModel, Field

from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)


class ThemeColors(BaseModel):
    """Color palette for a theme."""

    primary: str = Field(..., description="Primary brand color")
    secondary: str = Field(..., description="Secondary color")
    accent: str = Field(..., description="Accent/highlight color")
    background: str = Field(default="#FFFFFF", description="Slide background")
    text: str = Field(..., description="Body text color")
    muted: str = Field(..., description="Muted/secondary text")

    class Config:
        frozen = True


class ThemeFonts(BaseModel):
    heading: str
    body: str
    mono: str

    class Config:
        frozen = True


class ThemeSizes(BaseModel):
    """Typography bounds in pixels. Fitted font sizes always stay inside these."""

    title_min: int = Field(..., gt=0)
    title_max: int = Field(..., gt=0)
    body_min: int = Field(..., gt=0)
    body_max: int = Field(..., gt=0)
    line_height: float = Field(default=1.5, gt=0, description="Line height multiplier")

    class Config:
        frozen = True


class ThemeSpacing(BaseModel):
    xs: int
    sm: int
    md: int
    lg: int
    xl: int

    class Config:
        frozen = True


class ThemeBorders(BaseModel):
    radius: int
    width: int

    class Config:
        frozen = True


class ThemeShadows(BaseModel):
    light: str
    medium: str
    heavy: str

    class Config:
        frozen = True


class DesignTokens(BaseModel):
    """Complete theme token bundle."""

    name: str = Field(..., description="Theme identifier (modern, corporate, startup)")
    colors: ThemeColors
    fonts: ThemeFonts
    sizes: ThemeSizes
    spacing: ThemeSpacing
    borders: ThemeBorders
    shadows: ThemeShadows

    class Config:
        frozen = True

    def to_css_variables(self) -> str:
        """Render the tokens as CSS custom properties (one declaration per line)."""
        declarations = [
            f"--color-primary: {self.colors.primary};",
            f"--color-secondary: {self.colors.secondary};",
            f"--color-accent: {self.colors.accent};",
            f"--color-background: {self.colors.background};",
            f"--color-text: {self.colors.text};",
            f"--color-muted: {self.colors.muted};",
            f"--font-heading: {self.fonts.heading};",
            f"--font-body: {self.fonts.body};",
            f"--font-mono: {self.fonts.mono};",
            f"--title-size: {self.sizes.title_max}px;",
            f"--body-size: {self.sizes.body_max}px;",
            f"--line-height: {self.sizes.line_height};",
            f"--spacing-xs: {self.spacing.xs}px;",
            f"--spacing-sm: {self.spacing.sm}px;",
            f"--spacing-md: {self.spacing.md}px;",
            f"--spacing-lg: {self.spacing.lg}px;",
            f"--spacing-xl: {self.spacing.xl}px;",
            f"--border-radius: {self.borders.radius}px;",
            f"--border-width: {self.borders.width}px;",
            f"--shadow-light: {self.shadows.light};",
            f"--shadow-medium: {self.shadows.medium};",
            f"--shadow-heavy: {self.shadows.heavy};",
        ]
        return "\n".join(declarations)


# ============================================================================
# THEME REGISTRY
# ============================================================================

THEME_REGISTRY: Dict[str, DesignTokens] = {
    "modern": DesignTokens(
        name="modern",
        colors=ThemeColors(
            primary="#3B82F6",
            secondary="#10B981",
            accent="#F59E0B",
            background="#FFFFFF",
            text="#1F2937",
            muted="#6B7280",
        ),
        fonts=ThemeFonts(
            heading='"Inter", "Segoe UI", sans-serif',
            body='"Inter", "Segoe UI", sans-serif',
            mono='"JetBrains Mono", monospace',
        ),
        sizes=ThemeSizes(title_min=28, title_max=48, body_min=16, body_max=24, line_height=1.5),
        spacing=ThemeSpacing(xs=8, sm=16, md=24, lg=32, xl=48),
        borders=ThemeBorders(radius=8, width=1),
        shadows=ThemeShadows(
            light="0 1px 3px rgba(0, 0, 0, 0.1)",
            medium="0 4px 6px rgba(0, 0, 0, 0.1)",
            heavy="0 10px 25px rgba(0, 0, 0, 0.15)",
        ),
    ),

    "corporate": DesignTokens(
        name="corporate",
        colors=ThemeColors(
            primary="#1E3A8A",
            secondary="#064E3B",
            accent="#DC2626",
            background="#F8FAFC",
            text="#0F172A",
            muted="#475569",
        ),
        fonts=ThemeFonts(
            heading='"Roboto", "Arial", sans-serif',
            body='"Roboto", "Arial", sans-serif',
            mono='"Courier New", monospace',
        ),
        sizes=ThemeSizes(title_min=32, title_max=44, body_min=18, body_max=22, line_height=1.6),
        spacing=ThemeSpacing(xs=12, sm=20, md=28, lg=36, xl=52),
        borders=ThemeBorders(radius=4, width=2),
        shadows=ThemeShadows(
            light="0 1px 2px rgba(0, 0, 0, 0.05)",
            medium="0 2px 4px rgba(0, 0, 0, 0.1)",
            heavy="0 8px 16px rgba(0, 0, 0, 0.15)",
        ),
    ),

    "startup": DesignTokens(
        name="startup",
        colors=ThemeColors(
            primary="#7C3AED",
            secondary="#EC4899",
            accent="#F97316",
            background="#FEFEFE",
            text="#111827",
            muted="#9CA3AF",
        ),
        fonts=ThemeFonts(
            heading='"Poppins", "Helvetica", sans-serif',
            body='"Poppins", "Helvetica", sans-serif',
            mono='"Fira Code", monospace',
        ),
        sizes=ThemeSizes(title_min=30, title_max=52, body_min=17, body_max=26, line_height=1.4),
        spacing=ThemeSpacing(xs=6, sm=14, md=22, lg=30, xl=44),
        borders=ThemeBorders(radius=12, width=3),
        shadows=ThemeShadows(
            light="0 2px 4px rgba(124, 58, 237, 0.1)",
            medium="0 6px 12px rgba(124, 58, 237, 0.15)",
            heavy="0 12px 24px rgba(124, 58, 237, 0.2)",
        ),
    ),
}

# Default theme when not specified
DEFAULT_THEME_ID = "modern"


def get_design_tokens(theme_id: str) -> DesignTokens:
    """Get design tokens by theme ID.

    Args:
        theme_id: Theme identifier

    Returns:
        DesignTokens for the theme, or the modern theme if not found
    """
    tokens = THEME_REGISTRY.get(theme_id)
    if tokens is None:
        logger.warning(f"Unknown theme '{theme_id}', falling back to '{DEFAULT_THEME_ID}'")
        return THEME_REGISTRY[DEFAULT_THEME_ID]
    return tokens


def get_available_themes() -> List[str]:
    """Get list of available theme IDs."""
    return list(THEME_REGISTRY.keys())
