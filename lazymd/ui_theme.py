"""UI theme definitions and selection helpers.

Themes are truecolor palettes used by the layout engine (document styling and
code token colors) and by the screen compositor (explorer list, status bar).
"""

from __future__ import annotations

from dataclasses import dataclass

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class UITheme:
    """Semantic palette used by renderers; ``None`` means terminal default."""

    name: str
    fg: RGB | None
    bg: RGB | None
    heading: RGB | None
    link: RGB | None
    muted: RGB | None
    code_bg: RGB | None
    inline_code_bg: RGB | None
    quote_fg: RGB | None
    quote_border: RGB | None
    rule: RGB | None
    error: RGB | None
    selection_fg: RGB | None
    selection_bg: RGB | None
    directory: RGB | None
    syntax_keyword: RGB | None
    syntax_string: RGB | None
    syntax_comment: RGB | None
    syntax_number: RGB | None
    syntax_identifier: RGB | None
    syntax_punctuation: RGB | None


GITHUB_DARK_THEME = UITheme(
    name="github-dark",
    fg=(201, 209, 217),
    bg=(13, 17, 23),
    heading=(88, 166, 255),
    link=(88, 166, 255),
    muted=(139, 148, 158),
    code_bg=(22, 27, 34),
    inline_code_bg=(40, 45, 53),
    quote_fg=(139, 148, 158),
    quote_border=(48, 54, 61),
    rule=(48, 54, 61),
    error=(248, 81, 73),
    selection_fg=(201, 209, 217),
    selection_bg=(3, 34, 82),
    directory=(88, 166, 255),
    syntax_keyword=(255, 123, 114),
    syntax_string=(165, 214, 255),
    syntax_comment=(139, 148, 158),
    syntax_number=(121, 192, 255),
    syntax_identifier=(210, 168, 255),
    syntax_punctuation=(201, 209, 217),
)

OCEAN_THEME = UITheme(
    name="ocean",
    fg=(192, 197, 206),
    bg=(43, 48, 59),
    heading=(143, 161, 179),
    link=(150, 181, 180),
    muted=(101, 115, 126),
    code_bg=(52, 61, 70),
    inline_code_bg=(79, 91, 102),
    quote_fg=(167, 173, 186),
    quote_border=(101, 115, 126),
    rule=(79, 91, 102),
    error=(191, 97, 106),
    selection_fg=(239, 241, 245),
    selection_bg=(79, 91, 102),
    directory=(143, 161, 179),
    syntax_keyword=(180, 142, 173),
    syntax_string=(163, 190, 140),
    syntax_comment=(101, 115, 126),
    syntax_number=(208, 135, 112),
    syntax_identifier=(235, 203, 139),
    syntax_punctuation=(192, 197, 206),
)

PLAIN_THEME = UITheme(
    name="plain",
    fg=None,
    bg=None,
    heading=None,
    link=None,
    muted=None,
    code_bg=None,
    inline_code_bg=None,
    quote_fg=None,
    quote_border=None,
    rule=None,
    error=None,
    selection_fg=None,
    selection_bg=None,
    directory=None,
    syntax_keyword=None,
    syntax_string=None,
    syntax_comment=None,
    syntax_number=None,
    syntax_identifier=None,
    syntax_punctuation=None,
)

DEFAULT_THEME = GITHUB_DARK_THEME

_THEMES: dict[str, UITheme] = {
    GITHUB_DARK_THEME.name: GITHUB_DARK_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "RGB",
    "UITheme",
    "DEFAULT_THEME",
    "GITHUB_DARK_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
