"""Textual themes for Snippet Vault.

The ``display.dark`` preference picks one of the two; the theme button
flips between them.
"""

from textual.theme import Theme

DARK_THEME = Theme(
    name="vault-dark",
    primary="#4fb3ff",
    secondary="#7c8cff",
    accent="#2b3a4a",
    background="#07101a",
    surface="#0d1824",
    panel="#1b2a3a",
    success="#3fb27f",
    warning="#d9a441",
    error="#e0595e",
    dark=True,
)

LIGHT_THEME = Theme(
    name="vault-light",
    primary="#1f6fb2",
    secondary="#4a55c2",
    accent="#c9d6e3",
    background="#ffffff",
    surface="#f4f6f8",
    panel="#dde3ea",
    success="#2e8b57",
    warning="#aa7700",
    error="#cc3333",
    dark=False,
)

THEMES = (DARK_THEME, LIGHT_THEME)


def theme_name(dark: bool) -> str:
    return DARK_THEME.name if dark else LIGHT_THEME.name
