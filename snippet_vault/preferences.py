"""User preferences for Snippet Vault.

Loads settings from ~/.snippet-vault/preferences.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .log import logger
from .platform import vault_file, vault_home

PREFS_PATH = vault_file("preferences.yaml")

_DEFAULT_YAML = """\
# Snippet Vault Preferences
# Delete this file to reset to defaults.

display:
  dark: true                     # dark theme (toggle with the theme button or F2)

editor:
  default_lang: js               # language preselected for new snippets

storage:
  data_dir: ""                   # where snippets are kept (empty = ~/.snippet-vault)
"""


@dataclass
class DisplayPreferences:
    """Look and feel."""

    dark: bool = True


@dataclass
class EditorPreferences:
    """Defaults for the new-snippet form."""

    default_lang: str = "js"


@dataclass
class StoragePreferences:
    """Where the snippet collection lives."""

    data_dir: str = ""

    def resolve_data_dir(self) -> Path:
        return Path(self.data_dir).expanduser() if self.data_dir else vault_home()


@dataclass
class Preferences:
    """Top-level preferences."""

    display: DisplayPreferences = field(default_factory=DisplayPreferences)
    editor: EditorPreferences = field(default_factory=EditorPreferences)
    storage: StoragePreferences = field(default_factory=StoragePreferences)


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or PREFS_PATH
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError):
            logger.debug("failed to read preferences from %s", path, exc_info=True)
            return prefs
        if not isinstance(data, dict):
            return prefs
        if isinstance(data.get("display"), dict):
            ddata = data["display"]
            if "dark" in ddata:
                prefs.display.dark = bool(ddata["dark"])
        if isinstance(data.get("editor"), dict):
            edata = data["editor"]
            if edata.get("default_lang"):
                prefs.editor.default_lang = str(edata["default_lang"])
        if isinstance(data.get("storage"), dict):
            sdata = data["storage"]
            if "data_dir" in sdata:
                prefs.storage.data_dir = str(sdata["data_dir"] or "")
    else:
        # Create default file for user to customize
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("could not write default preferences to %s", path, exc_info=True)

    return prefs


def save_dark_theme(enabled: bool, path: Path | None = None) -> bool:
    """Persist the dark-theme flag to the preferences file.

    Surgically updates only the ``dark`` value, preserving the rest of the
    file (including user comments) as-is.  Returns False if the write failed.
    """
    path = path or PREFS_PATH
    try:
        if path.exists():
            text = path.read_text(encoding="utf-8")
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            text = _DEFAULT_YAML

        value = "true" if enabled else "false"
        if re.search(r"^\s+dark:", text, re.MULTILINE):
            text = re.sub(
                r"^(\s+dark:)\s*\S+(.*)$",
                rf"\1 {value}\2",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        elif re.search(r"^display:", text, re.MULTILINE):
            # display section exists but no dark key
            text = re.sub(
                r"^(display:.*)$",
                f"\\1\n  dark: {value}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        else:
            # No display section at all, append one
            text = text.rstrip() + f"\n\ndisplay:\n  dark: {value}\n"

        path.write_text(text, encoding="utf-8")
        return True
    except OSError:
        logger.debug("failed to save theme preference to %s", path, exc_info=True)
        return False
