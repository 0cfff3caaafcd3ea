"""Feature modules built on top of the snippet core.

export
    Filenames and file writers for downloading snippets, plus the JSON
    backup of the whole collection.
"""

from .export import export_filename, export_json, extension_for, write_snippet

__all__ = ["export_filename", "export_json", "extension_for", "write_snippet"]
