"""
UI System

ImGui panels live in .ui_manager and .editor_panels; the property input
boundary below has no ImGui dependency.
"""

from .property_editor import PropertyEditor, parse_color, parse_numeric

__all__ = [
    "PropertyEditor",
    "parse_color",
    "parse_numeric",
]
