"""
UI Theme configuration: colors and icons.
"""

from typing import Dict

THEME: Dict[str, str] = {
    # Text Types
    "text": "#e6edf3",  # Main text
    "muted": "#7d8590",  # Muted text
    "accent": "#00ccff",  # Cyan
    "error": "#f85149",  # Error red
    "warning": "#d29922",  # Warning yellow
    "success": "#00ff88",  # Bright green
    # UI Elements
    "border": "#30363d",
    "header": "#ffffff",
}

ICONS: Dict[str, str] = {
    "success": "✓",
    "error": "✗",
    "warning": "⚠",
    "arrow": "›",
}
