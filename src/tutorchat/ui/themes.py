"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, footer)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Light, paper-like palette close to a classroom whiteboard
CLASSROOM_LIGHT = Theme(
    name="classroom-light",
    primary="#2563eb",      # Blue - user messages, focus
    secondary="#4b5563",    # Slate - tutor messages
    accent="#d97706",       # Amber - highlights
    foreground="#111827",   # Near-black text
    background="#fafafa",   # Page background
    success="#16a34a",      # Green - send button
    warning="#ca8a04",      # Yellow - typing indicator
    error="#dc2626",        # Red - error toast
    surface="#ffffff",      # Chat surface
    panel="#f3f4f6",        # Panel backgrounds
    dark=False,
    variables={
        "border": "#d1d5db",
        "border-blurred": "#e5e7eb",

        "input-cursor-background": "#111827",
        "input-cursor-foreground": "#ffffff",
        "input-selection-background": "#2563eb 25%",

        "scrollbar": "#d1d5db",
        "scrollbar-hover": "#9ca3af",
        "scrollbar-active": "#2563eb",
        "scrollbar-background": "#f3f4f6",

        "footer-foreground": "#374151",
        "footer-background": "#f3f4f6",
        "footer-key-foreground": "#2563eb",
        "footer-description-foreground": "#4b5563",

        "text-muted": "#9ca3af",
    },
)
