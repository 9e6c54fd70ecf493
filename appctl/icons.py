from __future__ import annotations

from typing import Mapping, Optional, Sequence, Tuple

DEFAULT_ICON = "📱"

# (name fragment, glyph); the first fragment contained in the app name wins
APP_ICONS: Sequence[Tuple[str, str]] = (
    # Browsers
    ("Safari", "🌐"),
    ("Firefox", "🦊"),
    ("Chrome", "🌐"),
    ("Edge", "🌐"),
    ("Arc", "🌍"),
    # Terminals
    ("Terminal", "💻"),
    ("iTerm", "💻"),
    ("Warp", "🚀"),
    ("kitty", "🐱"),
    ("Ghostty", "👻"),
    # System
    ("Finder", "📁"),
    ("System Settings", "⚙️"),
    ("Activity Monitor", "📊"),
    ("App Store", "🛍️"),
    ("Font Book", "🔤"),
    ("Keychain", "🔑"),
    # Development
    ("Visual Studio Code", "💻"),
    ("Xcode", "🛠️"),
    ("Cursor", "📝"),
    ("Docker", "🐳"),
    ("Postgres", "🐘"),
    ("pgAdmin", "🐘"),
    ("DB Browser for SQLite", "🗄️"),
    ("1Password", "🔐"),
    ("Authy", "🔐"),
    ("Github", "🐙"),
    # Creative
    ("Final Cut Pro", "🎬"),
    ("iMovie", "🎥"),
    ("GarageBand", "🎸"),
    ("Numbers", "🔢"),
    ("Pages", "📄"),
    ("Keynote", "📊"),
    # Communication
    ("Mail", "✉️"),
    ("Messages", "💬"),
    ("Slack", "💬"),
    ("Discord", "💬"),
    ("zoom.us", "🎦"),
    ("Zoom", "🎦"),
    ("FaceTime", "📹"),
    ("Notion", "📝"),
    # Media
    ("Music", "🎵"),
    ("Spotify", "🎵"),
    ("Photos", "🖼️"),
    ("Preview", "👁️"),
    ("Books", "📚"),
    # Utilities
    ("Calendar", "📅"),
    ("Notes", "📝"),
    ("Calculator", "🧮"),
    ("Maps", "🗺️"),
    ("Reminders", "📋"),
    ("TextEdit", "📄"),
    ("TestFlight", "✈️"),
    ("VPN", "🔒"),
)


def get_icon(name: str, overrides: Optional[Mapping[str, str]] = None) -> str:
    """Return the glyph for application *name*.

    *overrides* (from the config file) are consulted before the built-in
    table.
    """
    for table in (overrides or {}).items(), APP_ICONS:
        for fragment, icon in table:
            if fragment in name:
                return icon
    return DEFAULT_ICON
