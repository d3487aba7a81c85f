"""
User preferences, persisted as JSON in the home directory.

Only presentation preferences live here (theme, playback speed, colour
overrides).  Tree contents are never saved.
"""

import json
import logging
import os

logger = logging.getLogger(__name__)

ENV_VAR = "TREEVIZ_SETTINGS"
DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".treeviz.json")


# ═════════════════════════════════════════════════════════════════
#  THEME DEFINITIONS
#  Two Catppuccin-inspired palettes.
# ═════════════════════════════════════════════════════════════════
THEMES = {
    # ── Dark theme (Catppuccin Mocha) ────────────────────────────
    "dark": {
        "FG": "#cdd6f4",               # Primary foreground text
        "ACCENT": "#89b4fa",           # Titles
        "CANVAS_BG": "#1e1e2e",        # Image background
        "NODE_RED_FILL": "#f38ba8",    # Fill for RED nodes
        "NODE_BLACK_FILL": "#585b70",  # Fill for BLACK nodes
        "NODE_AVL_FILL": "#74c7ec",    # Fill for AVL nodes
        "NODE_TEXT": "#ffffff",        # Text inside nodes
        "BF_TEXT": "#f9e2af",          # Balance-factor label
        "EDGE": "#585b70",             # Lines connecting nodes
        "HIGHLIGHT": "#f9e2af",        # Highlight ring colour
        "CASE_BG": "#313244",          # Caption box fill
    },
    # ── Light theme (Catppuccin Latte) ───────────────────────────
    "light": {
        "FG": "#4c4f69",
        "ACCENT": "#1e66f5",
        "CANVAS_BG": "#e6e9ef",
        "NODE_RED_FILL": "#d20f39",
        "NODE_BLACK_FILL": "#4c4f69",
        "NODE_AVL_FILL": "#209fb5",
        "NODE_TEXT": "#ffffff",
        "BF_TEXT": "#df8e1d",
        "EDGE": "#8c8fa1",
        "HIGHLIGHT": "#df8e1d",
        "CASE_BG": "#bcc0cc",
    },
}


def _check_color(value):
    if (not isinstance(value, str) or len(value) != 7 or value[0] != "#"
            or any(c not in "0123456789abcdefABCDEF" for c in value[1:])):
        raise ValueError(f"colour must look like '#rrggbb', got {value!r}")
    return value


class Settings:
    """
    Persistent user preferences manager.

    Attributes:
        theme         (str)   : Active theme name ("dark" / "light").
        speed         (float) : Playback multiplier; durations are divided
                                by it.  Must be > 0.
        custom_colors (dict)  : Key -> hex overrides on top of the theme.
        path          (str)   : File the settings load from / save to.

    File location: ``$TREEVIZ_SETTINGS`` or ``~/.treeviz.json``.
    """

    def __init__(self, path=None, load=True):
        self.path          = path or os.environ.get(ENV_VAR) or DEFAULT_PATH
        self.theme         = "dark"
        self.speed         = 1.0
        self.custom_colors = {}
        if load:
            self._load()

    # ── Load from disk ──────────────────────────────────────────
    def _load(self):
        """Read the JSON file; a missing file keeps defaults silently."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level JSON value is not an object")
            self.update(**{k: data[k] for k in
                           ("theme", "speed", "custom_colors") if k in data})
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("ignoring settings file %s: %s", self.path, exc)
            self.theme, self.speed, self.custom_colors = "dark", 1.0, {}

    # ── Save to disk ────────────────────────────────────────────
    def save(self):
        """Write preferences to ``self.path``.  ``OSError`` propagates."""
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug("settings saved to %s", self.path)

    def to_dict(self):
        return {"theme": self.theme,
                "speed": self.speed,
                "custom_colors": dict(self.custom_colors)}

    def update(self, theme=None, speed=None, custom_colors=None):
        """
        Validate and apply new values.  Nothing changes if any is invalid.

        Raises:
            ValueError: Unknown theme, non-positive speed, bad colour.
        """
        if theme is not None and theme not in THEMES:
            raise ValueError(f"unknown theme {theme!r}; "
                             f"expected one of {sorted(THEMES)}")
        if speed is not None:
            if isinstance(speed, bool) or not isinstance(speed, (int, float)):
                raise ValueError(f"speed must be a number, got {speed!r}")
            if speed <= 0:
                raise ValueError(f"speed must be positive, got {speed!r}")
        if custom_colors is not None:
            if not isinstance(custom_colors, dict):
                raise ValueError("custom_colors must be a mapping")
            for v in custom_colors.values():
                _check_color(v)

        if theme is not None:
            self.theme = theme
        if speed is not None:
            self.speed = float(speed)
        if custom_colors is not None:
            self.custom_colors = dict(custom_colors)

    # ── Duration scaling ────────────────────────────────────────
    def scaled_duration(self, ms):
        """Base duration *ms* adjusted for the playback speed."""
        return int(ms / self.speed)

    # ── Colour lookup ───────────────────────────────────────────
    def get(self, key):
        """
        Resolve a colour key to its hex value.

        Priority: custom_colors[key]  →  THEMES[theme][key]  →  "#ffffff"
        """
        if key in self.custom_colors:
            return self.custom_colors[key]
        return THEMES.get(self.theme, THEMES["dark"]).get(key, "#ffffff")
