"""
Editor configuration.

Defaults live on ``EditorConfig``; user overrides are stored with QSettings
under the ``editor`` group.
"""
import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional

from PyQt5.QtCore import QSettings

from .core.annotations.models import BLACK, YELLOW, Color, color_to_hex, parse_color
from .utils.resource_loader import APP_NAME

log = logging.getLogger(__name__)

SETTINGS_GROUP = "editor"


@dataclass
class EditorConfig:
    """Tunables for one editor session."""
    min_scale: float = 0.5
    max_scale: float = 2.0
    zoom_step: float = 0.1
    default_scale: float = 1.0

    # Highlights with either extent at or below this are discarded
    min_highlight_size: float = 5.0
    highlight_opacity: float = 0.4
    default_highlight_color: Color = field(default=YELLOW)

    default_text: str = "New Text"
    default_font_size: float = 14.0
    min_font_size: float = 8.0
    max_font_size: float = 72.0
    default_text_color: Color = field(default=BLACK)

    # None keeps the whole history for the session
    history_limit: Optional[int] = None

    # Device pixel multiplier for page rendering
    render_resolution: float = 1.0

    def clamp_scale(self, scale: float) -> float:
        """Bound a zoom scale and round off float drift."""
        return round(max(self.min_scale, min(self.max_scale, scale)), 2)

    def clamp_font_size(self, font_size: float) -> float:
        return max(self.min_font_size, min(self.max_font_size, font_size))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EditorConfig':
        """
        Build a config from a mapping, ignoring unknown keys and bad values.

        Args:
            data: Mapping of field name to value

        Returns:
            Config with valid overrides applied over the defaults
        """
        config = cls()
        for f in fields(cls):
            if f.name not in data or data[f.name] is None:
                continue
            current = getattr(config, f.name)
            value = data[f.name]
            try:
                if f.name.endswith('_color'):
                    value = parse_color(value)
                elif f.name == 'history_limit':
                    value = int(value)
                    if value < 1:
                        raise ValueError("history_limit must be positive")
                elif isinstance(current, str):
                    value = str(value)
                else:
                    value = float(value)
            except (TypeError, ValueError):
                log.warning("Ignoring invalid setting %s=%r", f.name, data[f.name])
                continue
            setattr(config, f.name, value)

        if config.min_scale > config.max_scale:
            log.warning("min_scale exceeds max_scale, restoring zoom defaults")
            config.min_scale, config.max_scale = cls.min_scale, cls.max_scale
        config.default_scale = config.clamp_scale(config.default_scale)
        return config


def _settings() -> QSettings:
    return QSettings(APP_NAME, APP_NAME)


def load_config() -> EditorConfig:
    """Read the editor config from QSettings, falling back to defaults."""
    settings = _settings()
    settings.beginGroup(SETTINGS_GROUP)
    data = {key: settings.value(key) for key in settings.childKeys()}
    settings.endGroup()
    return EditorConfig.from_dict(data)


def save_config(config: EditorConfig) -> None:
    """Persist the editor config to QSettings."""
    settings = _settings()
    settings.beginGroup(SETTINGS_GROUP)
    for key, value in config.to_dict().items():
        if key.endswith('_color'):
            value = color_to_hex(value)
        if value is None:
            settings.remove(key)
        else:
            settings.setValue(key, value)
    settings.endGroup()
    settings.sync()
