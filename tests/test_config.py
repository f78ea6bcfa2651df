from resumark.config import EditorConfig


def test_defaults():
    config = EditorConfig()

    assert (config.min_scale, config.max_scale, config.zoom_step) == (0.5, 2.0, 0.1)
    assert config.min_highlight_size == 5.0
    assert config.default_highlight_color == (255, 255, 0)
    assert config.default_text == "New Text"
    assert config.default_font_size == 14.0
    assert config.history_limit is None


def test_clamp_scale_rounds_float_drift():
    config = EditorConfig()

    assert config.clamp_scale(0.1 + 0.2) == 0.5
    assert config.clamp_scale(1.1 + 0.1) == 1.2
    assert config.clamp_scale(9) == 2.0


def test_from_dict_applies_valid_overrides():
    config = EditorConfig.from_dict({
        "max_scale": "3.0",
        "default_highlight_color": "#00ff00",
        "history_limit": "50",
        "default_text": "Note",
        "unknown_key": 1,
    })

    assert config.max_scale == 3.0
    assert config.default_highlight_color == (0, 255, 0)
    assert config.history_limit == 50
    assert config.default_text == "Note"


def test_from_dict_ignores_invalid_values():
    config = EditorConfig.from_dict({
        "zoom_step": "fast",
        "default_text_color": "#nothex",
        "history_limit": 0,
    })

    assert config.zoom_step == 0.1
    assert config.default_text_color == (0, 0, 0)
    assert config.history_limit is None


def test_from_dict_restores_inverted_zoom_bounds():
    config = EditorConfig.from_dict({"min_scale": 3, "max_scale": 1})

    assert (config.min_scale, config.max_scale) == (0.5, 2.0)


def test_round_trip_through_dict():
    config = EditorConfig(zoom_step=0.25, history_limit=10)

    assert EditorConfig.from_dict(config.to_dict()) == config


def test_settings_round_trip(tmp_path, monkeypatch):
    from PyQt5.QtCore import QSettings

    from resumark import config as config_module

    path = str(tmp_path / "settings.ini")
    monkeypatch.setattr(config_module, "_settings",
                        lambda: QSettings(path, QSettings.IniFormat))
    saved = EditorConfig(max_scale=3.0, default_text_color=(10, 20, 30), history_limit=25)

    config_module.save_config(saved)

    assert config_module.load_config() == saved
