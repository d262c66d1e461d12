# tests/test_config.py
"""
Tests for gradientfield/config.py settings loading.
"""
import pytest

from gradientfield.config import (
    CONFIG_ENV_VAR,
    RenderConfig,
    SamplingConfig,
    Settings,
    load_settings,
)


def test_defaults(clean_config_env):
    settings = load_settings()
    assert settings.sampling == SamplingConfig()
    assert settings.render == RenderConfig()
    assert settings.sampling.mean_source_count == 4.0
    assert settings.sampling.min_source_count == 2
    assert settings.sampling.video_source_count == 5
    assert (settings.sampling.velocity_min, settings.sampling.velocity_max) == (-2, 2)


def test_explicit_file(clean_config_env):
    path = clean_config_env / "settings.yaml"
    path.write_text(
        "sampling:\n"
        "  video_source_count: 8\n"
        "render:\n"
        "  default_width: 640\n"
        "  workers: '4'\n"
    )
    settings = load_settings(path)
    assert settings.sampling.video_source_count == 8
    assert settings.sampling.min_source_count == 2
    assert settings.render.default_width == 640
    assert settings.render.workers == 4


def test_env_var(clean_config_env, monkeypatch):
    path = clean_config_env / "env.yaml"
    path.write_text("render:\n  gif_fps: 12\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_settings().render.gif_fps == 12


def test_user_config_dir_file(clean_config_env, monkeypatch):
    path = clean_config_env / "user.yaml"
    path.write_text("sampling:\n  mean_source_count: 6\n")
    monkeypatch.setattr("gradientfield.config.default_settings_path", lambda: path)
    assert load_settings().sampling.mean_source_count == 6.0


def test_empty_file_gives_defaults(clean_config_env):
    path = clean_config_env / "empty.yaml"
    path.write_text("")
    assert load_settings(path) == Settings()


def test_missing_explicit_file(clean_config_env):
    with pytest.raises(FileNotFoundError):
        load_settings(clean_config_env / "missing.yaml")


@pytest.mark.parametrize("text,match", [
    ("colour: red\n", "section"),
    ("sampling:\n  nope: 1\n", "SamplingConfig"),
    ("render: 5\n", "mapping"),
    ("- a\n- b\n", "mapping"),
])
def test_invalid_files(clean_config_env, text, match):
    path = clean_config_env / "bad.yaml"
    path.write_text(text)
    with pytest.raises(ValueError, match=match):
        load_settings(path)


def test_settings_dict_roundtrip():
    s = Settings(sampling=SamplingConfig(video_source_count=3), render=RenderConfig(workers=2))
    assert Settings.from_dict(s.to_dict()) == s
