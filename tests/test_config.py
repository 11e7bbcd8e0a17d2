from pathlib import Path

from bordercross import config


def test_data_url_precedence(monkeypatch):
    monkeypatch.delenv(config.ENV_DATA_URL, raising=False)
    assert config.resolve_data_url() == config.DATASET_URL

    monkeypatch.setenv(config.ENV_DATA_URL, "https://mirror.example.org/data.zip")
    assert config.resolve_data_url() == "https://mirror.example.org/data.zip"
    assert config.resolve_data_url("https://flag.example.org/x.csv") == "https://flag.example.org/x.csv"


def test_blank_env_falls_back_to_default(monkeypatch):
    monkeypatch.setenv(config.ENV_DATA_URL, "   ")
    monkeypatch.setenv(config.ENV_DATA_DIR, "")
    assert config.resolve_data_url() == config.DATASET_URL
    assert config.resolve_data_dir() == config.DEFAULT_DATA_DIR


def test_data_dir_precedence(monkeypatch, tmp_path):
    monkeypatch.setenv(config.ENV_DATA_DIR, str(tmp_path))
    assert config.resolve_data_dir() == tmp_path
    assert config.resolve_data_dir("elsewhere") == Path("elsewhere")
