import pytest

from blueproxy.core import config
from blueproxy.core.config import Settings, load_settings
from blueproxy.core.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (config.ENV_ADAPTER, config.ENV_DBUS_TIMEOUT, config.ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_file_missing(tmp_path):
    assert load_settings(tmp_path / "missing.yaml") == Settings("hci0", 30.0, "INFO")


def test_file_values(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("adapter: hci1\ndbus_timeout: 7.5\nlog_level: debug\n")
    assert load_settings(path) == Settings("hci1", 7.5, "DEBUG")


def test_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_settings(path) == Settings()


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("adapter: hci1\ndbus_timeout: 7.5\n")
    monkeypatch.setenv(config.ENV_ADAPTER, "hci2")
    monkeypatch.setenv(config.ENV_DBUS_TIMEOUT, "3")
    monkeypatch.setenv(config.ENV_LOG_LEVEL, "warning")
    assert load_settings(path) == Settings("hci2", 3.0, "WARNING")


@pytest.mark.parametrize(
    "content",
    [
        "- not\n- a mapping\n",
        "dbus_timeout: soon\n",
        "dbus_timeout: 0\n",
        "log_level: LOUD\n",
        "adapter: /org/bluez/hci0\n",
        "colour: blue\n",
        "adapter: [unterminated\n",
    ],
)
def test_malformed_file(tmp_path, content):
    path = tmp_path / "config.yaml"
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        load_settings(path)


def test_malformed_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(config.ENV_DBUS_TIMEOUT, "-1")
    with pytest.raises(ConfigurationError):
        load_settings(tmp_path / "missing.yaml")
