import pytest
from pydantic import ValidationError

from py_chat.config import ServerSettings


def test_defaults_match_reference_server():
    config = ServerSettings(_env_file=None)

    assert config.HOST == "0.0.0.0"
    assert config.PORT == 8080
    assert config.BUFFER_SIZE == 1024
    assert config.FRAMING == "raw"
    assert config.LOG_JSON is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PY_CHAT_PORT", "9001")
    monkeypatch.setenv("PY_CHAT_FRAMING", "line")
    monkeypatch.setenv("PY_CHAT_LOG_JSON", "true")

    config = ServerSettings(_env_file=None)

    assert config.PORT == 9001
    assert config.FRAMING == "line"
    assert config.LOG_JSON is True


def test_constructor_values_win_over_environment(monkeypatch):
    monkeypatch.setenv("PY_CHAT_PORT", "9001")

    assert ServerSettings(_env_file=None, PORT=9100).PORT == 9100


@pytest.mark.parametrize(
    "field, value",
    [("PORT", 70000), ("FRAMING", "length-prefixed"), ("BUFFER_SIZE", 0)],
)
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        ServerSettings(_env_file=None, **{field: value})
