import pytest

from line_engine.runtime import telemetry
from line_engine.runtime.config import ENV_PREFIX, TelemetrySettings


def make_env(**values: str) -> dict[str, str]:
    return {f"{ENV_PREFIX}{key}": value for key, value in values.items()}


def test_defaults_without_environment() -> None:
    settings = TelemetrySettings.from_env({})

    assert settings == TelemetrySettings()
    assert settings.logger_name == "line_engine"
    assert settings.level == "INFO"
    assert settings.console is True
    assert settings.buffered is False


def test_values_read_from_environment() -> None:
    settings = TelemetrySettings.from_env(
        make_env(
            LOGGER="editor",
            LOG_LEVEL="debug",
            LOG_FILE="/tmp/editor.log",
            LOG_JSON="yes",
            LOG_BUFFERED="1",
            LOG_BUFFER_SIZE="512",
            DISABLE_CONSOLE="true",
            NO_COLOR="on",
        )
    )

    assert settings.logger_name == "editor"
    assert settings.level == "DEBUG"
    assert settings.log_file == "/tmp/editor.log"
    assert settings.json_format is True
    assert settings.buffered is True
    assert settings.buffer_size == 512
    assert settings.console is False
    assert settings.colored is False


def test_unrecognised_flag_values_are_false() -> None:
    settings = TelemetrySettings.from_env(make_env(LOG_JSON="maybe"))

    assert settings.json_format is False


def test_invalid_buffer_size() -> None:
    with pytest.raises(ValueError, match="LOG_BUFFER_SIZE"):
        TelemetrySettings.from_env(make_env(LOG_BUFFER_SIZE="lots"))


def test_from_env_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(f"{ENV_PREFIX}LOGGER", "from-process")

    assert TelemetrySettings.from_env().logger_name == "from-process"


def test_settings_are_frozen() -> None:
    with pytest.raises(AttributeError):
        TelemetrySettings().level = "DEBUG"  # type: ignore[misc]


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError, match="Unknown preset"):
        telemetry.configure(settings=TelemetrySettings(), preset="verbose")


def test_configure_keeps_resolved_settings() -> None:
    settings = TelemetrySettings(logger_name="line_engine.tests", console=False)

    telemetry.configure(settings=settings)

    assert telemetry.active_settings() is settings
