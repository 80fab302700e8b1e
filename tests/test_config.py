"""Tests for configuration loading and logger setup."""

import logging

import pytest

from hosty import HostsConfig, HostsFile
from hosty.config import UNIX_HOSTS_PATH, WINDOWS_HOSTS_PATH, default_hosts_path
from hosty.log import LOGGER_NAME, setup_logger


class TestDefaultHostsPath:
    """Verify the platform default hosts file location."""

    @pytest.mark.parametrize("platform, expected", [
        ("linux", UNIX_HOSTS_PATH),
        ("darwin", UNIX_HOSTS_PATH),
        ("win32", WINDOWS_HOSTS_PATH),
    ])
    def test_known_platforms(self, platform: str, expected: str) -> None:
        assert default_hosts_path(platform) == expected

    def test_unknown_platform(self) -> None:
        with pytest.raises(ValueError):
            default_hosts_path("plan9")


class TestHostsConfig:
    """Verify environment loading and validation."""

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("HOSTS_FILE", "/tmp/custom-hosts")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = HostsConfig.from_env()
        assert config.file_path == "/tmp/custom-hosts"
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("HOSTS_FILE", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setattr("sys.platform", "linux")
        config = HostsConfig.from_env()
        assert config.file_path == UNIX_HOSTS_PATH
        assert config.log_level == "INFO"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError):
            HostsConfig(file_path="/tmp/hosts", log_level="LOUD").validate()

    def test_hosts_file_validates_config(self) -> None:
        with pytest.raises(ValueError):
            HostsFile(HostsConfig(file_path="/tmp/hosts", log_level="LOUD"))


class TestLogger:
    """Verify logger setup does not stack handlers."""

    def test_single_handler(self) -> None:
        logger = setup_logger("DEBUG")
        again = setup_logger("INFO")
        assert logger is again
        assert logger.name == LOGGER_NAME
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO

    def test_hosts_file_default_logger(self) -> None:
        """HostsFile should use the package logger without adding handlers."""
        before = list(logging.getLogger(LOGGER_NAME).handlers)
        hosts = HostsFile(HostsConfig(file_path="/tmp/hosts"))
        assert hosts.logger.name == LOGGER_NAME
        assert hosts.logger.handlers == before
