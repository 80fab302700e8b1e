"""Shared fixtures for the hosty tests."""

import logging

import pytest

from hosty import HostsConfig, HostsFile

SAMPLE = "\n".join([
    "127.0.0.1\tlocalhost",
    "# local network",
    "",
    "192.168.1.1\tfoo.local",
    "10.0.0.1\tbar.local baz.local",
    "# 10.0.0.2\tdisabled.local\t# old box",
])


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("hosty.tests")


@pytest.fixture
def config(tmp_path) -> HostsConfig:
    return HostsConfig(file_path=str(tmp_path / "hosts"))


@pytest.fixture
def make_hosts(config, logger):
    """Build a HostsFile from text."""

    def _make(text: str = SAMPLE) -> HostsFile:
        return HostsFile.from_text(text, config=config, logger=logger)

    return _make
