"""Shared fixtures."""

from pathlib import Path

import pytest

from hotconfig.schema import RunOptions

from fakes import FakeSupplicant, FakeWpaCli


@pytest.fixture
def supplicant():
    return FakeSupplicant()


@pytest.fixture
def cli(supplicant):
    return FakeWpaCli(supplicant)


@pytest.fixture
def options():
    return RunOptions(conf_path=Path("/media/usb/wpa_hotconfig.conf"))


@pytest.fixture
def dry_run_options():
    return RunOptions(conf_path=Path("/media/usb/wpa_hotconfig.conf"), dry_run=True)


@pytest.fixture
def write_conf(tmp_path):
    """Write a credential file and return its path."""
    def _write(text, name="wpa_hotconfig.conf"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write
