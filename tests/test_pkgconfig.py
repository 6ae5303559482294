"""
Tests for tess_bindgen/pkgconfig.py

subprocess.run is replaced by a fake pkg-config answering from a dict.
"""

import subprocess

import pytest

from tess_bindgen import DiscoveryError
from tess_bindgen import pkgconfig

FLAGS = '-I/usr/include/tesseract -I/usr/include/leptonica -L/usr/lib64 -ltesseract -llept'


class FakePkgConfig:
    """Answers pkg-config queries for the packages it knows about"""

    def __init__(self, packages):
        self.packages = packages
        self.calls = []

    def __call__(self, cmd, capture_output, text, env):
        self.calls.append(cmd)
        args, package = cmd[1:-1], cmd[-1]
        info = self.packages.get(package)
        if info is None:
            return self._fail(cmd, f"Package {package} was not found in the pkg-config search path.")
        if '--atleast-version' in args:
            wanted = args[args.index('--atleast-version') + 1]
            if _version(info['version']) < _version(wanted):
                return self._fail(cmd, f"Requested '{package} >= {wanted}' but version is {info['version']}")
            return self._ok(cmd, '')
        if '--exists' in args:
            return self._ok(cmd, '')
        if '--modversion' in args:
            return self._ok(cmd, info['version'] + '\n')
        return self._ok(cmd, info['flags'] + '\n')

    @staticmethod
    def _ok(cmd, out):
        return subprocess.CompletedProcess(cmd, 0, stdout=out, stderr='')

    @staticmethod
    def _fail(cmd, err):
        return subprocess.CompletedProcess(cmd, 1, stdout='', stderr=err + '\n')


def _version(text):
    return tuple(int(part) for part in text.split('.'))


@pytest.fixture
def fake_pkg_config(monkeypatch):
    fake = FakePkgConfig({'tesseract': {'version': '5.3.4', 'flags': FLAGS}})
    monkeypatch.setattr(pkgconfig.subprocess, 'run', fake)
    return fake


class TestProbe:

    def test_flags_split(self, fake_pkg_config):
        lib = pkgconfig.probe('tesseract', atleast_version='4.1', env={})
        assert lib.version == '5.3.4'
        assert lib.include_paths == ['/usr/include/tesseract', '/usr/include/leptonica']
        assert lib.link_paths == ['/usr/lib64']
        assert lib.libs == ['tesseract', 'lept']

    def test_version_check_runs_first(self, fake_pkg_config):
        pkgconfig.probe('tesseract', atleast_version='4.1', env={})
        assert fake_pkg_config.calls[0] == [
            'pkg-config', '--print-errors', '--atleast-version', '4.1', 'tesseract']

    def test_too_old(self, fake_pkg_config):
        with pytest.raises(DiscoveryError, match=r'tesseract >= 6\.0 not found'):
            pkgconfig.probe('tesseract', atleast_version='6.0', env={})

    def test_unknown_package(self, fake_pkg_config):
        with pytest.raises(DiscoveryError, match='was not found'):
            pkgconfig.probe('leptonica', env={})

    def test_pkg_config_override(self, fake_pkg_config):
        pkgconfig.probe('tesseract', env={'PKG_CONFIG': '/opt/bin/pkgconf'})
        assert all(cmd[0] == '/opt/bin/pkgconf' for cmd in fake_pkg_config.calls)

    def test_env_passed_through(self, monkeypatch):
        seen = {}

        def run(cmd, capture_output, text, env):
            seen.update(env)
            return subprocess.CompletedProcess(cmd, 0, stdout='5.3.4', stderr='')

        monkeypatch.setattr(pkgconfig.subprocess, 'run', run)
        pkgconfig.probe('tesseract', env={'PKG_CONFIG_PATH': '/opt/tesseract/lib/pkgconfig'})
        assert seen['PKG_CONFIG_PATH'] == '/opt/tesseract/lib/pkgconfig'

    def test_binary_missing(self, monkeypatch):
        def run(*args, **kwargs):
            raise FileNotFoundError('pkg-config')

        monkeypatch.setattr(pkgconfig.subprocess, 'run', run)
        with pytest.raises(DiscoveryError, match='pkg-config not found'):
            pkgconfig.probe('tesseract', env={})
