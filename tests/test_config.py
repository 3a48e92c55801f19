import pytest

from reqcraft.config import RequestConfig


class TestRequestConfig:
    def test_defaults(self):
        cfg = RequestConfig.from_env({})

        assert cfg.timeout == 30.0
        assert cfg.follow_redirects is True

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('REQCRAFT_TIMEOUT', '4.5')
        monkeypatch.setenv('REQCRAFT_FOLLOW_REDIRECTS', 'no')

        cfg = RequestConfig.from_env()

        assert cfg.timeout == 4.5
        assert cfg.follow_redirects is False

    def test_invalid_timeout(self):
        assert RequestConfig.from_env({'REQCRAFT_TIMEOUT': 'soon'}).timeout == 30.0

    def test_overrides(self):
        cfg = RequestConfig.from_env({'REQCRAFT_TIMEOUT': '4'}, timeout=9.0, follow_redirects=None)

        assert cfg.timeout == 9.0
        assert cfg.follow_redirects is True

    def test_unknown_override(self):
        with pytest.raises(ValueError):
            RequestConfig.from_env({}, retries=3)
