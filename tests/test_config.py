from __future__ import annotations

from imagepipe.config import DEFAULT_TIMEOUT, Settings


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})

    assert settings == Settings(api_url=None, token=None, namespace=None, timeout=DEFAULT_TIMEOUT, verify_tls=True)


def test_values_from_environment():
    settings = Settings.from_env({
        "IMAGEPIPE_API_URL": "https://api:6443",
        "IMAGEPIPE_TOKEN": "t",
        "IMAGEPIPE_NAMESPACE": "ci-op-1",
        "IMAGEPIPE_TIMEOUT": "5",
        "IMAGEPIPE_VERIFY_TLS": "false",
    })

    assert settings.api_url == "https://api:6443"
    assert settings.token == "t"
    assert settings.namespace == "ci-op-1"
    assert settings.timeout == 5.0
    assert settings.verify_tls is False
