"""Tests for the pywebpush backed provider."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
import requests
from pywebpush import WebPushException

from thesisflow.config import Settings
from thesisflow.domain.entities import PushSubscription
from thesisflow.domain.errors import PushGoneError, PushProviderError
from thesisflow.infrastructure.push import web_push
from thesisflow.infrastructure.push.web_push import WebPushProvider

SUBSCRIPTION = PushSubscription(
    id=1,
    user_id=4,
    endpoint="https://push.example.com/ana",
    p256dh="client-public-key",
    auth="client-auth",
)


def _provider() -> WebPushProvider:
    return WebPushProvider(
        vapid_private_key="private-key",
        vapid_subject="mailto:office@example.edu",
        timeout=5.0,
        ttl=60,
    )


def _settings(**overrides) -> Settings:
    values = {"database_url": "sqlite://", "secret_key": "secret"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_send_passes_vapid_claims_and_payload(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(web_push, "webpush", lambda **kwargs: calls.append(kwargs))

    _provider().send(SUBSCRIPTION, {"title": "Hi", "body": "There"})

    (call,) = calls
    assert call["subscription_info"] == {
        "endpoint": "https://push.example.com/ana",
        "keys": {"p256dh": "client-public-key", "auth": "client-auth"},
    }
    assert call["data"] == '{"title":"Hi","body":"There"}'
    assert call["vapid_claims"] == {"sub": "mailto:office@example.edu"}
    assert call["timeout"] == 5.0
    assert call["ttl"] == 60


@pytest.mark.parametrize("status_code", [404, 410])
def test_gone_status_raises_push_gone(monkeypatch, status_code) -> None:
    def reject(**kwargs):
        raise WebPushException("gone", response=SimpleNamespace(status_code=status_code, text=""))

    monkeypatch.setattr(web_push, "webpush", reject)

    with pytest.raises(PushGoneError):
        _provider().send(SUBSCRIPTION, {})


def test_other_failures_raise_provider_error(monkeypatch) -> None:
    def reject(**kwargs):
        raise WebPushException("boom", response=SimpleNamespace(status_code=500, text="oops"))

    monkeypatch.setattr(web_push, "webpush", reject)

    with pytest.raises(PushProviderError) as excinfo:
        _provider().send(SUBSCRIPTION, {})
    assert not isinstance(excinfo.value, PushGoneError)


def test_timeouts_raise_provider_error(monkeypatch) -> None:
    def time_out(**kwargs):
        raise requests.Timeout("read timed out")

    monkeypatch.setattr(web_push, "webpush", time_out)

    with pytest.raises(PushProviderError):
        _provider().send(SUBSCRIPTION, {})


def test_provider_requires_both_vapid_keys() -> None:
    assert WebPushProvider.from_settings(_settings()) is None
    assert isinstance(
        WebPushProvider.from_settings(
            _settings(vapid_public_key="public", vapid_private_key="private")
        ),
        WebPushProvider,
    )
    with pytest.raises(ValueError):
        _settings(vapid_public_key="public")
