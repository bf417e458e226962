"""
Explanation client: fallbacks, prompt contents, stale-result matching.

The Anthropic SDK is replaced with a fake so no network call is made.
"""

from types import SimpleNamespace

import anthropic
import httpx
import pytest

from rayleighsky import explanation
from rayleighsky.i18n import t
from rayleighsky.physics import observe


class _FakeMessages:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.reply


def _install_fake(monkeypatch, messages: _FakeMessages) -> list[str]:
    keys: list[str] = []

    def _client(api_key):
        keys.append(api_key)
        return SimpleNamespace(messages=messages)

    monkeypatch.setattr(explanation.anthropic, "Anthropic", _client)
    return keys


def _reply(*texts: str):
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=x) for x in texts])


def test_missing_credential_returns_offline_fallback(monkeypatch) -> None:
    messages = _FakeMessages(reply=_reply("should not be used"))
    _install_fake(monkeypatch, messages)
    text = explanation.explain_sky_physics(45.0, 1.41)
    assert text == t("explanation_offline", "en")
    assert "offline mode" in text
    assert messages.calls == []


def test_offline_fallback_is_localized() -> None:
    assert explanation.explain_sky_physics(45.0, 1.41, lang="ko") == t(
        "explanation_offline", "ko"
    )


def test_successful_reply(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    messages = _FakeMessages(reply=_reply("The path is long, ", "so blue scatters away."))
    keys = _install_fake(monkeypatch, messages)

    text = explanation.explain_sky_physics(12.5, 4.62)

    assert text == "The path is long, so blue scatters away."
    assert keys == ["test-key"]
    call = messages.calls[0]
    assert call["model"] == explanation.DEFAULT_MODEL
    prompt = call["messages"][0]["content"]
    assert "12.5 degrees" in prompt
    assert "4.62x" in prompt
    assert "Sunrise" in prompt


def test_model_override(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    monkeypatch.setenv("RAYLEIGHSKY_MODEL", "some-other-model")
    messages = _FakeMessages(reply=_reply("ok"))
    _install_fake(monkeypatch, messages)
    explanation.explain_sky_physics(90.0, 1.0)
    assert messages.calls[0]["model"] == "some-other-model"


def test_api_error_returns_error_fallback(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    messages = _FakeMessages(error=anthropic.APIConnectionError(request=request))
    _install_fake(monkeypatch, messages)
    assert explanation.explain_sky_physics(90.0, 1.0) == t("explanation_error", "en")


def test_unexpected_client_failure_returns_error_fallback(monkeypatch, caplog) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    _install_fake(monkeypatch, _FakeMessages(error=RuntimeError("socket closed")))
    with caplog.at_level("ERROR", logger=explanation.__name__):
        text = explanation.explain_sky_physics(90.0, 1.0, lang="ko")
    assert text == t("explanation_error", "ko")
    assert "explanation request failed" in caplog.text


def test_malformed_reply_returns_error_fallback(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    _install_fake(monkeypatch, _FakeMessages(reply=SimpleNamespace(content=None)))
    assert explanation.explain_sky_physics(90.0, 1.0) == t("explanation_error", "en")


def test_client_construction_failure_returns_error_fallback(monkeypatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")

    def _broken_client(api_key):
        raise ValueError("bad proxy configuration")

    monkeypatch.setattr(explanation.anthropic, "Anthropic", _broken_client)
    assert explanation.explain_sky_physics(90.0, 1.0) == t("explanation_error", "en")


@pytest.mark.parametrize("reply", [_reply(), _reply("   "), SimpleNamespace(content=[])])
def test_empty_reply_returns_empty_fallback(monkeypatch, reply) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    _install_fake(monkeypatch, _FakeMessages(reply=reply))
    assert explanation.explain_sky_physics(90.0, 1.0) == t("explanation_empty", "en")


def test_result_matches_only_its_own_state() -> None:
    snap = observe(30.0)
    result = explanation.request_explanation(snap)
    assert result.sun_angle == 30.0
    assert result.path_length == snap.path_length
    assert result.matches(snap)
    assert result.matches(observe(30.0))
    assert not result.matches(observe(30.5))
    # Mirror angle: same path length, different sky position
    assert not result.matches(observe(150.0))
