"""
Tests for the explanation client.
"""

import pytest
import requests

from crystal_voids import (
    LatticeType,
    VoidType,
    Explanation,
    ExplanationConfig,
    ExplanationError,
    build_prompt,
    canned_explanation,
    request_explanation,
)
from crystal_voids.explanation import NO_EXPLANATION, SYSTEM_INSTRUCTION


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.payload is None:
            raise ValueError("No JSON")
        return self.payload


class FakeSession:
    """Records POST calls and replays a canned response or error."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def _payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_config_from_env(monkeypatch):
    """Test API key and model are read from the environment."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("API_KEY", "fallback-key")
    monkeypatch.setenv("CRYSTAL_VOIDS_MODEL", "gemini-test")

    config = ExplanationConfig.from_env()
    assert config.api_key == "fallback-key"
    assert config.model == "gemini-test"

    monkeypatch.setenv("GEMINI_API_KEY", "primary-key")
    assert ExplanationConfig.from_env().api_key == "primary-key"

    print("test_config_from_env passed")


def test_config_without_key(monkeypatch):
    """Test a missing or empty key yields no key."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("API_KEY", "")
    monkeypatch.delenv("CRYSTAL_VOIDS_MODEL", raising=False)

    config = ExplanationConfig.from_env()
    assert config.api_key is None
    assert config.model == "gemini-2.5-flash"

    print("test_config_without_key passed")


def test_build_prompt():
    """Test the prompt names the configuration and the three questions."""
    prompt = build_prompt(LatticeType.BCC, VoidType.OCTAHEDRAL)

    assert "BCC" in prompt
    assert "body-centered cubic" in prompt
    assert "octahedral" in prompt
    assert "coordination number" in prompt
    assert "radius ratio" in prompt

    print("test_build_prompt passed")


def test_canned_explanations():
    """Test every configuration has offline text."""
    ratios = {
        (LatticeType.FCC, VoidType.TETRAHEDRAL): "0.225",
        (LatticeType.FCC, VoidType.OCTAHEDRAL): "0.414",
        (LatticeType.BCC, VoidType.TETRAHEDRAL): "0.291",
        (LatticeType.BCC, VoidType.OCTAHEDRAL): "0.155",
    }

    for (lattice, void_type), ratio in ratios.items():
        text = canned_explanation(lattice, void_type)
        assert text.startswith(f"### {lattice.value} - {void_type.value}")
        assert ratio in text
        assert "GEMINI_API_KEY" in text

    print("test_canned_explanations passed")


def test_offline_fallback():
    """Test no request is made without an API key."""
    session = FakeSession(error=AssertionError("should not be called"))
    explanation = request_explanation(
        LatticeType.FCC, VoidType.TETRAHEDRAL,
        config=ExplanationConfig(api_key=None),
        session=session,
    )

    assert explanation == Explanation(
        text=canned_explanation(LatticeType.FCC, VoidType.TETRAHEDRAL),
        source="offline",
    )
    assert session.calls == []

    print("test_offline_fallback passed")


def test_remote_explanation():
    """Test the request body and response parsing."""
    session = FakeSession(response=FakeResponse(_payload("**8** voids per cell")))
    config = ExplanationConfig(api_key="secret", model="gemini-x", base_url="https://example.test/v1")

    explanation = request_explanation(
        LatticeType.FCC, VoidType.TETRAHEDRAL, config=config, session=session,
    )

    assert explanation.source == "remote"
    assert explanation.text == "**8** voids per cell"

    url, kwargs = session.calls[0]
    assert url == "https://example.test/v1/models/gemini-x:generateContent"
    assert kwargs["headers"]["x-goog-api-key"] == "secret"
    assert kwargs["timeout"] == config.timeout
    body = kwargs["json"]
    assert body["system_instruction"]["parts"][0]["text"] == SYSTEM_INSTRUCTION
    assert body["contents"][0]["parts"][0]["text"] == build_prompt(
        LatticeType.FCC, VoidType.TETRAHEDRAL
    )

    print("test_remote_explanation passed")


def test_remote_empty_response():
    """Test an empty candidate list yields the placeholder text."""
    session = FakeSession(response=FakeResponse({"candidates": []}))

    explanation = request_explanation(
        LatticeType.BCC, VoidType.TETRAHEDRAL,
        config=ExplanationConfig(api_key="secret"),
        session=session,
    )

    assert explanation.text == NO_EXPLANATION
    assert explanation.source == "remote"

    print("test_remote_empty_response passed")


def test_remote_network_error():
    """Test network failures are wrapped in ExplanationError."""
    error = requests.ConnectionError("unreachable")
    session = FakeSession(error=error)

    with pytest.raises(ExplanationError) as excinfo:
        request_explanation(
            LatticeType.FCC, VoidType.OCTAHEDRAL,
            config=ExplanationConfig(api_key="secret"),
            session=session,
        )

    assert excinfo.value.__cause__ is error

    print("test_remote_network_error passed")


def test_remote_http_error():
    """Test HTTP error statuses are wrapped in ExplanationError."""
    session = FakeSession(response=FakeResponse({"error": {}}, status_code=403))

    with pytest.raises(ExplanationError):
        request_explanation(
            LatticeType.BCC, VoidType.OCTAHEDRAL,
            config=ExplanationConfig(api_key="bad"),
            session=session,
        )

    print("test_remote_http_error passed")


def test_remote_invalid_json():
    """Test a non-JSON body is reported as a failure."""
    session = FakeSession(response=FakeResponse(None))

    with pytest.raises(ExplanationError):
        request_explanation(
            LatticeType.FCC, VoidType.TETRAHEDRAL,
            config=ExplanationConfig(api_key="secret"),
            session=session,
        )

    print("test_remote_invalid_json passed")


def test_remote_unexpected_payload_shape():
    """Test well-formed JSON with the wrong structure raises ExplanationError."""
    payloads = [
        ["not", "a", "dict"],
        {"candidates": "text"},
        {"candidates": ["text"]},
        {"candidates": [{"content": {"parts": ["text"]}}]},
        {"candidates": [{"content": {"parts": "text"}}]},
    ]

    for payload in payloads:
        session = FakeSession(response=FakeResponse(payload))
        with pytest.raises(ExplanationError):
            request_explanation(
                LatticeType.FCC, VoidType.OCTAHEDRAL,
                config=ExplanationConfig(api_key="secret"),
                session=session,
            )

    print("test_remote_unexpected_payload_shape passed")


def test_remote_candidate_without_content():
    """Test a candidate without content yields the placeholder text."""
    session = FakeSession(response=FakeResponse({"candidates": [{"finishReason": "SAFETY"}]}))

    explanation = request_explanation(
        LatticeType.BCC, VoidType.OCTAHEDRAL,
        config=ExplanationConfig(api_key="secret"),
        session=session,
    )

    assert explanation.text == NO_EXPLANATION

    print("test_remote_candidate_without_content passed")
