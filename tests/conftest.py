import pytest

import llm_wrapper


class FakeResponse:
    def __init__(self, status_code=200, body=None, raw=None):
        self.status_code = status_code
        self._body = body
        self._raw = raw

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._raw is not None:
            raise ValueError(f"Expecting value: {self._raw!r}")
        return self._body


class FakePost:
    """Stands in for requests.post and records every call."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENROUTER_API_KEY", "test-key")
    monkeypatch.setattr(llm_wrapper, "RAW_LOG", str(tmp_path / "llm_raw_logs.txt"))
    monkeypatch.setattr(llm_wrapper, "REQUEST_TIMEOUT", None)


@pytest.fixture
def fake_post(monkeypatch):
    def install(response=None, exc=None):
        fake = FakePost(response=response, exc=exc)
        monkeypatch.setattr(llm_wrapper.requests, "post", fake)
        return fake
    return install


def success_body(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}
