from urllib.parse import unquote

import pytest
import requests

import etymology


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload if payload is not None else []
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self.payload


@pytest.fixture
def dictionary_api(monkeypatch):
    """
    Replace requests.get with a fake keyed by word.
    Map a word to a payload list, or to an int HTTP status for failures.
    Every requested word is recorded in `calls`, in order.
    """

    class FakeApi:
        def __init__(self):
            self.responses = {}
            self.calls = []

        def __call__(self, url, params=None, timeout=None):
            word = unquote(url.rsplit("/", 1)[1])
            self.calls.append(word)
            response = self.responses.get(word, [])
            if isinstance(response, int):
                return FakeResponse(status_code=response)
            if isinstance(response, Exception):
                raise response
            return FakeResponse(response)

    api = FakeApi()
    monkeypatch.setattr(etymology.requests, "get", api)
    return api
