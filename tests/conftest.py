import json

import pytest

import shopify_api


class MockClient(object):
    """Answers each request with the next queued response"""

    def __init__(self):
        self.responses = []
        self.requests = []

    def queue(self, status_code, data=None, headers=None):
        content = b"" if data is None else json.dumps(data).encode()
        self.responses.append(
            shopify_api.Response(status_code, content, headers=headers or {})
        )
        return self

    def send(self, req):
        self.requests.append(req)
        return self.responses.pop(0)

    @property
    def request(self):
        return self.requests[-1]


shopify_api.send.register(MockClient, MockClient.send)


@pytest.fixture
def config():
    return shopify_api.Config(api_key="key", secret="secret")


@pytest.fixture
def session(config):
    return shopify_api.Session("myshop", "token", config=config)


@pytest.fixture
def client():
    return MockClient()


@pytest.fixture
def run(session, client):
    return shopify_api.executor(auth=session, client=client)
