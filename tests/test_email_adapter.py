import json

import httpx

from esoteric_planner.shared.adapters.email_adapter import EmailAdapter

API_URL = "https://mail.example.com/send"


def build_adapter(handler, api_key: str = "rusender-key") -> EmailAdapter:
    return EmailAdapter(
        api_key=api_key,
        api_url=API_URL,
        from_email="noreply@example.com",
        from_name="Planner",
        transport=httpx.MockTransport(handler),
    )


class Recorder:
    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"uuid": "accepted"})


async def test_send_email_posts_payload_with_api_key():
    recorder = Recorder()
    adapter = build_adapter(recorder)

    assert await adapter.send_email("reader@example.com", "Hello", "<p>Hi</p>")

    request = recorder.requests[0]
    assert request.method == "POST"
    assert str(request.url) == API_URL
    assert request.headers["X-Api-Key"] == "rusender-key"

    body = json.loads(request.content)
    assert body["idempotencyKey"]
    assert body["mail"] == {
        "to": {"email": "reader@example.com", "name": "reader@example.com"},
        "from": {"email": "noreply@example.com", "name": "Planner"},
        "subject": "Hello",
        "html": "<p>Hi</p>",
    }


async def test_every_email_gets_its_own_idempotency_key():
    recorder = Recorder()
    adapter = build_adapter(recorder)

    await adapter.send_email("a@example.com", "One", "<p>1</p>")
    await adapter.send_email("a@example.com", "Two", "<p>2</p>")

    keys = {json.loads(request.content)["idempotencyKey"] for request in recorder.requests}
    assert len(keys) == 2


async def test_server_error_returns_false():
    adapter = build_adapter(Recorder(status_code=503))

    assert await adapter.send_email("reader@example.com", "Hello", "<p>Hi</p>") is False


async def test_connection_error_returns_false():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    adapter = build_adapter(refuse)

    assert await adapter.send_email("reader@example.com", "Hello", "<p>Hi</p>") is False


async def test_missing_api_key_skips_the_request():
    recorder = Recorder()
    adapter = build_adapter(recorder, api_key="")

    assert await adapter.send_email("reader@example.com", "Hello", "<p>Hi</p>") is False
    assert recorder.requests == []


async def test_welcome_email_carries_password_and_trial():
    recorder = Recorder()
    adapter = build_adapter(recorder)

    assert await adapter.send_welcome_email("reader@example.com", "Abc123xyz789")

    mail = json.loads(recorder.requests[0].content)["mail"]
    assert mail["to"]["email"] == "reader@example.com"
    assert "Abc123xyz789" in mail["html"]
    assert "бесплатного доступа" in mail["html"]


async def test_reset_email_links_and_mentions_one_hour():
    recorder = Recorder()
    adapter = build_adapter(recorder)
    link = "https://app.example.com/reset-password?token=abc&email=reader%40example.com"

    assert await adapter.send_password_reset_email("reader@example.com", link)

    mail = json.loads(recorder.requests[0].content)["mail"]
    assert mail["subject"] == "Сброс пароля"
    assert "token=abc" in mail["html"]
    assert "1 часа" in mail["html"]
