import httpx
from sqlalchemy.exc import OperationalError

from esoteric_planner.api.handlers import health_handler


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "esoteric-planner"


async def test_live(client):
    assert (await client.get("/live")).json() == {"status": "alive"}


async def test_ready(client, monkeypatch):
    async def database_ok() -> None:
        return None

    monkeypatch.setattr(health_handler, "check_db_connection", database_ok)

    response = await client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "database": "ok"}


async def test_not_ready_when_database_is_down(client, monkeypatch):
    async def database_down() -> None:
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError())

    monkeypatch.setattr(health_handler, "check_db_connection", database_down)

    response = await client.get("/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


async def test_request_id_is_echoed(client):
    response = await client.get("/live", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"


async def test_request_id_is_generated(client):
    response = await client.get("/live")

    assert len(response.headers["X-Request-ID"]) == 32


async def test_unexpected_error_uses_error_envelope(app, monkeypatch):
    async def database_broken() -> None:
        raise RuntimeError("pool exhausted")

    monkeypatch.setattr(health_handler, "check_db_connection", database_broken)

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/ready")

    assert response.status_code == 500
    assert response.json() == {
        "error": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "details": {},
        }
    }
