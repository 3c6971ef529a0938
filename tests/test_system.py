from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from key_registry.api.app import create_app
from key_registry.db import build_session_factory


async def test_health_ok(client):
    response = await client.get("/system/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "checks": {"database": "ok"}}


async def test_health_degraded_when_database_unreachable(settings, tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'keys.db'}"
    )
    app = create_app(settings=settings, session_factory=build_session_factory(engine))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/system/health")

    await engine.dispose()
    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "degraded"
    assert body["checks"]["database"].startswith("error: ")
