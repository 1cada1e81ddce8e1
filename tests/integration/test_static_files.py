"""
Integration tests for the bundled frontend served at /.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from auth_app.main import create_app

pytestmark = pytest.mark.integration

ENTRY_HTML = "<!doctype html><html><body><div id=\"app\">entry</div></body></html>"
APP_JS = "console.log('bundle');"


@pytest.fixture
def web_build_dir(tmp_path):
    """Create a small frontend build."""
    (tmp_path / "index.html").write_text(ENTRY_HTML)
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "app.js").write_text(APP_JS)
    return tmp_path


@pytest_asyncio.fixture
async def web_client(settings, identity_provider, user_store, web_build_dir):
    """Client for an app serving the temporary build."""
    app = create_app(
        settings.model_copy(update={"web_build_dir": str(web_build_dir)}),
        identity_provider=identity_provider,
        user_store=user_store,
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestStaticFiles:
    """Test static asset serving with entry-document fallback."""

    @pytest.mark.asyncio
    async def test_existing_asset_is_served(self, web_client):
        response = await web_client.get("/assets/app.js")

        assert response.status_code == 200
        assert response.text == APP_JS

    @pytest.mark.asyncio
    async def test_root_serves_entry_document(self, web_client):
        response = await web_client.get("/")

        assert response.status_code == 200
        assert response.text == ENTRY_HTML

    @pytest.mark.asyncio
    async def test_unknown_path_serves_entry_document(self, web_client):
        """Test that client-side routes fall back to the entry document."""
        entry = await web_client.get("/index.html")
        response = await web_client.get("/profile")
        nested = await web_client.get("/settings/team/42")

        assert response.status_code == 200
        assert response.text == entry.text
        assert nested.status_code == 200
        assert nested.text == entry.text
        assert response.headers["content-type"].startswith("text/html")

    @pytest.mark.asyncio
    async def test_unknown_asset_serves_entry_document(self, web_client):
        response = await web_client.get("/assets/missing.js")

        assert response.status_code == 200
        assert response.text == ENTRY_HTML

    @pytest.mark.asyncio
    async def test_api_routes_take_precedence(self, web_client):
        response = await web_client.get("/auth/me")

        assert response.status_code == 404
        assert response.text == "user not found"

    @pytest.mark.asyncio
    async def test_health_route_takes_precedence(self, web_client):
        response = await web_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_non_get_method_not_allowed(self, web_client):
        response = await web_client.post("/profile")

        assert response.status_code == 405

    @pytest.mark.asyncio
    async def test_bundled_frontend_is_served_by_default(self, client):
        """Test the frontend shipped inside the package."""
        response = await client.get("/profile")

        assert response.status_code == 200
        assert '<div id="root"></div>' in response.text
