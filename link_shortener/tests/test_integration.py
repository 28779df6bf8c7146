"""Integration tests for the link shortener."""

from datetime import datetime, timedelta

import pytest

from shortener.common.validators import is_valid_code


@pytest.mark.asyncio
class TestIntegration:
    """End-to-end integration tests."""

    async def test_full_link_lifecycle(self, client, clock, store):
        """Shorten, follow, let it expire, follow again."""
        # 1. Create short link via the form endpoint
        create_response = await client.post("/shorten", data={"url": "https://example.com/a"})
        assert create_response.status_code == 200
        body = create_response.json()

        code = body["short_link"]
        assert len(code) == 11
        assert is_valid_code(code)
        assert body["full_link"] == "https://example.com/a"

        created_at = datetime.fromisoformat(body["created_at"].replace("Z", "+00:00"))
        expires_at = datetime.fromisoformat(body["expires_at"].replace("Z", "+00:00"))
        assert expires_at == created_at + timedelta(hours=24)

        # 2. Follow it while active
        redirect_response = await client.get(f"/{code}", follow_redirects=False)
        assert redirect_response.status_code == 303
        assert redirect_response.headers["location"] == "https://example.com/a"

        # 3. Re-shortening returns the same link
        again = await client.post("/shorten", data={"url": "https://example.com/a"})
        assert again.json()["short_link"] == code

        # 4. Past expiry the link is gone for redirects but kept in storage
        clock.now = expires_at + timedelta(seconds=1)
        expired_response = await client.get(f"/{code}", follow_redirects=False)
        assert expired_response.status_code == 410
        assert expired_response.json() == {"error": "short link expired"}

        stats = (await client.get("/api/stats")).json()
        assert stats["total_links"] == 1
        assert stats["active_links"] == 0
        assert await store.count() == 1

        # 5. Dedup still hands back the expired link
        stale = await client.post("/shorten", data={"url": "https://example.com/a"})
        assert stale.status_code == 200
        assert stale.json()["short_link"] == code
