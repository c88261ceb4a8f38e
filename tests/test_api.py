"""Endpoint smoke tests in single-user mode."""

import json
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import UUID, uuid4

import pytest

from web3journey.ai.errors import AIProviderError


pytestmark = pytest.mark.db

ADDRESS = "0x" + "cd" * 20


@pytest.mark.asyncio
async def test_health(client) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
    assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestCatalog:
    @pytest.mark.asyncio
    async def test_modules_by_level(self, client) -> None:
        response = await client.get("/api/v1/catalog/modules", params={"level": "foundation"})
        assert response.status_code == 200
        assert [m["id"] for m in response.json()] == ["blockchain-basics", "ethereum-fundamentals", "web3-ecosystem"]

    @pytest.mark.asyncio
    async def test_module_detail_and_missing_module(self, client) -> None:
        response = await client.get("/api/v1/catalog/modules/ethereum-fundamentals")
        assert response.status_code == 200
        assert response.json()["dependencies"] == ["blockchain-basics"]

        missing = await client.get("/api/v1/catalog/modules/underwater-basket")
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "NOT_FOUND"


class TestProgress:
    @pytest.mark.asyncio
    async def test_topic_update_flows_into_snapshot(self, client) -> None:
        response = await client.put(
            "/api/v1/progress/modules/ethereum-fundamentals/topics/evm", json={"status": "completed"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["module_percentage"] == 25
        assert body["sync"]["synced"] is True

        snapshot = (await client.get("/api/v1/progress")).json()
        assert snapshot["course_percentage"] == 2
        assert snapshot["module_percentages"]["ethereum-fundamentals"] == 25
        assert len(snapshot["learning"]) == 1

        module = (await client.get("/api/v1/progress/modules/ethereum-fundamentals")).json()
        assert module["topics"]["evm"] == "completed"
        assert module["completed"] is False

    @pytest.mark.asyncio
    async def test_unknown_topic_is_404(self, client) -> None:
        response = await client.put(
            "/api/v1/progress/modules/ethereum-fundamentals/topics/nope", json={"status": "completed"}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_status_is_rejected(self, client) -> None:
        response = await client.put(
            "/api/v1/progress/modules/ethereum-fundamentals/topics/evm", json={"status": "mastered"}
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_project_update(self, client) -> None:
        response = await client.put(
            "/api/v1/progress/projects/erc20-token",
            json={"status": "completed", "github_url": "https://github.com/me/erc20"},
        )
        assert response.status_code == 200
        assert response.json()["status"] == "completed"

        snapshot = (await client.get("/api/v1/progress")).json()
        assert snapshot["completed_project_ids"] == ["erc20-token"]
        assert snapshot["projects"][0]["github_url"] == "https://github.com/me/erc20"


class TestStats:
    @pytest.mark.asyncio
    async def test_activity_once_per_day(self, client) -> None:
        first = (await client.post("/api/v1/stats/activity")).json()
        second = (await client.post("/api/v1/stats/activity")).json()

        assert first["updated"] is True
        assert first["stats"]["current_streak"] == 1
        assert second["updated"] is False

    @pytest.mark.asyncio
    async def test_achievement_check(self, client) -> None:
        await client.put("/api/v1/progress/modules/blockchain-basics/topics/merkle-trees", json={"status": "completed"})

        response = await client.post("/api/v1/stats/achievements/check")

        assert response.json()["new_achievements"] == ["first_step"]
        listing = (await client.get("/api/v1/stats/achievements")).json()
        assert [a["id"] for a in listing["unlocked"]] == ["first_step"]

    @pytest.mark.asyncio
    async def test_learning_minutes(self, client) -> None:
        response = await client.post("/api/v1/stats/minutes", json={"minutes": 75})
        assert response.json()["learning_time"] == "1h 15m"

        invalid = await client.post("/api/v1/stats/minutes", json={"minutes": 0})
        assert invalid.status_code == 422


class TestLocalProgress:
    @pytest.mark.asyncio
    async def test_mastered_module_and_reset(self, client) -> None:
        client.headers["X-Local-Progress-Id"] = str(uuid4())
        response = await client.put("/api/v1/local-progress/modules/blockchain-basics", json={"status": "mastered"})
        body = response.json()
        assert body["overall_progress"] == 7
        assert body["state"]["achievements"] == ["first_step"]

        record = await client.post(
            "/api/v1/local-progress/records", json={"module_id": "blockchain-basics", "duration": 90}
        )
        assert record.status_code == 201
        assert record.json()["learning_time"] == "1h 30m"

        reset = (await client.delete("/api/v1/local-progress")).json()
        assert reset["state"]["module_progress"] == {}
        assert reset["overall_progress"] == 0

    @pytest.mark.asyncio
    async def test_new_visitor_gets_a_progress_id(self, client) -> None:
        response = await client.get("/api/v1/local-progress")

        assert response.status_code == 200
        issued = response.headers["X-Local-Progress-Id"]
        assert UUID(issued)
        assert "local_progress_id" in response.headers["set-cookie"]

    @pytest.mark.asyncio
    async def test_browsers_do_not_share_progress(self, client) -> None:
        alice = {"X-Local-Progress-Id": str(uuid4())}
        bob = {"X-Local-Progress-Id": str(uuid4())}

        await client.put(
            "/api/v1/local-progress/modules/blockchain-basics", json={"status": "completed"}, headers=alice
        )
        await client.put("/api/v1/local-progress/modules/defi-development", json={"status": "mastered"}, headers=bob)
        await client.delete("/api/v1/local-progress", headers=bob)

        alice_state = (await client.get("/api/v1/local-progress", headers=alice)).json()["state"]
        bob_state = (await client.get("/api/v1/local-progress", headers=bob)).json()["state"]

        assert alice_state["module_progress"]["blockchain-basics"]["status"] == "completed"
        assert bob_state["module_progress"] == {}


class TestNotes:
    @pytest.mark.asyncio
    async def test_note_lifecycle(self, client) -> None:
        saved = await client.put("/api/v1/notes/topic/evm", json={"content": "stack based machine", "tags": ["EVM"]})
        assert saved.status_code == 200
        assert saved.json()["word_count"] == 3
        assert saved.json()["tags"] == ["evm"]

        assert len((await client.get("/api/v1/notes")).json()) == 1
        assert (await client.delete("/api/v1/notes/topic/evm")).status_code == 204
        assert (await client.get("/api/v1/notes/topic/evm")).json() is None

    @pytest.mark.asyncio
    async def test_unknown_reference_type(self, client) -> None:
        response = await client.put("/api/v1/notes/book/evm", json={"content": "x"})
        assert response.status_code == 422


class TestCertificates:
    @pytest.mark.asyncio
    async def test_list_and_mint(self, client) -> None:
        await client.put("/api/v1/progress/projects/erc20-token", json={"status": "completed"})

        listing = (await client.get("/api/v1/certificates", params={"filter": "eligible", "locale": "en"})).json()
        assert [c["referenceId"] for c in listing["certificates"]] == ["erc20-token"]
        assert listing["chainId"] == 11155111

        minted = await client.post(
            "/api/v1/certificates/mint",
            json={"type": 2, "referenceId": "erc20-token", "recipientAddress": ADDRESS},
        )
        assert minted.status_code == 200
        assert minted.json()["simulated"] is True
        assert minted.json()["transactionHash"].startswith("0x")

    @pytest.mark.asyncio
    async def test_mint_not_eligible(self, client) -> None:
        response = await client.post(
            "/api/v1/certificates/mint",
            json={"type": 3, "referenceId": "full-course", "recipientAddress": ADDRESS},
        )
        assert response.status_code == 400
        assert response.json()["error"]["category"] == "VALIDATION_ERROR"


class TestReports:
    @pytest.mark.asyncio
    async def test_pdf_download(self, client) -> None:
        response = await client.get("/api/v1/reports/learning", params={"locale": "en"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "attachment" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_summary(self, client) -> None:
        await client.put("/api/v1/progress/projects/dex-interface", json={"status": "completed"})

        summary = (await client.get("/api/v1/reports/learning/summary", params={"name": "Ada"})).json()

        assert summary["user_name"] == "Ada"
        assert summary["completed_projects"] == 1
        assert summary["locale"] == "en"


class TestAi:
    @pytest.mark.asyncio
    async def test_chat_streams_sse(self, client) -> None:
        async def stream_text(*_args, **_kwargs):
            yield "Hello"

        fake = MagicMock()
        fake.stream_text = stream_text
        with patch("web3journey.ai.assistant.service.LLMClient", return_value=fake):
            response = await client.post("/api/v1/ai/chat", json={"messages": [{"role": "user", "content": "hi"}]})

        assert response.headers["content-type"].startswith("text/event-stream")
        frames = [json.loads(line.removeprefix("data: ")) for line in response.text.splitlines() if line]
        assert frames == [{"content": "Hello", "done": False}, {"content": "", "done": True}]

    @pytest.mark.asyncio
    async def test_review_provider_failure_is_503(self, client) -> None:
        with patch(
            "web3journey.ai.review.router.review_code", AsyncMock(side_effect=AIProviderError("provider down"))
        ):
            response = await client.post("/api/v1/ai/review", json={"code": "contract A {}"})

        assert response.status_code == 503
        assert response.json()["error"]["category"] == "EXTERNAL_SERVICE_ERROR"

    @pytest.mark.asyncio
    async def test_review_plain_text_reply_falls_back(self, client) -> None:
        fake = MagicMock()
        fake.get_text = AsyncMock(return_value="Looks fine, but add events.")
        with patch("web3journey.ai.review.service.LLMClient", return_value=fake):
            response = await client.post("/api/v1/ai/review", json={"code": "contract A {}"})

        assert response.status_code == 200
        body = response.json()
        assert body["summary"] == "Looks fine, but add events."
        assert body["rawResponse"] is True
        assert body["score"] == {"security": 0, "gasEfficiency": 0, "codeQuality": 0, "overall": 0}
        assert body["issues"] == []
        assert body["highlights"] == []
        assert body["recommendations"] == []
