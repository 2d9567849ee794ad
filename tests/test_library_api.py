import uuid

from tests.conftest import auth_headers


ARCHETYPE_RESULT = {
    "archetype_name": "Маг",
    "archetype_description": "Трансформация и глубина",
    "answers": [1, 3, 2, 4],
    "recommendations": ["тайна", "сила"],
    "brand_colors": ["#2E1A47", "#C9A227"],
    "trigger_words": ["превращение"],
}


class TestArchetypes:
    async def test_latest_is_null_before_the_quiz(self, client, user_headers):
        response = await client.get("/api/archetypes/latest", headers=user_headers)

        assert response.status_code == 200
        assert response.json() is None

    async def test_save_and_read_latest(self, client, user_headers):
        first = await client.post("/api/archetypes", json=ARCHETYPE_RESULT, headers=user_headers)
        second = await client.post(
            "/api/archetypes",
            json=dict(ARCHETYPE_RESULT, archetype_name="Мудрец"),
            headers=user_headers,
        )
        assert first.status_code == 201
        assert first.json()["brand_fonts"] is None

        latest = await client.get("/api/archetypes/latest", headers=user_headers)
        assert latest.json()["id"] == second.json()["id"]
        assert latest.json()["archetype_name"] == "Мудрец"

        listed = await client.get("/api/archetypes", headers=user_headers)
        assert len(listed.json()) == 2

    async def test_results_are_private(self, client, user_headers, make_user):
        other = await make_user()
        await client.post("/api/archetypes", json=ARCHETYPE_RESULT, headers=auth_headers(other))

        assert (await client.get("/api/archetypes/latest", headers=user_headers)).json() is None


class TestVoicePosts:
    async def test_save_list_delete(self, client, user_headers):
        created = await client.post(
            "/api/voice-posts",
            json={"original_text": "сегодня полнолуние", "refined_text": "Полнолуние!", "tone": "тёплый"},
            headers=user_headers,
        )
        assert created.status_code == 201
        post_id = created.json()["id"]

        listed = await client.get("/api/voice-posts", headers=user_headers)
        assert [post["id"] for post in listed.json()] == [post_id]

        assert (await client.delete(f"/api/voice-posts/{post_id}", headers=user_headers)).status_code == 204
        assert (await client.delete(f"/api/voice-posts/{post_id}", headers=user_headers)).status_code == 404

    async def test_generate_consumes_one(self, client, user, user_headers, fake_llm, load_user):
        fake_llm.queue("Полнолуние. Время отпускать.\n\n#луна #таро")

        response = await client.post(
            "/api/voice-posts/generate",
            json={"transcript": "ну вот сегодня полнолуние и это время отпускать"},
            headers=user_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"post": "Полнолуние. Время отпускать.\n\n#луна #таро"}
        assert "время отпускать" in fake_llm.calls[0]["user"]
        assert (await load_user(user.id)).generations_used == 1

    async def test_empty_transcript_is_rejected(self, client, user_headers, fake_llm):
        response = await client.post(
            "/api/voice-posts/generate", json={"transcript": ""}, headers=user_headers
        )

        assert response.status_code == 400
        assert fake_llm.calls == []


class TestCases:
    CASE = {
        "review_text": "After the Tarot reading everything changed",
        "before": "Сомнения",
        "tags": ["таро"],
        "generated_headlines": ["Как расклад изменил всё"],
        "generated_quote": "Всё изменилось",
        "generated_body": "Клиентка пришла с сомнениями.",
    }

    async def test_save_get_delete(self, client, user_headers):
        created = await client.post("/api/cases", json=self.CASE, headers=user_headers)
        assert created.status_code == 201
        case_id = created.json()["id"]

        fetched = await client.get(f"/api/cases/{case_id}", headers=user_headers)
        assert fetched.json()["generated_headlines"] == ["Как расклад изменил всё"]
        assert fetched.json()["after"] is None

        assert (await client.delete(f"/api/cases/{case_id}", headers=user_headers)).status_code == 204
        assert (await client.get(f"/api/cases/{case_id}", headers=user_headers)).status_code == 404

    async def test_search_is_case_insensitive_and_scoped(self, client, user_headers, make_user):
        await client.post("/api/cases", json=self.CASE, headers=user_headers)
        await client.post(
            "/api/cases",
            json={"review_text": "Спасибо за консультацию", "generated_body": "Numerology session"},
            headers=user_headers,
        )
        other = await make_user()
        await client.post("/api/cases", json=self.CASE, headers=auth_headers(other))

        tarot = await client.get("/api/cases", params={"q": "TAROT"}, headers=user_headers)
        numerology = await client.get("/api/cases", params={"q": "numerology"}, headers=user_headers)
        everything = await client.get("/api/cases", params={"q": "  "}, headers=user_headers)

        assert [case["review_text"] for case in tarot.json()] == [self.CASE["review_text"]]
        assert [case["review_text"] for case in numerology.json()] == ["Спасибо за консультацию"]
        assert len(everything.json()) == 2

    async def test_search_wildcards_match_literally(self, client, user_headers):
        await client.post("/api/cases", json=self.CASE, headers=user_headers)
        await client.post(
            "/api/cases", json={"review_text": "Result: 100% clarity"}, headers=user_headers
        )

        percent = await client.get("/api/cases", params={"q": "%"}, headers=user_headers)
        underscore = await client.get("/api/cases", params={"q": "_"}, headers=user_headers)

        assert [case["review_text"] for case in percent.json()] == ["Result: 100% clarity"]
        assert underscore.json() == []

    async def test_unknown_case(self, client, user_headers):
        response = await client.get(f"/api/cases/{uuid.uuid4()}", headers=user_headers)

        assert response.status_code == 404

    async def test_generate(self, client, user, user_headers, fake_llm, load_user):
        fake_llm.queue(
            '```json\n{"headlines": ["Один", "Два", "Три"], "quote": "Спасибо!", '
            '"body": "БЫЛО... СТАЛО..."}\n```'
        )

        response = await client.post(
            "/api/cases/generate",
            json={"review_text": "Спасибо за расклад!", "after": "Уверенность"},
            headers=user_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "headlines": ["Один", "Два", "Три"],
            "quote": "Спасибо!",
            "body": "БЫЛО... СТАЛО...",
        }
        assert "СТАЛО: Уверенность" in fake_llm.calls[0]["user"]
        assert (await load_user(user.id)).generations_used == 1

    async def test_generate_with_broken_answer(self, client, user, user_headers, fake_llm, load_user):
        fake_llm.queue("Не получилось")

        response = await client.post(
            "/api/cases/generate", json={"review_text": "Спасибо!"}, headers=user_headers
        )

        assert response.status_code == 502
        assert (await load_user(user.id)).generations_used == 0

    async def test_clean_text(self, client, user_headers):
        response = await client.post(
            "/api/cases/clean-text",
            json={"text": "Спасибо!!!  ### Всё супер"},
            headers=user_headers,
        )

        assert response.json() == {"text": "Спасибо! Всё супер"}

    async def test_clean_text_requires_authentication(self, client):
        response = await client.post("/api/cases/clean-text", json={"text": "x"})

        assert response.status_code == 401
