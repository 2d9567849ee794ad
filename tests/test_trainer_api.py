from tests.conftest import auth_headers


SAMPLE = {
    "client_question": "Он вернётся?",
    "expert_draft": "Карты говорят да",
    "improved_answer": "Понимаю, как тяжело ждать. Давайте разберём подробно на консультации.",
    "coach_feedback": "Хорошая эмпатия",
    "pain_type": "отношения",
    "tags": ["любовь"],
}


async def add_sample(client, admin_headers, **fields):
    response = await client.post(
        "/api/trainer/samples", json=dict(SAMPLE, **fields), headers=admin_headers
    )
    assert response.status_code == 201
    return response.json()


class TestSamples:
    async def test_admin_creates_and_users_read(self, client, admin_headers, user_headers):
        sample = await add_sample(client, admin_headers)

        response = await client.get("/api/trainer/samples", headers=user_headers)

        assert [item["id"] for item in response.json()] == [sample["id"]]
        assert response.json()[0]["tags"] == ["любовь"]

    async def test_users_cannot_create_samples(self, client, user_headers):
        response = await client.post("/api/trainer/samples", json=SAMPLE, headers=user_headers)

        assert response.status_code == 403


class TestGenerate:
    async def test_answer_is_saved_as_session(
        self, client, user, user_headers, admin_headers, fake_llm, load_user
    ):
        await add_sample(client, admin_headers, client_question="Про деньги", pain_type="деньги")
        await add_sample(client, admin_headers)
        fake_llm.queue("  Понимаю ваши переживания. Запишитесь на консультацию.  ")

        response = await client.post(
            "/api/trainer/generate",
            json={
                "client_question": "Когда я выйду замуж?",
                "expert_draft": "Скоро",
                "pain_type": "отношения",
                "offer_type": "Расклад на год",
            },
            headers=user_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["improved_answer"] == "Понимаю ваши переживания. Запишитесь на консультацию."

        prompt = fake_llm.calls[0]["user"]
        assert "Вопрос клиента: Он вернётся?" in prompt
        assert "Про деньги" not in prompt
        assert "Желаемое предложение: Расклад на год" in prompt

        sessions = await client.get("/api/trainer/sessions", headers=user_headers)
        assert [item["id"] for item in sessions.json()] == [body["session_id"]]
        assert sessions.json()[0]["offer_type"] == "Расклад на год"
        assert (await load_user(user.id)).generations_used == 1

    async def test_unknown_pain_type_falls_back_to_newest_samples(
        self, client, user_headers, admin_headers, fake_llm
    ):
        await add_sample(client, admin_headers, client_question="Про деньги", pain_type="деньги")
        fake_llm.queue("Ответ")

        await client.post(
            "/api/trainer/generate",
            json={"client_question": "Вопрос", "expert_draft": "Черновик", "pain_type": "здоровье"},
            headers=user_headers,
        )

        assert "Про деньги" in fake_llm.calls[0]["user"]

    async def test_blank_answer_uses_fallback_text(self, client, user_headers, fake_llm):
        fake_llm.queue("")

        response = await client.post(
            "/api/trainer/generate",
            json={"client_question": "Вопрос", "expert_draft": "Черновик"},
            headers=user_headers,
        )

        assert response.json()["improved_answer"] == "Не удалось сгенерировать ответ"

    async def test_whitespace_draft_is_rejected(self, client, user, user_headers, fake_llm, load_user):
        response = await client.post(
            "/api/trainer/generate",
            json={"client_question": "Вопрос", "expert_draft": "   "},
            headers=user_headers,
        )

        assert response.status_code == 400
        assert fake_llm.calls == []
        assert (await load_user(user.id)).generations_used == 0

    async def test_sessions_are_private(self, client, user_headers, make_user, fake_llm):
        other = await make_user()
        fake_llm.queue("Ответ")
        await client.post(
            "/api/trainer/generate",
            json={"client_question": "Вопрос", "expert_draft": "Черновик"},
            headers=auth_headers(other),
        )

        assert (await client.get("/api/trainer/sessions", headers=user_headers)).json() == []
