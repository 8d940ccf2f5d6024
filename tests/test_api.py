"""End-to-end HTTP tests through the FastAPI app."""

import pytest
from fastapi.concurrency import run_in_threadpool
from fastapi.testclient import TestClient

from app.core.errors import UpstreamUnavailableError
from app.core.provider_clients import get_ai_service, get_translation_service
from app.main import app
from app.services.translation_service import UNAVAILABLE, TranslationService
from tests.fakes import FakeAIService, FakeTranslator, failing

EMAIL = "learner@example.com"
PASSWORD = "correct-horse"


def _register(client: TestClient, email: str = EMAIL, password: str = PASSWORD):
    return client.post(
        "/auth/register",
        json={"email": email, "password": password, "first_name": "Ana"},
    )


def _login_token(client: TestClient, emails) -> str:
    _register(client)
    code = emails.last_code_for(EMAIL)
    client.post("/auth/verify-email", json={"email": EMAIL, "verification_code": code})
    response = client.post("/auth/login", json={"email": EMAIL, "password": PASSWORD})
    return response.json()["data"]["token"]


def _use_translators(*providers):
    service = TranslationService(list(providers))
    app.dependency_overrides[get_translation_service] = lambda: service
    return service


# ----- envelope / health -----


def test_health_envelope(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "OK", "data": {"status": "ok"}}


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/nope")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["data"] is None


# ----- account lifecycle -----


def test_full_account_lifecycle(client, emails):
    response = _register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["email"] == EMAIL
    assert "password" not in str(body["data"])

    code = emails.last_code_for(EMAIL)
    wrong = "000000" if code != "000000" else "111111"

    response = client.post(
        "/auth/verify-email", json={"email": EMAIL, "verification_code": wrong}
    )
    assert response.status_code == 400
    assert response.json()["success"] is False

    response = client.post(
        "/auth/verify-email", json={"email": EMAIL, "verification_code": code}
    )
    assert response.status_code == 200
    assert response.json()["data"]["is_verified"] is True

    response = client.post("/auth/login", json={"email": EMAIL, "password": PASSWORD})
    assert response.status_code == 200
    data = response.json()["data"]
    token = data["token"]
    assert data["user"]["email"] == EMAIL
    assert data["expires_at"]

    headers = {"Authorization": f"Bearer {token}"}
    response = client.get("/auth/profile", headers=headers)
    assert response.status_code == 200
    profile = response.json()["data"]
    assert profile["email"] == EMAIL
    assert profile["first_name"] == "Ana"
    assert "password_hash" not in profile

    response = client.post("/auth/logout", headers=headers)
    assert response.status_code == 200
    assert response.json()["success"] is True

    response = client.get("/auth/profile", headers=headers)
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_register_duplicate_returns_400(client):
    assert _register(client).status_code == 201
    response = _register(client, email=EMAIL.upper())
    assert response.status_code == 400
    assert response.json()["message"] == "User already exists"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "password": PASSWORD},
        {"email": EMAIL, "password": "short"},
        {"email": EMAIL},
    ],
)
def test_register_invalid_input_returns_400(client, payload):
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"]


def test_verify_email_rejects_malformed_code(client):
    _register(client)
    response = client.post(
        "/auth/verify-email", json={"email": EMAIL, "verification_code": "12ab56"}
    )
    assert response.status_code == 400


def test_login_before_verification_returns_401(client):
    _register(client)
    response = client.post("/auth/login", json={"email": EMAIL, "password": PASSWORD})
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_login_wrong_password_matches_unknown_email(client, emails):
    _login_token(client, emails)
    wrong = client.post("/auth/login", json={"email": EMAIL, "password": "wrong-pass"})
    unknown = client.post(
        "/auth/login", json={"email": "ghost@example.com", "password": PASSWORD}
    )
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Token abc"}, {"Authorization": "bearer abc"}, {"Authorization": "Bearer "}],
)
def test_logout_malformed_header_returns_400(client, headers):
    response = client.post("/auth/logout", headers=headers)
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_logout_unknown_token_still_succeeds(client):
    response = client.post("/auth/logout", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 200


def test_profile_requires_auth(client):
    assert client.get("/auth/profile").status_code == 401
    response = client.get("/auth/profile", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


# ----- AI endpoints -----


def test_ai_translate_uses_chain(client):
    _use_translators(failing("llm"), FakeTranslator("mymemory", "kucing"))
    response = client.post("/ai-translate", json={"text": "cat"})
    assert response.status_code == 200
    assert response.json()["data"] == {"translation": "kucing"}


def test_ai_translate_accepts_language_aliases(client):
    provider = FakeTranslator("llm", "hello")
    _use_translators(provider)
    response = client.post("/ai-translate", json={"text": "Halo", "from": "id", "to": "en"})
    assert response.json()["data"]["translation"] == "hello"
    assert provider.calls == [("halo", "id", "en")]


def test_ai_translate_all_providers_down_still_200(client):
    _use_translators(failing("llm"), failing("mymemory"))
    response = client.post("/ai-translate", json={"text": "hello"})
    assert response.status_code == 200
    assert response.json()["data"]["translation"] == "halo"

    response = client.post("/ai-translate", json={"text": "serendipity"})
    assert response.status_code == 200
    assert response.json()["data"]["translation"] == UNAVAILABLE


def test_ai_translate_blank_text_returns_400(client):
    _use_translators(FakeTranslator("llm", "halo"))
    assert client.post("/ai-translate", json={"text": "   "}).status_code == 400


def test_explain_sentence(client):
    _use_translators(FakeTranslator("llm", "kucing itu duduk."))
    app.dependency_overrides[get_ai_service] = lambda: FakeAIService(
        explanation="1. **Grammar Analysis** ..."
    )
    response = client.post("/explain-sentence", json={"sentence": "The cat sat."})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["translation"] == "kucing itu duduk."
    assert data["explanation"].startswith("1. **Grammar Analysis**")


def test_explain_sentence_provider_down_returns_503(client):
    _use_translators(FakeTranslator("llm", "kucing itu duduk."))
    app.dependency_overrides[get_ai_service] = lambda: FakeAIService(
        error=UpstreamUnavailableError("Explanation service temporarily unavailable")
    )
    response = client.post("/explain-sentence", json={"sentence": "The cat sat."})
    assert response.status_code == 503
    assert response.json() == {
        "success": False,
        "message": "Explanation service temporarily unavailable",
        "data": None,
    }


def test_extract_vocabulary(client):
    app.dependency_overrides[get_ai_service] = lambda: FakeAIService(
        words=["negotiate", "contract"]
    )
    response = client.post(
        "/extract-vocabulary", json={"sentence": "We negotiate the contract."}
    )
    assert response.status_code == 200
    assert response.json()["data"] == {"vocabulary": ["negotiate", "contract"]}


# ----- directories / words -----


def test_directory_crud(client):
    response = client.post("/directories", json={"name": "Travel"})
    assert response.status_code == 201
    directory_id = response.json()["data"]["id"]

    response = client.put(f"/directories/{directory_id}", json={"name": "Trips"})
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Trips"

    names = [d["name"] for d in client.get("/directories").json()["data"]]
    assert names == ["Trips"]

    assert client.delete(f"/directories/{directory_id}").status_code == 200
    assert client.get("/directories").json()["data"] == []
    assert client.delete(f"/directories/{directory_id}").status_code == 404


def test_word_crud_and_filtering(client):
    directory_id = client.post("/directories", json={"name": "Animals"}).json()["data"]["id"]

    response = client.post(
        "/words", json={"english": "cat", "indonesian": "kucing", "directory_id": directory_id}
    )
    assert response.status_code == 201
    cat = response.json()["data"]
    assert cat["correct_count"] == 0 and cat["wrong_count"] == 0

    client.post("/words", json={"english": "run"})

    all_words = client.get("/words").json()["data"]
    assert [w["english"] for w in all_words] == ["run", "cat"]

    filtered = client.get("/words", params={"directory_id": directory_id}).json()["data"]
    assert [w["english"] for w in filtered] == ["cat"]

    response = client.put(f"/words/{cat['id']}", json={"indonesian": "kucing rumah"})
    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["indonesian"] == "kucing rumah"
    assert updated["english"] == "cat"
    assert updated["directory_id"] == directory_id

    assert client.delete(f"/words/{cat['id']}").status_code == 200
    assert client.get(f"/words/{cat['id']}").status_code == 404


def test_word_in_missing_directory_returns_404(client):
    response = client.post("/words", json={"english": "cat", "directory_id": 999})
    assert response.status_code == 404
    assert response.json()["message"] == "Directory not found"


def test_deleting_directory_keeps_its_words(client):
    directory_id = client.post("/directories", json={"name": "Animals"}).json()["data"]["id"]
    word_id = client.post(
        "/words", json={"english": "cat", "directory_id": directory_id}
    ).json()["data"]["id"]

    client.delete(f"/directories/{directory_id}")

    word = client.get(f"/words/{word_id}").json()["data"]
    assert word["directory_id"] is None


def test_word_ai_translate_saves_result(client):
    _use_translators(FakeTranslator("llm", "kucing"))
    word_id = client.post("/words", json={"english": "cat"}).json()["data"]["id"]

    response = client.post(f"/words/{word_id}/ai-translate")
    assert response.status_code == 200
    assert response.json()["data"]["translation"] == "kucing"
    assert client.get(f"/words/{word_id}").json()["data"]["indonesian"] == "kucing"


def test_word_ai_translate_does_not_save_unavailable(client):
    _use_translators(failing("llm"))
    word_id = client.post("/words", json={"english": "serendipity"}).json()["data"]["id"]

    response = client.post(f"/words/{word_id}/ai-translate")
    assert response.json()["data"]["translation"] == UNAVAILABLE
    assert client.get(f"/words/{word_id}").json()["data"]["indonesian"] is None


# ----- progress / sessions -----


def test_progress_updates_counters_and_history(client):
    directory_id = client.post("/directories", json={"name": "Animals"}).json()["data"]["id"]
    cat = client.post("/words", json={"english": "cat", "directory_id": directory_id}).json()["data"]
    dog = client.post("/words", json={"english": "dog", "directory_id": directory_id}).json()["data"]

    response = client.post(
        "/progress",
        json={
            "directory_id": directory_id,
            "total_words": 3,
            "results": [
                {"word_id": cat["id"], "correct": True},
                {"word_id": dog["id"], "correct": False},
                {"word_id": 9999, "correct": True},
            ],
        },
    )
    assert response.status_code == 201
    summary = response.json()["data"]
    assert summary["correct"] == 1
    assert summary["wrong"] == 1
    assert summary["total_words"] == 3
    assert summary["score_percentage"] == 33.3
    assert summary["directory_name"] == "Animals"

    cat = client.get(f"/words/{cat['id']}").json()["data"]
    dog = client.get(f"/words/{dog['id']}").json()["data"]
    assert (cat["correct_count"], cat["wrong_count"]) == (1, 0)
    assert (dog["correct_count"], dog["wrong_count"]) == (0, 1)
    assert cat["last_practiced"] is not None

    sessions = client.get("/sessions").json()["data"]
    assert len(sessions) == 1
    assert sessions[0]["directory_name"] == "Animals"


def test_progress_without_results_scores_zero(client):
    response = client.post("/progress", json={"results": []})
    assert response.status_code == 201
    summary = response.json()["data"]
    assert summary["score_percentage"] == 0.0
    assert summary["directory_name"] is None


def test_sessions_are_paginated(client):
    word_id = client.post("/words", json={"english": "cat"}).json()["data"]["id"]
    for _ in range(17):
        client.post("/progress", json={"results": [{"word_id": word_id, "correct": True}]})

    first = client.get("/sessions").json()["data"]
    second = client.get("/sessions", params={"page": 2}).json()["data"]
    assert len(first) == 15
    assert len(second) == 2
    assert first[0]["id"] > second[0]["id"]

    assert client.get("/sessions", params={"page": 0}).status_code == 400


# ----- input edge cases -----


@pytest.mark.parametrize("method", ["put", "patch"])
def test_update_word_rejects_null_english(client, method):
    word_id = client.post("/words", json={"english": "cat"}).json()["data"]["id"]

    response = getattr(client, method)(f"/words/{word_id}", json={"english": None})
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert client.get(f"/words/{word_id}").json()["data"]["english"] == "cat"


def test_patch_word_applies_only_given_fields(client):
    word_id = client.post(
        "/words", json={"english": "cat", "indonesian": "kucing"}
    ).json()["data"]["id"]

    response = client.patch(f"/words/{word_id}", json={"english": "kitten"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert (data["english"], data["indonesian"]) == ("kitten", "kucing")


def test_progress_total_below_answer_count_is_raised(client):
    ids = [
        client.post("/words", json={"english": w}).json()["data"]["id"]
        for w in ("cat", "dog", "bird")
    ]
    response = client.post(
        "/progress",
        json={"total_words": 1, "results": [{"word_id": i, "correct": True} for i in ids]},
    )
    assert response.status_code == 201
    summary = response.json()["data"]
    assert summary["total_words"] == 3
    assert summary["correct"] == 3
    assert summary["score_percentage"] == 100.0


def test_progress_zero_total_with_answers_is_consistent(client):
    word_id = client.post("/words", json={"english": "cat"}).json()["data"]["id"]
    response = client.post(
        "/progress",
        json={"total_words": 0, "results": [{"word_id": word_id, "correct": True}]},
    )
    summary = response.json()["data"]
    assert summary["total_words"] == 1
    assert summary["score_percentage"] == 100.0


def test_progress_total_above_answers_is_kept(client):
    word_id = client.post("/words", json={"english": "cat"}).json()["data"]["id"]
    response = client.post(
        "/progress",
        json={"total_words": 4, "results": [{"word_id": word_id, "correct": True}]},
    )
    summary = response.json()["data"]
    assert summary["total_words"] == 4
    assert summary["score_percentage"] == 25.0


def test_word_ai_translate_runs_storage_off_the_event_loop(client, monkeypatch):
    offloaded = []

    async def recording_threadpool(func, *args, **kwargs):
        offloaded.append(func.__name__)
        return await run_in_threadpool(func, *args, **kwargs)

    monkeypatch.setattr("app.routers.words.run_in_threadpool", recording_threadpool)
    _use_translators(FakeTranslator("llm", "kucing"))
    word_id = client.post("/words", json={"english": "cat"}).json()["data"]["id"]

    response = client.post(f"/words/{word_id}/ai-translate")
    assert response.status_code == 200
    assert offloaded == ["get_word", "set_translation"]


def test_timestamps_carry_utc_offset(client):
    directory = client.post("/directories", json={"name": "Animals"}).json()["data"]
    word_id = client.post(
        "/words", json={"english": "cat", "directory_id": directory["id"]}
    ).json()["data"]["id"]
    client.post("/progress", json={"results": [{"word_id": word_id, "correct": True}]})

    listed = client.get("/directories").json()["data"][0]
    word = client.get(f"/words/{word_id}").json()["data"]
    history = client.get("/sessions").json()["data"][0]

    for stamp in (
        listed["created_at"],
        word["created_at"],
        word["last_practiced"],
        history["created_at"],
    ):
        assert stamp.endswith("Z") or stamp.endswith("+00:00")
