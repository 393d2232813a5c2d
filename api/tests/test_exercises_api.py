"""
Tests for the exercise endpoints, including import and export.
"""
from conftest import exercise_payload

API = "/api/v1"


def solve_first_sample(client):
    session_id = client.post(f"{API}/sessions", json={}).json()["id"]
    response = client.post(
        f"{API}/sessions/{session_id}/submit",
        json={"answer": "await page.locator('button').click();"},
    )
    assert response.json()["credited"] is True


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Snippet Dojo API"
    assert client.get("/health").json() == {"status": "healthy"}


def test_list_samples_in_pool_order(seeded_client):
    response = seeded_client.get(f"{API}/exercises")
    assert response.status_code == 200
    assert [e["id"] for e in response.json()["exercises"]] == [
        "sample-1", "sample-2", "sample-3", "sample-4", "sample-5"
    ]


def test_list_filtered_by_category(seeded_client):
    response = seeded_client.get(f"{API}/exercises", params={"category": "Selecting elements"})
    assert [e["id"] for e in response.json()["exercises"]] == ["sample-1", "sample-2"]


def test_create_exercise(client):
    response = client.post(f"{API}/exercises", json=exercise_payload())
    assert response.status_code == 201
    data = response.json()
    assert data["folder_id"] == "default"
    assert data["hints"] == ["Use page.locator()", "Pass 'button' as the selector"]

    fetched = client.get(f"{API}/exercises/{data['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["expected_answer"] == "await page.locator('button').click();"
    assert "Actions" in client.get(f"{API}/categories").json()["categories"]


def test_create_exercise_requires_expected_answer(client):
    payload = exercise_payload()
    del payload["expected_answer"]
    assert client.post(f"{API}/exercises", json=payload).status_code == 422


def test_create_exercise_rejects_bad_difficulty(client):
    assert client.post(f"{API}/exercises", json=exercise_payload(difficulty=4)).status_code == 422


def test_create_exercise_in_unknown_folder(client):
    response = client.post(f"{API}/exercises", json=exercise_payload(folder_id="nowhere"))
    assert response.status_code == 400
    assert response.json()["type"] == "ValidationError"


def test_get_unknown_exercise(client):
    response = client.get(f"{API}/exercises/missing")
    assert response.status_code == 404
    assert response.json()["type"] == "NotFoundError"


def test_adding_exercise_resets_solved_progress_but_keeps_calendar(seeded_client):
    solve_first_sample(seeded_client)
    assert seeded_client.get(f"{API}/progress").json()["total_solved"] == 1

    seeded_client.post(f"{API}/exercises", json=exercise_payload())

    progress = seeded_client.get(f"{API}/progress").json()
    assert progress["total_solved"] == 0
    assert progress["solved_exercise_ids"] == []
    assert progress["current_level"] == 1
    assert seeded_client.get(f"{API}/progress/calendar").json()["days"][-1]["count"] == 1


def test_update_is_partial_and_keeps_progress(seeded_client):
    solve_first_sample(seeded_client)

    response = seeded_client.put(f"{API}/exercises/sample-2", json={"title": "Click by id", "difficulty": 2})
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Click by id"
    assert data["difficulty"] == 2
    assert data["expected_answer"] == "await page.locator('#submit-btn').click();"
    assert seeded_client.get(f"{API}/progress").json()["total_solved"] == 1


def test_update_rejects_blank_title(seeded_client):
    assert seeded_client.put(f"{API}/exercises/sample-2", json={"title": "  "}).status_code == 400


def test_delete_exercise_resets_progress(seeded_client):
    solve_first_sample(seeded_client)

    assert seeded_client.delete(f"{API}/exercises/sample-3").status_code == 204
    assert seeded_client.get(f"{API}/exercises/sample-3").status_code == 404
    assert seeded_client.get(f"{API}/progress").json()["total_solved"] == 0


def test_export_can_be_imported_again(seeded_client):
    response = seeded_client.get(f"{API}/exercises/export")
    assert response.status_code == 200
    exported = response.json()
    assert len(exported) == 5

    reimported = seeded_client.post(f"{API}/exercises/import", json=exported)
    assert reimported.status_code == 201
    assert reimported.json()["imported_count"] == 5
    assert len(seeded_client.get(f"{API}/exercises").json()["exercises"]) == 10


def test_import_accepts_camel_case_and_assigns_new_ids(client):
    records = [
        {
            "id": "old-1",
            "title": "Reload",
            "description": "Reload the page.",
            "expectedCode": "await page.reload();",
            "alternativeAnswers": ["page.reload();"],
            "hints": ["Use reload()"],
            "difficulty": 1,
            "category": "Navigation",
            "folderId": "does-not-exist",
        },
        exercise_payload(title="Second"),
    ]

    response = client.post(f"{API}/exercises/import", json=records)
    assert response.status_code == 201
    data = response.json()
    assert data["imported_count"] == 2

    first = data["exercises"][0]
    assert first["id"] != "old-1"
    assert first["expected_answer"] == "await page.reload();"
    assert first["alternative_answers"] == ["page.reload();"]
    assert first["folder_id"] == "default"
    assert "Navigation" in client.get(f"{API}/categories").json()["categories"]


def test_import_is_all_or_nothing(seeded_client):
    bad = exercise_payload()
    del bad["hints"]

    response = seeded_client.post(f"{API}/exercises/import", json=[exercise_payload(), bad])

    assert response.status_code == 400
    assert len(seeded_client.get(f"{API}/exercises").json()["exercises"]) == 5


def test_import_requires_difficulty(client):
    record = exercise_payload()
    del record["difficulty"]

    response = client.post(f"{API}/exercises/import", json=[exercise_payload(title="Valid"), record])

    assert response.status_code == 400
    assert "difficulty" in response.json()["detail"]
    assert client.get(f"{API}/exercises").json()["exercises"] == []


def test_import_rejects_non_list_payload(client):
    response = client.post(f"{API}/exercises/import", json={"title": "x"})
    assert response.status_code == 400


def test_import_resets_solved_progress(seeded_client):
    solve_first_sample(seeded_client)
    seeded_client.post(f"{API}/exercises/import", json=[exercise_payload()])
    assert seeded_client.get(f"{API}/progress").json()["total_solved"] == 0
