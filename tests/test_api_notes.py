"""
Noteful API — /api/notes Endpoint Tests
========================================

What:  End-to-end tests of the notes routes against a seeded SQLite database.
How:   HTTPX AsyncClient over ASGITransport; the `database` fixture reloads the
       ten sample notes (ids 1000-1009) before every test.
"""

import pytest

NOTE_KEYS = {"id", "title", "content", "folderId", "folderName", "tags"}


class TestListNotes:

    @pytest.mark.asyncio
    async def test_returns_all_seeded_notes_in_id_order(self, test_client):
        response = await test_client.get("/api/notes")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        body = response.json()
        assert len(body) == 10
        assert [note["id"] for note in body] == list(range(1000, 1010))

    @pytest.mark.asyncio
    async def test_every_item_has_the_note_keys(self, test_client):
        response = await test_client.get("/api/notes")

        for item in response.json():
            assert set(item) == NOTE_KEYS

    @pytest.mark.asyncio
    async def test_search_term_filters_by_title(self, test_client):
        response = await test_client.get("/api/notes?searchTerm=about%20cats")

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 4
        assert all("about cats" in note["title"] for note in body)

    @pytest.mark.asyncio
    async def test_unmatched_search_term_returns_empty_list(self, test_client):
        response = await test_client.get("/api/notes/?searchTerm=NOWAYTHISMATCHESANYTHING")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_wildcards_in_search_term_are_literal(self, test_client):
        response = await test_client.get("/api/notes", params={"searchTerm": "%"})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_empty_search_term_returns_everything(self, test_client):
        response = await test_client.get("/api/notes?searchTerm=")

        assert len(response.json()) == 10


class TestGetNote:

    @pytest.mark.asyncio
    async def test_returns_note_with_folder_and_tags(self, test_client):
        response = await test_client.get("/api/notes/1000")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == 1000
        assert body["title"] == "5 life lessons learned from cats"
        assert body["folderId"] == 100
        assert body["folderName"] == "Archive"
        assert body["tags"] == [{"id": 1, "name": "foo"}, {"id": 2, "name": "bar"}]

    @pytest.mark.asyncio
    async def test_note_without_folder(self, test_client):
        response = await test_client.get("/api/notes/1006")

        body = response.json()
        assert body["folderId"] is None
        assert body["folderName"] is None
        assert body["tags"] == []

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client):
        response = await test_client.get("/api/notes/677776")

        assert response.status_code == 404
        assert response.json()["status"] == 404

    @pytest.mark.asyncio
    async def test_non_integer_id_is_400(self, test_client):
        response = await test_client.get("/api/notes/not-a-number")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestCreateNote:

    @pytest.mark.asyncio
    async def test_creates_note_with_location(self, test_client):
        new_note = {"title": "dogs > cats", "content": "everyone knows it is true"}

        response = await test_client.post("/api/notes", json=new_note)

        assert response.status_code == 201
        assert response.headers["location"] == "/api/notes/1010"
        body = response.json()
        assert set(body) == NOTE_KEYS
        assert body["id"] == 1010
        assert body["title"] == new_note["title"]
        assert body["content"] == new_note["content"]
        assert body["tags"] == []

    @pytest.mark.asyncio
    async def test_created_note_can_be_read_back(self, test_client):
        created = await test_client.post(
            "/api/notes",
            json={"title": "filed note", "content": "in drafts", "folderId": 101},
        )

        fetched = await test_client.get(created.headers["location"])

        assert fetched.status_code == 200
        assert fetched.json() == created.json()
        assert fetched.json()["folderName"] == "Drafts"

    @pytest.mark.asyncio
    async def test_missing_title_is_400(self, test_client):
        response = await test_client.post(
            "/api/notes", json={"content": "this note does not have a title!"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `title` in request body"

    @pytest.mark.asyncio
    async def test_missing_title_does_not_insert(self, test_client):
        await test_client.post("/api/notes", json={"title": ""})

        response = await test_client.get("/api/notes")
        assert len(response.json()) == 10
    @pytest.mark.asyncio
    async def test_request_without_body_is_missing_title(self, test_client):
        response = await test_client.post("/api/notes")

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `title` in request body"

    @pytest.mark.asyncio
    async def test_unknown_folder_is_400(self, test_client):
        response = await test_client.post(
            "/api/notes", json={"title": "lost cat", "folderId": 9999}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert len((await test_client.get("/api/notes")).json()) == 10


class TestUpdateNote:

    @pytest.mark.asyncio
    async def test_updates_note(self, test_client):
        update = {
            "title": "Why are there  so many notes about cats?",
            "content": "This app was written by an obsessed cat lady",
        }

        response = await test_client.put("/api/notes/1004", json=update)

        assert response.status_code == 200
        body = response.json()
        assert set(body) == NOTE_KEYS
        assert body["id"] == 1004
        assert body["title"] == update["title"]
        assert body["content"] == update["content"]

    @pytest.mark.asyncio
    async def test_update_replaces_every_field(self, test_client):
        response = await test_client.put("/api/notes/1000", json={"title": "only a title"})

        body = response.json()
        assert body["content"] is None
        assert body["folderId"] is None
        assert body["folderName"] is None
        # tag associations are not part of the update
        assert [tag["id"] for tag in body["tags"]] == [1, 2]

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client):
        response = await test_client.put(
            "/api/notes/5555", json={"title": "Why are there so many notes about cats?"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_missing_title_is_400(self, test_client):
        response = await test_client.put(
            "/api/notes/1003", json={"content": "this note does not have a title!"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `title` in request body"
    @pytest.mark.asyncio
    async def test_request_without_body_is_missing_title(self, test_client):
        response = await test_client.put("/api/notes/1004")

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `title` in request body"

    @pytest.mark.asyncio
    async def test_unknown_folder_is_400_and_note_is_unchanged(self, test_client):
        response = await test_client.put(
            "/api/notes/1004", json={"title": "moved", "folderId": 9999}
        )

        assert response.status_code == 400
        note = (await test_client.get("/api/notes/1004")).json()
        assert note["folderId"] == 103
        assert note["title"] != "moved"


class TestDeleteNote:

    @pytest.mark.asyncio
    async def test_deletes_note(self, test_client):
        response = await test_client.delete("/api/notes/1008")

        assert response.status_code == 204
        assert response.content == b""
        assert (await test_client.get("/api/notes/1008")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, test_client):
        await test_client.delete("/api/notes/1008")

        response = await test_client.delete("/api/notes/1008")

        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_204(self, test_client):
        response = await test_client.delete("/api/notes/677776")

        assert response.status_code == 204
