"""Integration tests for the /books routes."""

from fastapi import status

from tests.fixtures.books import BOOK_PROPERTIES

BOOKS_ROUTE = "/books"
JSON = "application/json"


class TestListBooks:
    """GET /books"""

    def test_gets_a_list_of_books(self, client, existing_book):
        res = client.get(BOOKS_ROUTE)

        assert res.status_code == status.HTTP_200_OK
        assert res.headers["content-type"] == JSON

        books = res.json()["books"]
        assert len(books) == 1
        assert sorted(books[0]) == sorted(BOOK_PROPERTIES)

    def test_empty_store(self, client):
        res = client.get(BOOKS_ROUTE)

        assert res.status_code == status.HTTP_200_OK
        assert res.json() == {"books": []}

    def test_filters_by_exact_field_values(self, client, existing_book, new_book_data):
        client.post(BOOKS_ROUTE, json=new_book_data)

        by_author = client.get(BOOKS_ROUTE, params={"author": "test author"})
        by_year = client.get(BOOKS_ROUTE, params={"year": 1999})
        partial = client.get(BOOKS_ROUTE, params={"author": "test"})

        assert [b["isbn"] for b in by_author.json()["books"]] == ["123"]
        assert [b["isbn"] for b in by_year.json()["books"]] == ["11111"]
        assert partial.json()["books"] == []

    def test_unusable_filters_still_return_200(self, client, existing_book):
        unknown = client.get(BOOKS_ROUTE, params={"colour": "blue"})
        bad_number = client.get(BOOKS_ROUTE, params={"pages": "many"})

        assert unknown.status_code == status.HTTP_200_OK
        assert len(unknown.json()["books"]) == 1
        assert bad_number.status_code == status.HTTP_200_OK
        assert bad_number.json()["books"] == []

    def test_oversized_integer_filter_returns_empty_list(self, client, existing_book):
        res = client.get(BOOKS_ROUTE, params={"pages": "9" * 40})

        assert res.status_code == status.HTTP_200_OK
        assert res.json() == {"books": []}


class TestGetBook:
    """GET /books/{isbn}"""

    def test_gets_data_for_one_book(self, client, existing_book, existing_book_data):
        res = client.get(f"{BOOKS_ROUTE}/{existing_book.isbn}")

        assert res.status_code == status.HTTP_200_OK
        assert res.headers["content-type"] == JSON
        assert res.json() == {"book": existing_book_data}

    def test_sends_404_if_book_not_found(self, client):
        res = client.get(f"{BOOKS_ROUTE}/INVALID")

        assert res.status_code == status.HTTP_404_NOT_FOUND
        assert res.headers["content-type"] == JSON
        assert "INVALID" in res.json()["detail"]


class TestCreateBook:
    """POST /books"""

    def test_creates_a_book(self, client, new_book_data):
        res = client.post(BOOKS_ROUTE, json=new_book_data)

        assert res.status_code == status.HTTP_201_CREATED
        assert res.headers["content-type"] == JSON
        assert res.json()["book"] == new_book_data

    def test_created_book_is_retrievable(self, client, new_book_data):
        client.post(BOOKS_ROUTE, json=new_book_data)

        res = client.get(f"{BOOKS_ROUTE}/{new_book_data['isbn']}")

        assert res.status_code == status.HTTP_200_OK
        assert res.json()["book"] == new_book_data

    def test_rejects_book_with_missing_fields(self, client):
        res = client.post(BOOKS_ROUTE, json={"title": "test title"})

        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert res.headers["content-type"] == JSON
        detail = res.json()["detail"]
        assert isinstance(detail, list)
        assert len(detail) == 7

    def test_rejects_wrong_types(self, client, new_book_data):
        res = client.post(BOOKS_ROUTE, json={**new_book_data, "pages": "999"})

        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert res.json()["detail"][0].startswith("pages:")

    def test_rejects_integer_too_large_to_store(self, client, new_book_data):
        res = client.post(BOOKS_ROUTE, json={**new_book_data, "pages": 10**30})

        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert [m.split(":")[0] for m in res.json()["detail"]] == ["pages"]
        assert client.get(BOOKS_ROUTE).json()["books"] == []

    def test_rejected_book_is_not_stored(self, client, new_book_data):
        client.post(BOOKS_ROUTE, json={**new_book_data, "year": "last year"})

        assert client.get(BOOKS_ROUTE).json()["books"] == []

    def test_rejects_non_object_body(self, client):
        res = client.post(BOOKS_ROUTE, json=["not", "a", "book"])

        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert res.json()["detail"] == ["body: must be a JSON object"]

    def test_rejects_malformed_json(self, client):
        res = client.post(
            BOOKS_ROUTE,
            content=b"{not json",
            headers={"content-type": JSON},
        )

        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert res.headers["content-type"] == JSON

    def test_duplicate_isbn_conflicts(self, client, existing_book, existing_book_data):
        res = client.post(BOOKS_ROUTE, json=existing_book_data)

        assert res.status_code == status.HTTP_409_CONFLICT
        assert "11111" in res.json()["detail"]


class TestUpdateBook:
    """PUT /books/{isbn}"""

    def test_updates_a_book(self, client, existing_book, update_book_data):
        res = client.put(f"{BOOKS_ROUTE}/{existing_book.isbn}", json=update_book_data)

        assert res.status_code == status.HTTP_200_OK
        assert res.headers["content-type"] == JSON
        assert res.json()["book"] == {**update_book_data, "isbn": existing_book.isbn}

    def test_rejects_isbn_in_body(self, client, existing_book, new_book_data):
        res = client.put(f"{BOOKS_ROUTE}/{existing_book.isbn}", json=new_book_data)

        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert res.headers["content-type"] == JSON

        unchanged = client.get(f"{BOOKS_ROUTE}/{existing_book.isbn}").json()["book"]
        assert unchanged["title"] == "the title"

    def test_rejects_isbn_even_with_otherwise_invalid_body(self, client, existing_book):
        res = client.put(f"{BOOKS_ROUTE}/{existing_book.isbn}", json={"isbn": "123"})

        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert len(res.json()["detail"]) == 1
        assert res.json()["detail"][0].startswith("isbn:")

    def test_rejects_incomplete_body(self, client, existing_book):
        res = client.put(f"{BOOKS_ROUTE}/{existing_book.isbn}", json={"title": "new"})

        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert len(res.json()["detail"]) == 6

    def test_rejects_integer_too_large_to_store(self, client, existing_book, update_book_data):
        res = client.put(
            f"{BOOKS_ROUTE}/{existing_book.isbn}", json={**update_book_data, "year": -(10**30)}
        )

        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert [m.split(":")[0] for m in res.json()["detail"]] == ["year"]

        unchanged = client.get(f"{BOOKS_ROUTE}/{existing_book.isbn}").json()["book"]
        assert unchanged["year"] == 1999

    def test_sends_404_if_book_not_found(self, client, update_book_data):
        res = client.put(f"{BOOKS_ROUTE}/INVALID", json=update_book_data)

        assert res.status_code == status.HTTP_404_NOT_FOUND
        assert res.headers["content-type"] == JSON


class TestDeleteBook:
    """DELETE /books/{isbn}"""

    def test_deletes_a_book(self, client, existing_book):
        res = client.delete(f"{BOOKS_ROUTE}/{existing_book.isbn}")

        assert res.status_code == status.HTTP_200_OK
        assert res.headers["content-type"] == JSON
        assert res.json() == {"message": "Book deleted"}

    def test_deleted_book_is_gone(self, client, existing_book):
        client.delete(f"{BOOKS_ROUTE}/{existing_book.isbn}")

        res = client.get(f"{BOOKS_ROUTE}/{existing_book.isbn}")

        assert res.status_code == status.HTTP_404_NOT_FOUND

    def test_sends_404_if_book_not_found(self, client):
        res = client.delete(f"{BOOKS_ROUTE}/INVALID")

        assert res.status_code == status.HTTP_404_NOT_FOUND
