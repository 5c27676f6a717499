"""Users endpoint and session round-trip."""
import json

COLUMNS = json.dumps([
    {"name": "name", "filterable": True},
    {"name": "group", "filterable": True},
    {"name": "email", "filterable": False},
])


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_list_users_default_envelope(client):
    response = client.get("/api/users")

    assert response.status_code == 200
    data = response.get_json()
    assert data["paginatorName"] == "qt_users"
    assert data["sortBy"] == "name"
    assert data["perPage"] == 15
    assert data["descending"] is False
    assert data["pagination"]["total"] == 20
    assert len(data["pagination"]["data"]) == 15
    assert data["pagination"]["path"].endswith("/api/users")

    row = data["pagination"]["data"][0]
    assert row["name"] == "User 1"
    assert row["name_with_email"] == "User 1 (user1@example.com)"
    assert row["group"] == "Operators"


def test_filter_by_group_name(client):
    response = client.get("/api/users", query_string={
        "filter": "admins",
        "columns": COLUMNS,
        "perPage": 50,
    })

    data = response.get_json()
    assert data["pagination"]["total"] == 10
    assert {row["group"] for row in data["pagination"]["data"]} == {"Admins"}


def test_sort_by_group_descending(client):
    response = client.get("/api/users", query_string={"sortBy": "group", "descending": "true"})

    rows = response.get_json()["pagination"]["data"]
    assert rows[0]["group"] == "Operators"
    assert rows[-1]["group"] == "Admins"


def test_json_body_parameters(client):
    response = client.post("/api/users", json={
        "filter": "User 2",
        "columns": [{"name": "name", "filterable": True}],
        "perPage": 1,
        "sortBy": "id",
    })

    data = response.get_json()
    assert data["pagination"]["total"] == 2
    assert [row["id"] for row in data["pagination"]["data"]] == [2]


def test_unknown_sort_column_is_bad_request(client):
    response = client.get("/api/users", query_string={"sortBy": "password"})

    assert response.status_code == 400
    assert "password" in response.get_json()["error"]


def test_state_is_recalled_when_another_table_is_driven(client):
    client.get("/api/users", query_string={
        "paginatorName": "qt_users",
        "filter": "User 2",
        "columns": COLUMNS,
        "perPage": 5,
    })

    data = client.get("/api/users", query_string={"paginatorName": "groups"}).get_json()

    assert data["filter"] == "User 2"
    assert data["perPage"] == 5
    assert data["pagination"]["total"] == 2

    # Recalled state was flashed again for the following request
    again = client.get("/api/users", query_string={"paginatorName": "groups"}).get_json()
    assert again["filter"] == "User 2"


def test_remembered_state_expires_after_unrelated_request(client):
    client.get("/api/users", query_string={"filter": "User 2", "columns": COLUMNS})
    client.get("/health")

    data = client.get("/api/users", query_string={"paginatorName": "groups"}).get_json()

    assert data["filter"] is None
    assert data["sortBy"] is None
    assert data["pagination"]["total"] == 20


def test_non_string_sort_column_is_bad_request(client):
    for sort_by in (1, ["name"]):
        response = client.post("/api/users", json={"sortBy": sort_by})

        assert response.status_code == 400
        assert "must be a string" in response.get_json()["error"]


def test_group_column_does_not_query_per_row(client, statements):
    response = client.get("/api/users")

    assert len(response.get_json()["pagination"]["data"]) == 15
    # page items and total count only
    assert len(statements) == 2
