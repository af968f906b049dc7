from fastapi import status


def test_student_lifecycle(sql_client):
    """Test create, read, update, list and delete against the SQL repository."""
    response = sql_client.post(
        "/student", json={"name": "Bob", "passportNumber": "A1234567"}
    )
    assert response.status_code == status.HTTP_201_CREATED
    student_id = response.json()["id"]

    response = sql_client.get(f"/student/{student_id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Bob"

    response = sql_client.put(
        f"/student/{student_id}",
        json={"id": 999, "name": "Robert", "passportNumber": "A1234567"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "id": student_id,
        "name": "Robert",
        "passportNumber": "A1234567",
    }

    response = sql_client.get("/student")
    assert response.status_code == status.HTTP_200_OK
    assert [s["id"] for s in response.json()] == [student_id]

    response = sql_client.delete(f"/student/{student_id}")
    assert response.status_code == status.HTTP_200_OK

    response = sql_client.delete(f"/student/{student_id}")
    assert response.status_code == status.HTTP_404_NOT_FOUND

    response = sql_client.get("/student")
    assert response.json() == []


def test_duplicate_passport_returns_400(sql_client):
    first = sql_client.post(
        "/student", json={"name": "Bob", "passportNumber": "A1234567"}
    )
    second = sql_client.post(
        "/student", json={"name": "Alice", "passportNumber": "A1234567"}
    )

    assert first.status_code == status.HTTP_201_CREATED
    assert second.status_code == status.HTTP_400_BAD_REQUEST
    assert second.json() == {"detail": "Student could not be saved"}


def test_update_to_taken_passport_returns_400(sql_client):
    sql_client.post("/student", json={"name": "Bob", "passportNumber": "A1234567"})
    alice = sql_client.post(
        "/student", json={"name": "Alice", "passportNumber": "B1234568"}
    ).json()

    response = sql_client.put(
        f"/student/{alice['id']}",
        json={"name": "Alice", "passportNumber": "A1234567"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert sql_client.get(f"/student/{alice['id']}").json()["passportNumber"] == "B1234568"


def test_out_of_range_id_is_not_found(sql_client):
    """Test ids too large for the id column behave like any missing student."""
    huge_id = "9" * 30

    assert sql_client.get(f"/student/{huge_id}").status_code == status.HTTP_404_NOT_FOUND
    response = sql_client.put(
        f"/student/{huge_id}", json={"name": "Bob", "passportNumber": "A1234567"}
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert sql_client.delete(f"/student/{huge_id}").status_code == status.HTTP_404_NOT_FOUND
    assert sql_client.get(f"/student/-{huge_id}").status_code == status.HTTP_404_NOT_FOUND
