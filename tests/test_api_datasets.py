"""API tests for dataset CRUD and evaluation."""

from fastapi.testclient import TestClient


def _create(client: TestClient, csv_text: str, name: str = "restaurant") -> dict:
    r = client.post("/api/datasets/", json={"name": name, "csv_text": csv_text})
    assert r.status_code == 201, r.text
    return r.json()


def test_root(client: TestClient):
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert data["service"] == "dtlearn"
    assert "api" in data


def test_health(client: TestClient):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert "database" in r.json()["checks"]


def test_list_datasets_empty(client: TestClient):
    r = client.get("/api/datasets/")
    assert r.status_code == 200
    assert r.json() == []


def test_create_and_get_dataset(client: TestClient, restaurant_csv: str):
    created = _create(client, restaurant_csv)
    assert created["example_count"] == 12
    assert created["output"] == "WillWait"

    r = client.get(f"/api/datasets/{created['id']}")
    assert r.status_code == 200
    data = r.json()
    assert data["name"] == "restaurant"
    assert len(data["problem"]["examples"]) == 12

    listed = client.get("/api/datasets/").json()
    assert [d["id"] for d in listed] == [created["id"]]


def test_create_invalid_dataset(client: TestClient):
    r = client.post("/api/datasets/", json={"name": "bad", "csv_text": "A,Out\n1\n"})
    assert r.status_code == 400


def test_upload_dataset(client: TestClient, restaurant_csv: str):
    r = client.post(
        "/api/datasets/upload",
        files={"file": ("restaurant.csv", restaurant_csv.encode("utf-8"), "text/csv")},
    )
    assert r.status_code == 201, r.text
    assert r.json()["name"] == "restaurant"


def test_upload_rejects_other_files(client: TestClient):
    r = client.post("/api/datasets/upload", files={"file": ("data.pdf", b"%PDF", "application/pdf")})
    assert r.status_code == 400


def test_delete_dataset(client: TestClient, restaurant_csv: str):
    created = _create(client, restaurant_csv)
    r = client.delete(f"/api/datasets/{created['id']}")
    assert r.status_code == 204
    assert client.get(f"/api/datasets/{created['id']}").status_code == 404


def test_evaluate_and_list_runs(client: TestClient, restaurant_csv: str):
    created = _create(client, restaurant_csv)
    r = client.post(f"/api/datasets/{created['id']}/evaluate", json={"test_fraction": 0.25, "seed": 11})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["total"] == 3
    assert data["train_size"] == 9
    assert len(data["results"]) == 3

    runs = client.get(f"/api/datasets/{created['id']}/evaluations").json()
    assert len(runs) == 1
    assert runs[0]["run_id"] == data["run_id"]
    assert runs[0]["criterion"] == "information_gain"

    metrics = client.get("/api/metrics").json()
    assert metrics["datasets_total"] == 1
    assert metrics["examples_total"] == 12
    assert metrics["evaluation_runs_total"] == 1


def test_evaluate_missing_dataset(client: TestClient):
    r = client.post("/api/datasets/nope/evaluate")
    assert r.status_code == 404
