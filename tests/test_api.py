from fastapi.testclient import TestClient

from api import app

from conftest import build_workspace


client = TestClient(app)


def test_scan_and_query_models(tmp_path):
	root = str(build_workspace(tmp_path / "ws"))

	resp = client.post("/scan", json={"root_path": root})
	assert resp.status_code == 200
	body = resp.json()
	assert body["workspaceRoot"] == root
	assert len(body["modelDecks"]) == 2

	resp = client.get("/models", params={"root_path": root, "device_class": "nmos"})
	assert resp.status_code == 200
	assert [m["name"] for m in resp.json()] == ["nfet_01v8"]

	resp = client.get("/models/M1", params={"root_path": root})
	assert resp.status_code == 200
	assert resp.json()["corners"] == ["ff", "tt"]

	resp = client.get("/decks", params={"root_path": root})
	assert resp.status_code == 200
	assert resp.json()[1]["section"] == "ff"


def test_error_statuses(tmp_path):
	root = str(build_workspace(tmp_path / "ws"))

	assert client.post("/scan", json={"root_path": str(tmp_path / "nope")}).status_code == 400
	assert client.get("/models", params={"root_path": root}).status_code == 404

	client.post("/scan", json={"root_path": root})
	assert client.get("/models/unknown_model", params={"root_path": root}).status_code == 404
	assert client.get("/models", params={"root_path": root, "device_class": "widget"}).status_code == 400
