from unittest import mock

from wedding_lottery.api import deps
from wedding_lottery.exceptions import TTSProviderError
from wedding_lottery.services.name_store import DEFAULT_NAMES, NameStore
from wedding_lottery.services.winner_ledger import WinnerLedger


def test_get_names_default(client):
    response = client.get("/api/names")
    assert response.status_code == 200
    data = response.json()
    assert data["names"] == DEFAULT_NAMES
    assert data["source"] == "default"


def test_put_names(client):
    response = client.put("/api/names", json={"names": [" 张三 ", "", "李四"]})
    assert response.status_code == 200
    assert response.json()["count"] == 2

    data = client.get("/api/names").json()
    assert data["names"] == ["张三", "李四"]
    assert data["source"] == "persisted"


def test_post_names_alias(client):
    assert client.post("/api/names", json={"names": ["张三"]}).status_code == 200


def test_put_names_invalid(client):
    response = client.put("/api/names", json={"names": "张三"})
    assert response.status_code == 400
    assert response.json()["received"] == "str"

    assert client.put("/api/names", json={"names": []}).status_code == 400
    assert client.put("/api/names", json={"names": ["  "]}).status_code == 400
    assert client.put("/api/names", json=["张三"]).status_code == 400
    assert client.put("/api/names", content=b"not json").status_code == 400


def test_winners_merge_and_reset(client):
    first = client.put("/api/winners", json={"winners": ["a", "b"]}).json()
    assert first["newCount"] == 2

    second = client.put("/api/winners", json={"winners": ["b", "c"]}).json()
    assert second["winners"] == ["a", "b", "c"]
    assert second["newCount"] == 1
    assert second["totalCount"] == 3

    assert client.get("/api/winners").json()["winners"] == ["a", "b", "c"]

    reset = client.delete("/api/winners")
    assert reset.status_code == 200
    assert reset.json()["success"] is True
    assert client.get("/api/winners").json()["winners"] == []

    assert client.delete("/api/winners").json()["success"] is True


def test_winners_invalid(client):
    assert client.put("/api/winners", json={}).status_code == 400
    assert client.put("/api/winners", json={"winners": []}).status_code == 400


def test_storage_failure_on_writes(app, client, broken_kv):
    app.dependency_overrides[deps.get_name_store] = lambda: NameStore(broken_kv)
    app.dependency_overrides[deps.get_winner_ledger] = lambda: WinnerLedger(broken_kv)

    assert client.get("/api/names").json()["source"] == "default"
    assert client.get("/api/winners").json()["source"] == "error"

    response = client.put("/api/names", json={"names": ["张三"]})
    assert response.status_code == 500
    assert "troubleshooting" in response.json()

    assert client.put("/api/winners", json={"winners": ["a"]}).status_code == 500
    assert client.delete("/api/winners").status_code == 500
    assert client.post("/api/draw").status_code == 500


def test_draw_and_announce_in_background(client, dispatcher, ledger):
    client.put("/api/names", json={"names": ["A", "B", "C"]})

    response = client.post("/api/draw")
    assert response.status_code == 200
    data = response.json()
    assert len(set(data["winners"])) == 2
    assert data["remaining"] == 1
    assert ledger.load() == data["winners"]
    assert dispatcher.calls == [data["winners"]]

    rejected = client.post("/api/draw")
    assert rejected.status_code == 409
    assert rejected.json()["reason"] == "insufficient_remaining"
    assert len(dispatcher.calls) == 1


def test_draw_pool_exhausted(client):
    client.put("/api/names", json={"names": ["A", "B"]})
    client.post("/api/draw")

    response = client.post("/api/draw")
    assert response.status_code == 409
    assert response.json()["reason"] == "pool_exhausted"


def test_eligible_and_preview(client, ledger):
    client.put("/api/names", json={"names": ["A", "B", "C", "D"]})
    client.put("/api/winners", json={"winners": ["B"]})

    data = client.get("/api/draw/eligible").json()
    assert data == {"eligible": ["A", "C", "D"], "eligibleCount": 3, "poolCount": 4, "winnerCount": 1}

    preview = client.get("/api/draw/preview").json()
    assert set(preview["names"]) <= {"A", "C", "D"}
    assert ledger.load() == ["B"]


def test_announce_returns_audio(app, client):
    tts_client = mock.Mock()
    tts_client.synthesize.return_value = b"ID3audio"
    app.dependency_overrides[deps.get_tts_client] = lambda: tts_client

    response = client.post("/api/announce", json={"text": "恭喜"})
    assert response.status_code == 200
    assert response.headers["content-type"] == "audio/mpeg"
    assert response.content == b"ID3audio"


def test_announce_provider_error(app, client):
    tts_client = mock.Mock()
    tts_client.synthesize.side_effect = TTSProviderError("TTS service error", details={"errorCode": "202"}, error_code="202")
    app.dependency_overrides[deps.get_tts_client] = lambda: tts_client

    response = client.post("/api/announce", json={"text": "恭喜"})
    assert response.status_code == 500
    assert response.json()["youdaoError"] == "202"


def test_announce_missing_text(client):
    assert client.post("/api/announce", json={}).status_code == 400


def test_latest_audio(app, client, tmp_path):
    from wedding_lottery.services.announcer import FileAudioSink

    sink = FileAudioSink(str(tmp_path))
    app.dependency_overrides[deps.get_audio_sink] = lambda: sink
    assert client.get("/api/announce/latest").status_code == 404

    sink(b"ID3audio")
    response = client.get("/api/announce/latest")
    assert response.status_code == 200
    assert response.content == b"ID3audio"


def test_admin_crud(client):
    client.put("/api/names", json={"names": ["Alice", "Bob"]})

    assert client.post("/api/admin/names", json={"name": "Carol"}).json()["count"] == 3
    assert client.post("/api/admin/names", json={"name": "Bob"}).status_code == 400

    assert client.put("/api/admin/names/0", json={"name": "Alicia"}).status_code == 200
    assert client.delete("/api/admin/names/1").status_code == 200
    assert client.delete("/api/admin/names/9").status_code == 400

    listing = client.get("/api/admin/names", params={"search": "ALI"}).json()
    assert listing == {"names": [{"index": 0, "name": "Alicia"}], "total": 1}

    reset = client.post("/api/admin/names/reset").json()
    assert reset["names"] == DEFAULT_NAMES


def test_draw_with_failing_ledger_read_is_not_announced(app, client, dispatcher, flaky_kv):
    ledger = WinnerLedger(flaky_kv)
    ledger.append(["A", "B"])
    app.dependency_overrides[deps.get_winner_ledger] = lambda: ledger
    client.put("/api/names", json={"names": ["A", "B", "C", "D"]})

    flaky_kv.fail_next_get = 1
    response = client.post("/api/draw")

    assert response.status_code == 500
    assert "troubleshooting" in response.json()
    assert dispatcher.calls == []
    assert ledger.current() == ["A", "B"]


def test_admin_add_with_failing_read_keeps_pool(app, client, flaky_kv):
    store = NameStore(flaky_kv)
    store.save([f"guest_{i}" for i in range(50)])
    app.dependency_overrides[deps.get_name_store] = lambda: store

    flaky_kv.fail_next_get = 1
    response = client.post("/api/admin/names", json={"name": "new_guest"})

    assert response.status_code == 500
    assert len(store.names()) == 50
