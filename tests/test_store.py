import json

import pytest

from roi_annotation.core.store import InMemoryCameraStore, JsonCameraStore, StoreError


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "webPort": "8080",
                "cameras": [
                    {
                        "id": "cam1",
                        "name": "Front door",
                        "rtspUrl": "rtsp://10.0.0.5/stream1",
                        "roi": [],
                        "drawElements": [
                            {
                                "type": "rectangle",
                                "points": [{"x": 1, "y": 2}, {"x": 3, "y": 4}],
                                "text": "",
                                "color": "#FF0000",
                                "thickness": 2,
                                "fontSize": 0,
                            }
                        ],
                        "enabled": True,
                    },
                    {
                        "id": "cam2",
                        "name": "Yard",
                        "rtspUrl": "rtsp://10.0.0.6/stream1",
                        "roi": None,
                        "drawElements": None,
                        "enabled": False,
                    },
                ],
            }
        )
    )
    return path


def test_get_elements(config_path):
    store = JsonCameraStore(config_path)
    records = store.get_elements("cam1")
    assert len(records) == 1
    assert records[0]["type"] == "rectangle"
    assert store.get_elements("cam2") == []


def test_set_elements_keeps_other_keys(config_path):
    store = JsonCameraStore(config_path)
    new_records = [
        {"type": "text", "points": [{"x": 5, "y": 5}], "color": "#00FF00",
         "thickness": 2, "text": "Porte d'entrée", "fontSize": 13}
    ]
    store.set_elements("cam2", new_records)

    saved = json.loads(config_path.read_text(encoding="utf-8"))
    assert saved["webPort"] == "8080"
    assert saved["cameras"][1]["drawElements"] == new_records
    assert saved["cameras"][1]["name"] == "Yard"
    assert len(saved["cameras"][0]["drawElements"]) == 1
    assert store.get_elements("cam2") == new_records
    # No temporary files left behind
    assert [p.name for p in config_path.parent.iterdir()] == ["config.json"]


def test_unknown_camera(config_path):
    store = JsonCameraStore(config_path)
    with pytest.raises(StoreError, match="camera not found: cam9"):
        store.get_elements("cam9")
    with pytest.raises(StoreError, match="camera not found: cam9"):
        store.set_elements("cam9", [])


def test_missing_and_broken_files(tmp_path):
    with pytest.raises(StoreError, match="failed to open"):
        JsonCameraStore(tmp_path / "missing.json").get_elements("cam1")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(StoreError, match="failed to parse"):
        JsonCameraStore(broken).get_elements("cam1")


def test_list_cameras(config_path):
    cameras = JsonCameraStore(config_path).list_cameras()
    assert [c["id"] for c in cameras] == ["cam1", "cam2"]


def test_in_memory_store_copies():
    store = InMemoryCameraStore()
    records = [{"type": "polyline", "points": [{"x": 0, "y": 0}, {"x": 1, "y": 1}]}]
    store.set_elements("cam1", records)
    records[0]["points"].clear()

    fetched = store.get_elements("cam1")
    assert len(fetched[0]["points"]) == 2
    fetched.clear()
    assert len(store.get_elements("cam1")) == 1
