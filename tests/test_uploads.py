# tests/test_uploads.py
import re

from escore.services.uploads import make_upload_name


def test_upload_name_keeps_extension():
    name = make_upload_name("goal.PNG")
    assert re.fullmatch(r"\d{13}-\d+\.PNG", name)
    assert make_upload_name(None).count(".") == 0


def test_upload_stores_file_and_serves_it(client, settings):
    resp = client.post("/api/upload", files={"image": ("goal.png", b"\x89PNG-data", "image/png")})
    assert resp.status_code == 200
    url = resp.json()["url"]
    assert url.startswith("http://testserver/uploads/")
    assert url.endswith(".png")

    name = url.rsplit("/", 1)[-1]
    assert (settings.upload_dir / name).read_bytes() == b"\x89PNG-data"

    served = client.get(f"/uploads/{name}")
    assert served.status_code == 200
    assert served.content == b"\x89PNG-data"


def test_upload_without_file(client):
    resp = client.post("/api/upload")
    assert resp.status_code == 400
    assert resp.json() == {"error": "No file uploaded"}
