import base64
import json

import pytest

from verify_api.models.enum.analysis import ContentType
from verify_api.utils.prompts import RESPONSE_SCHEMAS
from tests.fixtures.model_responses import IMAGE_RESULT, VIDEO_RESULT
from tests.utils import assert_error, jpeg_with_exif, png_without_exif, quota_error


@pytest.mark.asyncio
async def test_analyze_image(async_client, model_client):
    model_client.reply = json.dumps(IMAGE_RESULT)
    image = jpeg_with_exif(model="TestCam", software="Photoshop")

    response = await async_client.post(
        "/api/analyze/image",
        files={"image": ("holiday.jpg", image, "image/jpeg")},
        data={"userEmail": "a@b.c"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["aiProbability"] == 91
    assert data["manipulatedRegions"] == IMAGE_RESULT["manipulatedRegions"]
    assert data["exif"]["Model"] == "TestCam"
    assert data["exif"]["Software"] == "Photoshop"

    call = model_client.calls[0]
    assert call["media"].mime_type == "image/jpeg"
    assert call["media"].data == image
    assert call["media"].to_part()["inlineData"]["data"] == base64.b64encode(
        image
    ).decode("ascii")
    assert call["response_schema"] == RESPONSE_SCHEMAS[ContentType.image]

    history = (await async_client.get("/api/history", params={"email": "a@b.c"})).json()
    assert history[0]["type"] == "image"
    assert history[0]["content"] == "Image: holiday.jpg"
    assert json.loads(history[0]["result"])["exif"]["Model"] == "TestCam"


@pytest.mark.asyncio
async def test_analyze_image_without_exif(async_client, model_client):
    model_client.reply = json.dumps({"aiProbability": 20})

    response = await async_client.post(
        "/api/analyze/image", files={"image": ("plain.png", png_without_exif(), "image/png")}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["exif"] == {}
    assert data["humanProbability"] == 80
    assert model_client.calls[0]["media"].mime_type == "image/png"


@pytest.mark.asyncio
async def test_analyze_image_missing_file(async_client, model_client):
    response = await async_client.post(
        "/api/analyze/image", data={"userEmail": "a@b.c"}
    )

    assert response.status_code == 400
    assert_error(response.json())
    assert response.json()["error"] == "Image is required"
    assert model_client.calls == []


@pytest.mark.asyncio
async def test_analyze_image_quota_exhausted(async_client, model_client):
    model_client.error = quota_error()

    response = await async_client.post(
        "/api/analyze/image",
        files={"image": ("holiday.jpg", jpeg_with_exif(), "image/jpeg")},
    )

    assert response.status_code == 200
    data = response.json()
    assert "Demo Mode" in data["explanation"]
    assert data["aiProbability"] == 41
    assert data["exif"]["Model"] == "TestCam"


@pytest.mark.asyncio
async def test_analyze_image_too_large(async_client, model_client):
    # The test application accepts bodies up to 1 MB
    response = await async_client.post(
        "/api/analyze/image",
        files={"image": ("huge.jpg", b"\x00" * (2 * 1024 * 1024), "image/jpeg")},
    )

    assert response.status_code == 413
    assert_error(response.json())
    assert response.json()["error"] == "Request body exceeds limit of 1 MB"
    assert model_client.calls == []


@pytest.mark.asyncio
async def test_analyze_video(async_client, model_client):
    model_client.reply = f"```json\n{json.dumps(VIDEO_RESULT)}\n```"

    response = await async_client.post(
        "/api/analyze/video",
        files={"video": ("clip.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
        data={"userEmail": "a@b.c"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["aiProbability"] == 64
    assert data["humanProbability"] == 36
    assert data["deepfakeSigns"] == ["Lip sync drift", "Blurred jaw line"]
    assert "exif" not in data

    call = model_client.calls[0]
    assert call["media"].mime_type == "video/mp4"
    assert call["response_schema"] == RESPONSE_SCHEMAS[ContentType.video]

    history = (await async_client.get("/api/history", params={"email": "a@b.c"})).json()
    assert history[0]["type"] == "video"
    assert history[0]["content"] == "Video: clip.mp4"


@pytest.mark.asyncio
async def test_analyze_video_missing_file(async_client, model_client):
    response = await async_client.post("/api/analyze/video", data={"userEmail": "a@b.c"})

    assert response.status_code == 400
    assert response.json()["error"] == "Video is required"
    assert model_client.calls == []


@pytest.mark.asyncio
async def test_analyze_video_quota_exhausted(async_client, model_client):
    model_client.error = quota_error()

    response = await async_client.post(
        "/api/analyze/video", files={"video": ("clip.mp4", b"\x00", "video/mp4")}
    )

    assert response.status_code == 200
    data = response.json()
    assert "Demo Mode" in data["explanation"]
    assert data["aiProbability"] == 18
    assert data["humanProbability"] == 82


@pytest.mark.asyncio
async def test_analyze_video_chunked_upload_too_large(async_client, model_client):
    boundary = "verify-boundary"
    head = (
        f"--{boundary}\r\n"
        'Content-Disposition: form-data; name="video"; filename="long.mp4"\r\n'
        "Content-Type: video/mp4\r\n\r\n"
    ).encode()
    tail = f"\r\n--{boundary}--\r\n".encode()

    async def body():
        yield head
        # 3 MB in 64 KB chunks, sent without a Content-Length header
        for _ in range(48):
            yield b"\x00" * (64 * 1024)
        yield tail

    response = await async_client.post(
        "/api/analyze/video",
        content=body(),
        headers={"Content-Type": f"multipart/form-data; boundary={boundary}"},
    )

    assert response.status_code == 413
    assert_error(response.json())
    assert response.json()["error"] == "Request body exceeds limit of 1 MB"
    assert model_client.calls == []
    assert (await async_client.get("/api/history")).json() == []
