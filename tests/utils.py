from io import BytesIO
from typing import Any, Dict, List, Optional

from PIL import Image

from verify_api.errors import ModelRequestError
from verify_api.utils.gemini import InlineMedia


class FakeModelClient:
    """Stands in for GeminiClient, answers with `reply` or raises `error`."""

    def __init__(self, reply: str = "{}", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[Dict[str, Any]] = list()

    async def generate_content(
        self,
        prompt: str,
        media: Optional[InlineMedia] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        self.calls.append(
            {
                "prompt": prompt,
                "media": media,
                "response_schema": response_schema,
                "system_instruction": system_instruction,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


def quota_error() -> ModelRequestError:
    return ModelRequestError(
        "[429 RESOURCE_EXHAUSTED] You exceeded your current quota", status_code=429
    )


def server_error() -> ModelRequestError:
    return ModelRequestError("[500 INTERNAL] Internal error encountered.", status_code=500)


def jpeg_with_exif(model: str = "TestCam", software: str = "Photoshop") -> bytes:
    exif = Image.Exif()
    exif[0x0110] = model
    exif[0x0131] = software

    buffer = BytesIO()
    Image.new("RGB", (8, 8), color=(200, 30, 30)).save(buffer, "JPEG", exif=exif)
    return buffer.getvalue()


def png_without_exif() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (8, 8)).save(buffer, "PNG")
    return buffer.getvalue()


def assert_error(resp_obj: Dict, status: str = "failed"):
    assert resp_obj.get("status") == status
    assert resp_obj.get("error") is not None
