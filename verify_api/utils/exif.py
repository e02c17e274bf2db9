from io import BytesIO
from typing import Any, Dict

from fastapi.logger import logger
from PIL import Image, UnidentifiedImageError
from PIL.ExifTags import GPSTAGS, IFD, TAGS
from PIL.TiffImagePlugin import IFDRational


def extract_exif(data: bytes) -> Dict[str, Any]:
    """Read EXIF tags of an uploaded image as a JSON-safe dict.

    Files Pillow cannot open, and images without EXIF, give an empty
    dict. The result is informative only, never a reason to fail.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            exif = img.getexif()
            tags: Dict[str, Any] = {
                TAGS.get(tag, str(tag)): _to_json(value) for tag, value in exif.items()
            }
            for ifd, names in ((IFD.Exif, TAGS), (IFD.GPSInfo, GPSTAGS)):
                for tag, value in exif.get_ifd(ifd).items():
                    tags[names.get(tag, str(tag))] = _to_json(value)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.debug(f"No EXIF data could be read: {e}")
        return dict()

    # Pointers to the sub IFDs read above
    tags.pop("ExifOffset", None)
    tags.pop("GPSInfo", None)
    return tags


def _to_json(value: Any) -> Any:
    if isinstance(value, IFDRational):
        return float(value) if value.denominator else None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="ignore").strip("\x00")
    if isinstance(value, (tuple, list)):
        return [_to_json(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _to_json(v) for k, v in value.items()}
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)
