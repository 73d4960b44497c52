from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from studio_companion.config import settings
from studio_companion.errors import InvalidInput

logger = logging.getLogger(__name__)

DATA_URL_IMAGE_PREFIX = "data:image/"
TOO_LARGE_MESSAGE = "Image is too large. Try a smaller/cropped photo."


@dataclass(frozen=True)
class UploadedImage:
    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Path | str) -> "UploadedImage":
        p = Path(path)
        mime, _ = mimetypes.guess_type(p.name)
        try:
            data = p.read_bytes()
        except OSError as exc:
            raise InvalidInput("Failed to read image") from exc
        return cls(data=data, mime_type=mime or "application/octet-stream")


@dataclass(frozen=True)
class NormalizeOptions:
    max_edge: int
    start_quality: float
    max_bytes: int
    quality_floor: float = 0.4
    quality_step: float = 0.05

    @classmethod
    def from_settings(cls) -> "NormalizeOptions":
        return cls(
            max_edge=settings.image_max_edge,
            start_quality=settings.image_start_quality,
            max_bytes=settings.image_max_bytes,
            quality_floor=settings.image_quality_floor,
            quality_step=settings.image_quality_step,
        )


@dataclass(frozen=True)
class NormalizedImage:
    data_url: str
    format: str
    quality: float
    width: int
    height: int
    byte_length: int
    qualities_tried: tuple[float, ...]


def scale_to_fit(width: int, height: int, max_edge: int) -> tuple[int, int]:
    """
    Fit (width, height) inside a max_edge square, preserving aspect ratio.
    Never upscales; each side is rounded to the nearest pixel and kept >= 1.
    """
    if width <= 0 or height <= 0:
        raise ValueError("image dimensions must be positive")
    scale = min(1.0, max_edge / max(width, height))
    return max(1, int(round(width * scale))), max(1, int(round(height * scale)))


def encode_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    """
    Split `data:<mime>;base64,<payload>` into (mime, raw bytes).
    """
    if not data_url.startswith("data:") or "," not in data_url:
        raise InvalidInput("Invalid image format")
    header, payload = data_url[5:].split(",", 1)
    parts = header.split(";")
    mime = parts[0] or "application/octet-stream"
    if "base64" not in parts[1:]:
        raise InvalidInput("Invalid image format")
    try:
        return mime, base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInput("Invalid image format") from exc


def normalize_image(
    image: UploadedImage,
    max_edge: int,
    start_quality: float,
    max_bytes: int,
    quality_floor: float = 0.4,
    quality_step: float = 0.05,
) -> NormalizedImage:
    """
    Decode an arbitrary image, downscale it to fit max_edge and re-encode it as JPEG,
    stepping quality down until the encoded size fits max_bytes.

    Fails with InvalidInput instead of returning a payload over max_bytes.
    """
    if max_edge < 1 or max_bytes < 1:
        raise ValueError("max_edge and max_bytes must be positive")
    if not (0.0 < start_quality <= 1.0) or quality_step <= 0:
        raise ValueError("quality must be in (0, 1] and step positive")

    if not (image.mime_type or "").startswith("image/"):
        raise InvalidInput("Please choose an image file (JPEG/PNG).")
    if not image.data:
        raise InvalidInput("Failed to read image")

    raster = _decode(image.data)
    width, height = scale_to_fit(raster.width, raster.height, max_edge)
    if (width, height) != raster.size:
        raster = raster.resize((width, height), Image.Resampling.LANCZOS)

    quality = start_quality
    tried = [quality]
    encoded = _encode_jpeg(raster, quality)
    while len(encoded) > max_bytes and quality > quality_floor:
        quality = round(max(quality_floor, quality - quality_step), 4)
        encoded = _encode_jpeg(raster, quality)
        tried.append(quality)
        logger.debug("re-encoded at quality=%.2f -> %d bytes", quality, len(encoded))

    if len(encoded) > max_bytes:
        logger.info(
            "image still %d bytes at quality floor %.2f (budget %d, upload %d bytes)",
            len(encoded),
            quality,
            max_bytes,
            image.size,
        )
        raise InvalidInput(TOO_LARGE_MESSAGE)

    return NormalizedImage(
        data_url=encode_data_url(encoded, "image/jpeg"),
        format="jpeg",
        quality=quality,
        width=width,
        height=height,
        byte_length=len(encoded),
        qualities_tried=tuple(tried),
    )


def normalize_with(image: UploadedImage, options: NormalizeOptions) -> NormalizedImage:
    return normalize_image(
        image,
        max_edge=options.max_edge,
        start_quality=options.start_quality,
        max_bytes=options.max_bytes,
        quality_floor=options.quality_floor,
        quality_step=options.quality_step,
    )


def _decode(data: bytes) -> Image.Image:
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise InvalidInput("Invalid image") from exc

    # Phone photos carry their rotation in EXIF.
    img = ImageOps.exif_transpose(img)
    return _flatten_to_rgb(img)


def _flatten_to_rgb(img: Image.Image) -> Image.Image:
    if img.mode == "RGB":
        return img
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        canvas = Image.new("RGB", rgba.size, (255, 255, 255))
        canvas.paste(rgba, mask=rgba.split()[3])
        return canvas
    return img.convert("RGB")


def _encode_jpeg(img: Image.Image, quality: float) -> bytes:
    buf = BytesIO()
    try:
        img.save(buf, format="JPEG", quality=max(1, min(100, int(round(quality * 100)))), optimize=True)
    except (KeyError, OSError) as exc:
        # Pillow built without a JPEG encoder.
        raise InvalidInput("Image encoding unsupported") from exc
    return buf.getvalue()
