"""Canvas snapshot helpers."""

from __future__ import annotations

import base64
import binascii
import io

from PIL import Image, UnidentifiedImageError

_DATA_URL_PREFIX = "data:image/"


def snapshot_to_data_url(snapshot: str) -> str:
    """Normalise a snapshot (data URL or bare base64) into an image data URL.

    Raises ValueError if bare base64 does not decode to an image Pillow knows.
    """
    snapshot = snapshot.strip()
    if snapshot.startswith(_DATA_URL_PREFIX):
        return snapshot

    try:
        raw = base64.b64decode(snapshot, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Snapshot is not valid base64: {e}") from e

    try:
        with Image.open(io.BytesIO(raw)) as img:
            fmt = (img.format or "png").lower()
    except UnidentifiedImageError as e:
        raise ValueError("Snapshot is not a recognised image") from e

    return f"data:image/{fmt};base64,{snapshot}"
