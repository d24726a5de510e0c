"""Image picker backed by a file chooser.

The chooser is any callable returning a path or ``None``; the desktop shell
passes ``tkinter.filedialog.askopenfilename``. Reading and encoding the file
runs in a worker thread so the event loop stays responsive for large images.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import os
from typing import Callable, Optional

from aya.domain.models import PickedImage
from aya.domain.ports import ImagePickerPort

ChoosePath = Callable[[], Optional[str]]

IMAGE_FILETYPES = (
    ("Images", "*.png *.jpg *.jpeg *.webp *.bmp *.gif"),
    ("All Files", "*.*"),
)


def encode_file(path: str) -> str:
    """Return the base64 text of the file at ``path``."""
    with open(path, "rb") as handle:
        return base64.b64encode(handle.read()).decode("ascii")


class FileImagePicker(ImagePickerPort):
    """Pick an image from disk and attach its base64 payload."""

    def __init__(self, choose_path: ChoosePath, *, include_base64: bool = True) -> None:
        self._choose_path = choose_path
        self._include_base64 = include_base64
        self._log = logging.getLogger(__name__)

    async def pick_image(self) -> Optional[PickedImage]:
        selected = self._choose_path()
        if not selected:
            return None
        path = os.path.normpath(str(selected))
        if not self._include_base64:
            return PickedImage(uri=path)
        try:
            payload = await asyncio.to_thread(encode_file, path)
        except OSError as exc:
            # The image is still selected, it just cannot be sent anywhere.
            self._log.warning("Could not read %s: %s", path, exc)
            return PickedImage(uri=path)
        return PickedImage(uri=path, base64=payload)


__all__ = ["FileImagePicker", "IMAGE_FILETYPES", "encode_file"]
