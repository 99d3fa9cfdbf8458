from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from rasterplot.errors import PlotSinkError


LOGGER = logging.getLogger(__name__)


class ImageSink(ABC):
    """Destination for finished RGBA frames."""

    @abstractmethod
    def show(self, window_name: str, rgba: np.ndarray) -> None:
        raise NotImplementedError

    @abstractmethod
    def save(self, path: str | Path, rgba: np.ndarray) -> None:
        raise NotImplementedError


class PillowImageSink(ImageSink):
    """Shows frames in the platform image viewer and writes them with Pillow.

    The file format follows the extension of ``path``. Failures surface as
    :class:`PlotSinkError` with the Pillow/OS error chained.
    """

    def show(self, window_name: str, rgba: np.ndarray) -> None:
        try:
            _to_image(rgba).show(title=window_name)
        except (OSError, ValueError) as exc:
            raise PlotSinkError(f"failed to show {window_name!r}: {exc}") from exc

    def save(self, path: str | Path, rgba: np.ndarray) -> None:
        target = Path(path)
        try:
            _to_image(rgba).save(target)
        except (OSError, ValueError, KeyError) as exc:
            raise PlotSinkError(f"failed to save {str(target)!r}: {exc}") from exc
        LOGGER.info("saved %dx%d image to %s", rgba.shape[1], rgba.shape[0], target)


def _to_image(rgba: np.ndarray) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(rgba[:, :, :3]))
