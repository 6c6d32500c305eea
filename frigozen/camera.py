"""Receipt photo capture from a USB camera using OpenCV."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path


@dataclass
class ReceiptPhoto:
    camera_index: int
    image_path: str
    captured_at: str  # ISO8601


class ReceiptCamera:
    """Take a photo of a receipt held in front of the camera."""

    def __init__(self, camera_index: int = 0, save_dir: str = "/tmp/frigozen") -> None:
        self._camera_index = camera_index
        self._save_dir = Path(save_dir)
        self._save_dir.mkdir(parents=True, exist_ok=True)

    def capture(self) -> ReceiptPhoto:
        """Capture a single frame and save it as a JPEG."""
        try:
            import cv2
        except ImportError:
            raise ImportError(
                "opencv-python is required: pip install 'frigozen[camera]'"
            ) from None

        cap = cv2.VideoCapture(self._camera_index)
        if not cap.isOpened():
            raise RuntimeError(
                f"Impossible d'ouvrir la caméra {self._camera_index}. "
                f"Vérifiez le branchement."
            )

        try:
            ret, frame = cap.read()
            if not ret or frame is None:
                raise RuntimeError(
                    f"Aucune image reçue de la caméra {self._camera_index}."
                )

            now = datetime.now(timezone.utc)
            filename = f"receipt_{now.strftime('%Y%m%d_%H%M%S')}.jpg"
            filepath = self._save_dir / filename
            cv2.imwrite(str(filepath), frame)

            return ReceiptPhoto(
                camera_index=self._camera_index,
                image_path=str(filepath),
                captured_at=now.isoformat(),
            )
        finally:
            cap.release()
