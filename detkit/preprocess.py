from typing import Tuple

import numpy as np


def to_blob(image_bgr: np.ndarray, input_size: Tuple[int, int] = (640, 640)) -> np.ndarray:
    """
    Stretch an OpenCV BGR image to the model input size and pack it as a
    normalized NCHW float32 blob of shape (1, 3, H, W).

    No letterboxing: boxes decoded from the model stay in `input_size` pixels.

    Args:
        image_bgr: input image (H, W, 3), uint8 BGR
        input_size: (width, height) expected by the model
    """

    try:
        import cv2  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ImportError("OpenCV is required for to_blob(). Install with `pip install opencv-python`.") from e

    if image_bgr is None or not hasattr(image_bgr, "shape"):
        raise TypeError("image_bgr must be a NumPy array (BGR).")
    if image_bgr.ndim != 3 or image_bgr.shape[2] != 3:
        raise ValueError(f"Expected image shape (H, W, 3), got {getattr(image_bgr, 'shape', None)}")

    new_w, new_h = input_size
    h, w = image_bgr.shape[:2]
    img = image_bgr
    if (w, h) != (new_w, new_h):
        img = cv2.resize(img, (new_w, new_h), interpolation=cv2.INTER_LINEAR)

    # BGR -> RGB, normalize, HWC -> CHW, add batch
    blob = img[:, :, ::-1].astype(np.float32) / 255.0
    blob = np.transpose(blob, (2, 0, 1))[None, ...]
    return np.ascontiguousarray(blob)
