from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .labels import LabeledBox, annotate, load_labels
from .postprocess import PostConfig, Postprocessor
from .preprocess import to_blob


PathLike = Union[str, Path]

LOGGER = logging.getLogger(__name__)


class Detector:
    """
    Caller-owned detection handle: preprocess -> inference -> decode -> NMS
    -> display threshold -> labels.

    The detector expects BGR images (OpenCV-style) as `np.ndarray` and returns
    `LabeledBox` records in model input coordinates (`input_size` pixels).
    """

    def __init__(
        self,
        infer_fn: Callable[[np.ndarray], np.ndarray],
        labels: Sequence[str],
        *,
        input_size: Tuple[int, int] = (640, 640),
        post_cfg: PostConfig = PostConfig(),
        backend: Optional[object] = None,
    ):
        if not labels:
            raise ValueError("labels must not be empty")
        self._infer_fn = infer_fn
        self.labels = list(labels)
        self.input_size = input_size
        self.backend = backend
        self.post = Postprocessor(len(self.labels), post_cfg)

    def detect(self, image_bgr: np.ndarray, threshold: Optional[float] = None) -> List[LabeledBox]:
        """
        Args:
            image_bgr: input frame (H, W, 3)
            threshold: display threshold for this call; defaults to the config's
        """

        blob = to_blob(image_bgr, self.input_size)
        preds = self._infer_fn(blob)
        detections = self.post.process(preds, threshold=threshold)
        return annotate(detections, self.labels)

    __call__ = detect


def load_detector(
    model_path: PathLike,
    labels_path: PathLike,
    *,
    input_size: Tuple[int, int] = (640, 640),
    post_cfg: PostConfig = PostConfig(),
    onnx_providers: Optional[Sequence[str]] = None,
    warmup: bool = True,
) -> Detector:
    """
    Build a Detector backed by ONNX Runtime.

    Typical usage:
        detector = load_detector("models/yolov7.onnx", "models/labels.json")
        boxes = detector.detect(frame)
    """

    from .backends.onnxruntime_backend import OnnxRuntimeBackend, OnnxRuntimeBackendConfig

    labels = load_labels(labels_path)
    backend = OnnxRuntimeBackend(model_path, OnnxRuntimeBackendConfig(providers=onnx_providers))
    if warmup:
        backend.warmup()
    LOGGER.info("Detector ready: %d labels, input %sx%s", len(labels), input_size[0], input_size[1])
    return Detector(backend.infer, labels, input_size=input_size, post_cfg=post_cfg, backend=backend)
