"""
Post-processing for object-detection networks.

Turns the dense `[N, 4 + K]` prediction array of a detector into deduplicated,
per-class Non-Max-Suppressed boxes. The core needs only NumPy; OpenCV is used
for resizing frames and ONNX Runtime is an optional inference backend.
"""

from .errors import DetkitError, InvalidParameter, MalformedPrediction
from .types import Candidate, Detection
from .decode import decode
from .nms import box_iou, nms, suppress
from .postprocess import PostConfig, Postprocessor
from .config import load_post_config
from .labels import LabeledBox, annotate, color_for_class, load_labels
from .preprocess import to_blob
from .runtime import Detector, load_detector

__all__ = [
    "DetkitError",
    "InvalidParameter",
    "MalformedPrediction",
    "Candidate",
    "Detection",
    "decode",
    "box_iou",
    "nms",
    "suppress",
    "PostConfig",
    "Postprocessor",
    "load_post_config",
    "LabeledBox",
    "annotate",
    "color_for_class",
    "load_labels",
    "to_blob",
    "Detector",
    "load_detector",
]
