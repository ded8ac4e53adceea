import logging
import math
from typing import List, Sequence, Tuple

import numpy as np

from .errors import InvalidParameter, MalformedPrediction
from .types import Candidate, Detection

LOGGER = logging.getLogger(__name__)


def _check_unit_interval(name: str, value: float) -> None:
    # NaN fails the comparison as well.
    if isinstance(value, bool) or not (0.0 <= value <= 1.0):
        raise InvalidParameter(f"{name} must be in [0, 1] (got {value!r})")


def box_iou(a: Tuple[float, float, float, float], b: Tuple[float, float, float, float]) -> float:
    """
    IoU of two xyxy boxes. A zero-area union yields 0.0.
    """

    ax1, ay1, ax2, ay2 = a
    bx1, by1, bx2, by2 = b
    inter = max(0.0, min(ax2, bx2) - max(ax1, bx1)) * max(0.0, min(ay2, by2) - max(ay1, by1))
    area_a = max(0.0, ax2 - ax1) * max(0.0, ay2 - ay1)
    area_b = max(0.0, bx2 - bx1) * max(0.0, by2 - by1)
    union = area_a + area_b - inter
    if union <= 0.0 or math.isnan(union):
        return 0.0
    return inter / union


def nms(boxes: np.ndarray, scores: np.ndarray, iou_threshold: float) -> np.ndarray:
    """
    Greedy NumPy NMS. Expects boxes shape (N,4) in xyxy and scores shape (N,).
    Returns indices of boxes to keep, best score first.

    Equal scores keep their input order. A box is dropped only when its IoU
    with a kept box is strictly greater than `iou_threshold`.
    """

    if boxes.size == 0:
        return np.empty((0,), dtype=np.int64)

    x1 = boxes[:, 0]
    y1 = boxes[:, 1]
    x2 = boxes[:, 2]
    y2 = boxes[:, 3]
    areas = np.maximum(0.0, x2 - x1) * np.maximum(0.0, y2 - y1)

    order = np.argsort(-scores, kind="stable")
    keep = []

    while order.size > 0:
        i = order[0]
        keep.append(i)
        rest = order[1:]

        xx1 = np.maximum(x1[i], x1[rest])
        yy1 = np.maximum(y1[i], y1[rest])
        xx2 = np.minimum(x2[i], x2[rest])
        yy2 = np.minimum(y2[i], y2[rest])

        w = np.maximum(0.0, xx2 - xx1)
        h = np.maximum(0.0, yy2 - yy1)
        inter = w * h
        union = areas[i] + areas[rest] - inter
        iou = np.divide(inter, union, out=np.zeros_like(inter), where=union > 0.0)

        order = rest[iou <= iou_threshold]

    return np.array(keep, dtype=np.int64)


def suppress(candidates: Sequence[Candidate], iou_threshold: float, score_threshold: float) -> List[Detection]:
    """
    Confidence filter + per-class greedy NMS.

    Each candidate takes its best class (lowest index on ties). Candidates
    scoring below `score_threshold` are dropped, then NMS runs independently
    per class. Output groups classes in ascending index order, each group in
    descending score order.

    Args:
        candidates: decoded predictions of one image
        iou_threshold: overlap above which a same-class box is suppressed, in [0, 1]
        score_threshold: minimum best-class score to enter NMS, in [0, 1]
    """

    _check_unit_interval("iou_threshold", iou_threshold)
    _check_unit_interval("score_threshold", score_threshold)

    if not candidates:
        return []

    num_classes = len(candidates[0].class_scores)
    if num_classes == 0:
        raise MalformedPrediction("Candidates carry no class scores")
    for cand in candidates:
        if len(cand.class_scores) != num_classes:
            raise MalformedPrediction(
                f"Inconsistent class score lengths: {len(cand.class_scores)} vs {num_classes}"
            )

    boxes = np.array([c.as_xyxy() for c in candidates], dtype=np.float64)
    class_scores = np.array([c.class_scores for c in candidates], dtype=np.float64)

    # np.argmax returns the first maximum: stable argmax.
    class_ids = np.argmax(class_scores, axis=1)
    scores = class_scores[np.arange(class_scores.shape[0]), class_ids]

    passed = scores >= score_threshold
    LOGGER.debug("suppress: %d candidates, %d above score_threshold=%s", len(candidates), int(passed.sum()), score_threshold)

    detections: List[Detection] = []
    for cls in np.unique(class_ids[passed]):
        idx = np.flatnonzero(passed & (class_ids == cls))
        keep_local = nms(boxes[idx], scores[idx], iou_threshold)
        for i in idx[keep_local]:
            c = candidates[int(i)]
            detections.append(
                Detection(
                    x=c.center_x - c.width / 2,
                    y=c.center_y - c.height / 2,
                    width=c.width,
                    height=c.height,
                    class_index=int(cls),
                    score=float(scores[i]),
                )
            )

    LOGGER.debug("suppress: kept %d detections", len(detections))
    return detections
