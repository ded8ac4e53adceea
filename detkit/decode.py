from typing import List

import numpy as np

from .errors import InvalidParameter, MalformedPrediction
from .types import Candidate


def check_num_classes(num_classes) -> int:
    if isinstance(num_classes, bool) or not isinstance(num_classes, (int, np.integer)) or num_classes < 1:
        raise InvalidParameter(f"num_classes must be a positive integer (got {num_classes!r})")
    return int(num_classes)


def decode(raw, num_classes: int) -> List[Candidate]:
    """
    Reinterpret the raw network output as one Candidate per prediction slot.

    Layout expected (per image):
    - (N, 4 + K): [cx, cy, w, h, class_score_0, ..., class_score_{K-1}]
    - (1, N, 4 + K): same, with the batch axis most exports keep

    No filtering happens here; row order is preserved.

    Args:
        raw: array-like model output for a single image
        num_classes: K, the size of the caller's label table
    """

    num_classes = check_num_classes(num_classes)

    try:
        p = np.asarray(raw, dtype=np.float64)
    except ValueError as exc:
        raise MalformedPrediction(f"Rows of unequal width or non-numeric values in prediction: {exc}") from exc
    if p.size == 0 and p.ndim <= 1:
        return []

    if p.ndim == 3:
        if p.shape[0] != 1:
            raise MalformedPrediction(f"Batch > 1 is not supported (got shape {p.shape}). Pass one image at a time.")
        p = p[0]

    if p.ndim != 2:
        raise MalformedPrediction(f"Expected prediction of shape (N, {4 + num_classes}), got {p.shape}")

    width = 4 + num_classes
    if p.shape[1] != width:
        raise MalformedPrediction(
            f"Row width {p.shape[1]} does not match 4 + {num_classes} classes (expected {width})"
        )

    return [
        Candidate(
            center_x=float(row[0]),
            center_y=float(row[1]),
            width=float(row[2]),
            height=float(row[3]),
            class_scores=tuple(float(s) for s in row[4:]),
        )
        for row in p
    ]
