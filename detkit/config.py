from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

from .postprocess import PostConfig


PathLike = Union[str, Path]

_ALLOWED_KEYS = ("iou_threshold", "score_threshold", "display_threshold")


def _optional_number(payload: Dict[str, Any], key: str, default: float) -> float:
    if key not in payload:
        return default
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number")
    return float(value)


def load_post_config(path: PathLike) -> PostConfig:
    """
    Load post-processing thresholds from a JSON object, e.g.

        {"iou_threshold": 0.45, "score_threshold": 0.25, "display_threshold": 0.8}

    Missing keys keep their defaults; unknown keys are rejected.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Post-processing config not found: {path}")
    raw = path.read_text(encoding="utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid post-processing config JSON: {path}") from exc
    if not isinstance(payload, dict):
        raise ValueError("Post-processing config must be a JSON object")

    unknown = sorted(set(payload.keys()) - set(_ALLOWED_KEYS))
    if unknown:
        raise ValueError(f"Unknown post-processing config keys: {unknown}")

    defaults = PostConfig()
    return PostConfig(
        iou_threshold=_optional_number(payload, "iou_threshold", defaults.iou_threshold),
        score_threshold=_optional_number(payload, "score_threshold", defaults.score_threshold),
        display_threshold=_optional_number(payload, "display_threshold", defaults.display_threshold),
    )
