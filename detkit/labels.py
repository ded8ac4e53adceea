from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from .types import Detection


PathLike = Union[str, Path]


@dataclass(frozen=True)
class LabeledBox:
    """
    A Detection decorated with presentation attributes, ready for rendering.
    """

    x: float
    y: float
    width: float
    height: float
    label: str
    color: str
    score: float


def load_labels(path: PathLike) -> List[str]:
    """
    Load the label table, index -> name.

    Two formats are accepted:

    - a JSON array of names: ["person", "bicycle", ...]
    - the lightweight `names:` mapping:

        names:
          0: person
          1: bicycle
          ...

    Gaps in the mapping are filled with the index as text so that indices
    stay aligned with the network's class score columns.
    """

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Label file not found: {p}")
    raw = p.read_text(encoding="utf-8")

    if p.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid label JSON: {p}") from exc
        if not isinstance(payload, list) or not all(isinstance(item, str) for item in payload):
            raise ValueError("Label JSON must be an array of strings")
        return list(payload)

    names = {}
    in_names = False
    for line in raw.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line == "names:":
            in_names = True
            continue
        if not in_names or ":" not in line:
            continue

        # Parse "id: label"
        left, right = line.split(":", 1)
        left = left.strip()
        if not left.isdigit():
            continue
        names[int(left)] = right.strip().strip("'").strip('"')

    if not names:
        raise ValueError(f"No labels found in {p}")
    return [names.get(i, str(i)) for i in range(max(names) + 1)]


def color_for_class(class_index: int) -> str:
    """
    Deterministic CSS HSL color for a class index.

    The hue is written at full float precision, integral hues without a
    fractional part: 0 -> "hsl(0, 100%, 50%)", 7 -> "hsl(2.8699999999999997, 100%, 50%)".
    """

    hue = class_index * 0.41
    text = str(int(hue)) if hue.is_integer() else repr(hue)
    return f"hsl({text}, 100%, 50%)"


def annotate(detections: Iterable[Detection], labels: Sequence[str]) -> List[LabeledBox]:
    """
    Attach label text and color to each detection, keeping order.

    Indices outside the label table are labeled with the index as text.
    """

    out: List[LabeledBox] = []
    for det in detections:
        idx = det.class_index
        label = labels[idx] if 0 <= idx < len(labels) else str(idx)
        out.append(
            LabeledBox(
                x=det.x,
                y=det.y,
                width=det.width,
                height=det.height,
                label=label,
                color=color_for_class(idx),
                score=det.score,
            )
        )
    return out
