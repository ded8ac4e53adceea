from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Candidate:
    """
    One decoded prediction slot: box geometry in model input pixels plus the
    per-class scores exactly as the network emitted them.
    """

    center_x: float
    center_y: float
    width: float
    height: float
    class_scores: Tuple[float, ...]

    @property
    def best_class_index(self) -> int:
        # max() keeps the first maximum, so ties resolve to the lowest index.
        return max(range(len(self.class_scores)), key=self.class_scores.__getitem__)

    @property
    def best_score(self) -> float:
        return self.class_scores[self.best_class_index]

    def as_xyxy(self) -> Tuple[float, float, float, float]:
        half_w = self.width / 2
        half_h = self.height / 2
        return (
            self.center_x - half_w,
            self.center_y - half_h,
            self.center_x + half_w,
            self.center_y + half_h,
        )


@dataclass(frozen=True)
class Detection:
    """
    Suppressed box with a single resolved class. `x`, `y` is the top-left corner.
    """

    x: float
    y: float
    width: float
    height: float
    class_index: int
    score: float

    def as_xyxy(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.x + self.width, self.y + self.height
