import logging
from dataclasses import dataclass
from typing import List, Optional

from .decode import check_num_classes, decode
from .errors import InvalidParameter
from .nms import suppress
from .types import Detection

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostConfig:
    """
    Thresholds for detector post-processing.

    `score_threshold` gates which candidates enter NMS; `display_threshold`
    is the caller-facing cut applied to what NMS keeps. They are kept
    separate so NMS can run over a broader set than what is finally shown.
    """

    iou_threshold: float = 0.45
    score_threshold: float = 0.25
    display_threshold: float = 0.8

    def __post_init__(self) -> None:
        for name in ("iou_threshold", "score_threshold", "display_threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not (0.0 <= value <= 1.0):
                raise InvalidParameter(f"{name} must be in [0, 1] (got {value!r})")


class Postprocessor:
    """
    decode -> suppress -> display threshold, for one image's raw output.

    Label and color attachment stays outside (see `detkit.labels.annotate`).
    """

    def __init__(self, num_classes: int, cfg: PostConfig = PostConfig()):
        self.num_classes = check_num_classes(num_classes)
        self.cfg = cfg

    def process(self, preds, threshold: Optional[float] = None) -> List[Detection]:
        """
        Args:
            preds: raw model output for a single image, (N, 4 + K) or (1, N, 4 + K)
            threshold: overrides `cfg.display_threshold` for this call
        """

        display = self.cfg.display_threshold if threshold is None else threshold
        if isinstance(display, bool) or not (0.0 <= display <= 1.0):
            raise InvalidParameter(f"threshold must be in [0, 1] (got {display!r})")

        candidates = decode(preds, self.num_classes)
        kept = suppress(candidates, self.cfg.iou_threshold, self.cfg.score_threshold)
        shown = [det for det in kept if det.score >= display]
        LOGGER.debug(
            "postprocess: %d candidates -> %d after NMS -> %d at display_threshold=%s",
            len(candidates),
            len(kept),
            len(shown),
            display,
        )
        return shown
