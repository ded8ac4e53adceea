import argparse
import logging

import cv2

from detkit import PostConfig, load_detector, load_post_config


def main() -> int:
    parser = argparse.ArgumentParser(description="Run a detector on an image and print labeled boxes.")
    parser.add_argument("--image", required=True, help="Path to an input image.")
    parser.add_argument("--model", default="Models/yolov7.onnx", help="Path to an ONNX detector.")
    parser.add_argument("--labels", default="Models/labels.json", help="Label table (JSON array or names: mapping).")
    parser.add_argument("--config", default=None, help="Optional JSON with iou/score/display thresholds.")
    parser.add_argument("--imgsz", type=int, default=640, help="Model input size (square).")
    parser.add_argument("--iou", type=float, default=None, help="IoU threshold for NMS.")
    parser.add_argument("--conf", type=float, default=None, help="Score threshold before NMS.")
    parser.add_argument("--threshold", type=float, default=None, help="Display threshold after NMS.")
    parser.add_argument(
        "--onnx-providers",
        default=None,
        help='Comma-separated ORT providers, e.g. "CUDAExecutionProvider,CPUExecutionProvider".',
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.imgsz < 32:
        raise ValueError("--imgsz must be >= 32")

    base = load_post_config(args.config) if args.config else PostConfig()
    post_cfg = PostConfig(
        iou_threshold=base.iou_threshold if args.iou is None else args.iou,
        score_threshold=base.score_threshold if args.conf is None else args.conf,
        display_threshold=base.display_threshold if args.threshold is None else args.threshold,
    )

    onnx_providers = None
    if args.onnx_providers:
        onnx_providers = [p.strip() for p in str(args.onnx_providers).split(",") if p.strip()]

    img = cv2.imread(args.image)
    if img is None:
        raise FileNotFoundError(f"Could not read image at path: {args.image}")

    detector = load_detector(
        args.model,
        args.labels,
        input_size=(int(args.imgsz), int(args.imgsz)),
        post_cfg=post_cfg,
        onnx_providers=onnx_providers,
    )

    for box in detector.detect(img):
        print(f"{box.label} {box.score:.3f} x={box.x:.1f} y={box.y:.1f} w={box.width:.1f} h={box.height:.1f} {box.color}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
