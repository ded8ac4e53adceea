import unittest
from pathlib import Path
from types import SimpleNamespace

import numpy as np

from detkit.backends.onnxruntime_backend import OnnxRuntimeBackend


class FakeSession:
    def __init__(self) -> None:
        self.calls = []

    def run(self, output_names, inputs):
        self.calls.append((output_names, inputs))
        return [np.zeros((1, 3, 6), dtype=np.float32)]


def make_backend(input_shape) -> OnnxRuntimeBackend:
    # Skip __init__ so no onnxruntime session or model file is needed.
    backend = OnnxRuntimeBackend.__new__(OnnxRuntimeBackend)
    backend.model_path = Path("model.onnx")
    backend.session = FakeSession()
    backend.input_name = "images"
    backend.output_name = "output"
    backend.input_shape = tuple(input_shape)
    return backend


class TestOnnxRuntimeBackend(unittest.TestCase):
    def test_static_shape_used_as_is(self) -> None:
        backend = make_backend((1, 3, 320, 320))
        self.assertEqual(backend.static_input_shape(), (1, 3, 320, 320))

    def test_dynamic_axes_fall_back(self) -> None:
        backend = make_backend(("batch", 3, None, "width"))
        self.assertEqual(backend.static_input_shape(), (1, 3, 640, 640))
        self.assertEqual(backend.static_input_shape(fallback=(1, 3, 416, 416)), (1, 3, 416, 416))

    def test_warmup_runs_all_ones_input(self) -> None:
        backend = make_backend((1, 3, 64, 64))
        backend.warmup()
        self.assertEqual(len(backend.session.calls), 1)
        output_names, inputs = backend.session.calls[0]
        self.assertEqual(output_names, ["output"])
        blob = inputs["images"]
        self.assertEqual(blob.shape, (1, 3, 64, 64))
        self.assertEqual(blob.dtype, np.float32)
        self.assertTrue(np.all(blob == 1.0))

    def test_infer_merges_extra_inputs(self) -> None:
        backend = make_backend((1, 3, 64, 64))
        blob = np.zeros((1, 3, 64, 64), dtype=np.float32)
        out = backend.infer(blob, extra_inputs={"scale": SimpleNamespace()})
        self.assertEqual(out.shape, (1, 3, 6))
        _, inputs = backend.session.calls[0]
        self.assertEqual(sorted(inputs), ["images", "scale"])


if __name__ == "__main__":
    unittest.main()
