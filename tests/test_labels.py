import json
import tempfile
import unittest
from pathlib import Path

from detkit.labels import LabeledBox, annotate, color_for_class, load_labels
from detkit.types import Detection


class TestLoadLabels(unittest.TestCase):
    def _write(self, name: str, text: str) -> Path:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        path = Path(tmpdir.name) / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_json_array(self) -> None:
        path = self._write("labels.json", json.dumps(["person", "bicycle", "car"]))
        self.assertEqual(load_labels(path), ["person", "bicycle", "car"])

    def test_json_must_be_array_of_strings(self) -> None:
        path = self._write("labels.json", json.dumps({"0": "person"}))
        with self.assertRaises(ValueError):
            load_labels(path)

    def test_names_mapping_fills_gaps(self) -> None:
        path = self._write("metadata.yaml", "# classes\nnames:\n  0: person\n  2: 'car'\n")
        self.assertEqual(load_labels(path), ["person", "1", "car"])

    def test_names_mapping_without_entries(self) -> None:
        path = self._write("metadata.yaml", "task: detect\n")
        with self.assertRaises(ValueError):
            load_labels(path)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_labels(Path(tempfile.gettempdir()) / "no-such-labels-detkit.json")


class TestAnnotate(unittest.TestCase):
    def test_color_for_class(self) -> None:
        self.assertEqual(color_for_class(0), "hsl(0, 100%, 50%)")
        self.assertEqual(color_for_class(1), "hsl(0.41, 100%, 50%)")
        self.assertEqual(color_for_class(7), "hsl(2.8699999999999997, 100%, 50%)")
        self.assertEqual(color_for_class(2), color_for_class(2))

    def test_annotate_keeps_order_and_geometry(self) -> None:
        dets = [
            Detection(x=75, y=75, width=50, height=50, class_index=0, score=0.9),
            Detection(x=10, y=20, width=5, height=6, class_index=5, score=0.85),
        ]
        out = annotate(dets, ["person", "bicycle"])
        self.assertEqual(
            out[0],
            LabeledBox(x=75, y=75, width=50, height=50, label="person", color="hsl(0, 100%, 50%)", score=0.9),
        )
        self.assertEqual(out[1].label, "5")
        self.assertEqual(out[1].color, color_for_class(5))


if __name__ == "__main__":
    unittest.main()
