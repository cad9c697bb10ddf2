"""
Unit tests for the command-line entry point.
"""

import argparse
import json

import cv2
import numpy as np
import pytest

from footline.__main__ import build_detector_config, run_detection
from footline.core.config import Config
from footline.core.result import LineParametric
from footline.utils.visualization import clip_line, draw_lines


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.delenv("FOOTLINE_ENV", raising=False)
    (tmp_path / "default.yaml").write_text(
        "detector:\n"
        "  threshold_edge: 30.0\n"
        "  local_max_radius: 3\n"
        "output:\n"
        "  line_color: [0, 255, 255]\n",
        encoding="utf-8",
    )
    return Config(tmp_path)


def make_args(image, **overrides):
    values = {
        "image": image,
        "rows": None,
        "cols": None,
        "threshold": None,
        "workers": None,
        "output": None,
        "show_grid": False,
        "json": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestCli:
    """Tests for running detection from the command line."""

    def test_overrides(self, config, tmp_path):
        args = make_args(tmp_path / "x.png", rows=3, cols=4, threshold=12.5, workers=2)

        detector_config = build_detector_config(config, args)

        assert detector_config["vertical_divisions"] == 3
        assert detector_config["horizontal_divisions"] == 4
        assert detector_config["threshold_edge"] == 12.5
        assert detector_config["workers"] == 2
        assert detector_config["local_max_radius"] == 3
        assert "vertical_divisions" not in config["detector"]

    def test_json_output_and_annotated_image(
        self, config, tmp_path, vertical_edge_image, capsys
    ):
        image_path = tmp_path / "edge.png"
        cv2.imwrite(str(image_path), vertical_edge_image)
        output_path = tmp_path / "out" / "lines.png"

        code = run_detection(
            config, make_args(image_path, json=True, output=output_path, show_grid=True)
        )

        assert code == 0
        lines = json.loads(capsys.readouterr().out)
        assert lines
        assert all(line["angle_deg"] == 90.0 for line in lines)
        annotated = cv2.imread(str(output_path))
        assert annotated.shape == (100, 100, 3)

    def test_unreadable_image(self, config, tmp_path):
        assert run_detection(config, make_args(tmp_path / "missing.png")) == 1

    def test_invalid_configuration(self, config, tmp_path, vertical_edge_image):
        image_path = tmp_path / "edge.png"
        cv2.imwrite(str(image_path), vertical_edge_image)

        assert run_detection(config, make_args(image_path, rows=0)) == 1


class TestVisualization:
    """Tests for line drawing helpers."""

    def test_clip_vertical_line(self):
        segment = clip_line(LineParametric(10, 5, 0, 3), 40, 30)

        assert segment is not None
        assert sorted(segment) == [(10, 0), (10, 29)]

    def test_clip_diagonal_line(self):
        segment = clip_line(LineParametric(5, 5, 1, 1), 20, 10)

        assert sorted(segment) == [(0, 0), (9, 9)]

    def test_line_outside_image(self):
        assert clip_line(LineParametric(50, 5, 0, 1), 40, 30) is None

    def test_draw_lines_grayscale(self):
        frame = np.zeros((30, 40), dtype=np.uint8)

        annotated = draw_lines(frame, [LineParametric(10, 5, 0, 3)], show_points=False)

        assert annotated.shape == (30, 40, 3)
        assert (annotated[:, 10] == (0, 0, 255)).all()
        assert not frame.any()
