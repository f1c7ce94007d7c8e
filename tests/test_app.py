import numpy as np
import pytest

from rustgl_viewer.app import main, model_matrix, projection_matrix
from rustgl_viewer.camera import Camera


def test_model_matrix_scales_points():
    point = model_matrix().dot([1.0, 2.0, 3.0, 1.0])
    assert point == pytest.approx([0.2, 0.4, 0.6, 1.0])


def test_projection_maps_near_and_far_planes():
    projection = projection_matrix(Camera(), 800, 600)
    near = projection.dot([0.0, 0.0, -0.1, 1.0])
    far = projection.dot([0.0, 0.0, -100.0, 1.0])
    assert near[2] / near[3] == pytest.approx(-1.0)
    assert far[2] / far[3] == pytest.approx(1.0)


def test_projection_uses_aspect_ratio():
    projection = projection_matrix(Camera(), 800, 600)
    assert projection[1, 1] / projection[0, 0] == pytest.approx(800 / 600)


def test_zooming_in_magnifies():
    camera = Camera()
    wide = projection_matrix(camera, 800, 600)
    camera.process_mouse_scroll(20.0)
    narrow = projection_matrix(camera, 800, 600)
    assert narrow[1, 1] > wide[1, 1]


def test_main_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    assert "--model" in capsys.readouterr().out


def test_model_matrix_keeps_origin():
    assert np.allclose(model_matrix().dot([0.0, 0.0, 0.0, 1.0]), [0.0, 0.0, 0.0, 1.0])