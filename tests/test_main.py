"""Tests for the configured projection run used by the CLI entry point."""

import logging
import os

import pytest
from omegaconf import OmegaConf

from main import make_camera, make_mesh, run


CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "conf", "config.yaml")


@pytest.fixture
def cfg():
    return OmegaConf.load(CONFIG_PATH)


class TestRun:

    def test_default_config(self, cfg):
        visible = run(cfg)
        assert len(visible) == 24
        assert all(3 - 1e-9 <= p.w <= 5 + 1e-9 for p in visible)

    def test_solid_params(self, cfg):
        cfg.name = "polygon"
        cfg.params = {"n_sides": 5}
        assert len(run(cfg)) == 5

    def test_orthographic(self, cfg):
        cfg.camera.using_perspective = False
        visible = run(cfg)
        assert all(p.w == cfg.camera.radius for p in visible)

    def test_near_clip_warns(self, cfg, caplog):
        cfg.name = "vert"
        cfg.camera.position = [0.0, 0.0, 0.0, 0.0]
        with caplog.at_level(logging.WARNING, logger="polychora"):
            visible = run(cfg)
        assert visible == []
        assert any("Clipped" in record.getMessage() for record in caplog.records)

    def test_output_file(self, cfg, tmp_path):
        output = tmp_path / "points.txt"
        cfg.name = "pentachoron"
        cfg.projection.output = str(output)
        run(cfg)
        lines = output.read_text().splitlines()
        assert len(lines) == 5
        assert all(len(line.split()) == 4 for line in lines)

    def test_unknown_solid(self, cfg):
        cfg.name = "nothing"
        with pytest.raises(ValueError):
            run(cfg)


class TestBuilders:

    def test_make_mesh_applies_rotation(self, cfg):
        mesh = make_mesh(cfg)
        assert mesh.rot.angle == pytest.approx(cfg.object.rotation.angle)
        assert len(mesh.geometry.verts) == 24

    def test_make_camera(self, cfg):
        camera = make_camera(cfg)
        assert camera.fov_angle == pytest.approx(cfg.camera.fov_angle)
        assert camera.pos.w == 4.0


class TestLoggingConfig:

    def test_level_and_file(self, cfg, tmp_path):
        root = logging.getLogger("polychora")
        level, handlers = root.level, list(root.handlers)
        path = tmp_path / "run.log"
        cfg.name = "vert"
        cfg.logging.level = "DEBUG"
        cfg.logging.file = str(path)
        try:
            run(cfg)
            assert root.level == logging.DEBUG
            for handler in root.handlers:
                handler.flush()
            assert "Building vert took" in path.read_text()
        finally:
            for handler in root.handlers:
                if handler not in handlers:
                    root.removeHandler(handler)
                    handler.close()
            root.setLevel(level)
