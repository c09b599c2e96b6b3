# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Polychora CLI Entry Point. Build a solid, place it, look at it.

Builds a catalog solid, applies the configured object transform, projects
it through the configured camera and reports the result:

    python main.py name=hexacosichoron camera.using_perspective=false
"""

import hydra
from omegaconf import DictConfig, OmegaConf

from core.rotor import Rotor4
from core.vector import Vector4
from log import configure, get_logger
from mesh.construction import build
from scene.objects import Camera4, Mesh4
from scene.projection import project_vector4

logger = get_logger(__name__)


def make_mesh(cfg: DictConfig) -> Mesh4:
    """Builds the configured solid and places it."""
    params = cfg.get('params')
    params = OmegaConf.to_container(params, resolve=True) if params else {}
    geometry = build(cfg.name, **params)

    rotation = cfg.object.rotation
    return Mesh4(
        geometry,
        pos=Vector4(*cfg.object.position),
        rot=Rotor4.plane_angle(list(rotation.plane), rotation.angle),
        scl=Vector4(*cfg.object.scale),
    )


def make_camera(cfg: DictConfig) -> Camera4:
    camera = Camera4(
        pos=Vector4(*cfg.camera.position),
        using_perspective=cfg.camera.using_perspective,
        radius=cfg.camera.radius,
    )
    camera.fov_angle = cfg.camera.fov_angle
    return camera


def run(cfg: DictConfig) -> list:
    """Projects the configured scene.

    Returns:
        list[Vector4]: Projected points whose distance is past the near clip.
    """
    log_cfg = cfg.get('logging')
    if log_cfg:
        configure(level=log_cfg.get('level'), log_file=log_cfg.get('file'))

    mesh = make_mesh(cfg)
    camera = make_camera(cfg)
    geometry = mesh.geometry

    logger.info(
        "%s: %d vertices, %d edges, %d faces, %d cells",
        cfg.name, len(geometry.verts), len(geometry.edges()),
        len(geometry.faces()), len(geometry.cells()),
    )
    if not geometry.facets:
        logger.warning("%s has no facets; only vertices will be projected", cfg.name)

    projected = project_vector4(mesh.transformed_verts(), camera)

    near_clip = cfg.projection.near_clip
    visible = [p for p in projected if p.w > near_clip]
    if len(visible) < len(projected):
        logger.warning("Clipped %d of %d points within %g of the camera plane",
                       len(projected) - len(visible), len(projected), near_clip)

    if visible:
        depths = [p.w for p in visible]
        logger.info("Depth range: %.4f .. %.4f", min(depths), max(depths))

    output = cfg.projection.get('output')
    if output:
        with open(output, 'w') as f:
            for p in visible:
                f.write(" ".join(f"{c:.9g}" for c in p) + "\n")
        logger.info("Wrote %d projected points to %s", len(visible), output)

    return visible


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig):
    """Runs the configured projection.

    Args:
        cfg (DictConfig): Solid, object, camera and projection settings.
    """
    run(cfg)


if __name__ == "__main__":
    main()
