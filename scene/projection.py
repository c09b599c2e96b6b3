# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Projection of 4D points into renderable 3D coordinates.

A projected point is a :class:`Vector4` ``(x, y, z, distance)``: three
screen-space coordinates plus the depth along the camera's forward axis,
which renderers use for depth cueing.

Points at ``distance == 0`` lie on the camera's projection plane and project
to infinity. Nothing here guards against it; callers clip near-zero
distances before rendering.

Reference:
    Steven Hollasch, "Four-Space Visualization of 4D Objects" (1991).
    https://hollasch.github.io/ray4/Four-Space_Visualization_of_4D_Objects.html
"""

import math

import torch

from core.multivector import ieee_divide
from core.validation import check_points
from core.vector import Vector4


def _view_basis(camera, dtype=torch.float64) -> torch.Tensor:
    """``[4, 4]`` tensor whose rows are the camera's view-basis columns."""
    matrix = camera.projection_matrix()
    return torch.tensor([matrix.column(i)[:4] for i in range(4)], dtype=dtype)


def distortion_factor(camera) -> float:
    """Focal scaling, before division by each point's distance."""
    if camera.using_perspective:
        return 1 / math.tan(camera.fov_angle / 2)
    return 1 / camera.radius


def project_tensor(points: torch.Tensor, camera) -> torch.Tensor:
    """Projects a batch of 4D points.

    Args:
        points (torch.Tensor): World-space points [N, 4].
        camera (Camera4): Camera providing position, orientation and lens.

    Returns:
        torch.Tensor: Projected points [N, 4], ``(x, y, z, distance)``.
    """
    check_points(points)
    points = points.to(torch.float64)

    translated = points - camera.pos.to_tensor()
    view = translated @ _view_basis(camera).T  # [N, 4]

    if camera.using_perspective:
        distance = view[:, 3]
    else:
        distance = torch.full((points.shape[0],), camera.radius, dtype=torch.float64)

    # Shrink each point depending on its distance from the camera
    scale = distortion_factor(camera) / distance

    # Negated so the image is not mirrored
    projected = -view[:, :3] * scale.unsqueeze(-1)
    return torch.cat([projected, distance.unsqueeze(-1)], dim=-1)


def project_vector4(points, camera, destination_points=None, callback=None) -> list:
    """Projects 4D points into 3D coordinates plus depth.

    Args:
        points: Sequence of world-space :class:`Vector4`.
        camera (Camera4): The viewing camera.
        destination_points (list, optional): Projected points from a previous
            frame. Existing entries are overwritten in place; missing ones
            are appended. Reusing the list avoids reallocating every frame.
        callback (callable, optional): Called as ``callback(point, index)``
            for each projected point.

    Returns:
        list[Vector4]: ``destination_points`` (or a new list) holding the
        projected points.
    """
    if destination_points is None:
        destination_points = []

    if len(points) == 0:
        return destination_points

    projected = project_tensor(torch.tensor([list(p) for p in points], dtype=torch.float64), camera)

    for i, row in enumerate(projected.tolist()):
        if i < len(destination_points):
            destination_points[i].copy(row)
            point = destination_points[i]
        else:
            point = Vector4(*row)
            destination_points.append(point)

        if callback is not None:
            callback(point, i)

    return destination_points


def unproject_vector4(points, camera, destination_points=None, callback=None) -> list:
    """Inverse of :func:`project_vector4`.

    Each input is ``(x, y, z, distance)`` as produced by the projection. In
    orthographic mode the depth along the view axis is lost: points are
    placed on the camera's 3-space, i.e. the hyperplane through the camera
    position orthogonal to its forward axis.
    """
    if destination_points is None:
        destination_points = []

    unprojection_matrix = camera.projection_matrix().inverse()
    focal = distortion_factor(camera)

    for i, point in enumerate(points):
        distance = point[3]
        scale = ieee_divide(focal, distance)

        undistorted = Vector4(
            ieee_divide(-point[0], scale),
            ieee_divide(-point[1], scale),
            ieee_divide(-point[2], scale),
            distance if camera.using_perspective else 0.0,
        )

        unprojected = Vector4(*(
            unprojection_matrix.dot4_with_column(undistorted, j) + camera.pos[j]
            for j in range(4)
        ))

        if i < len(destination_points):
            destination_points[i].copy(unprojected)
            unprojected = destination_points[i]
        else:
            destination_points.append(unprojected)

        if callback is not None:
            callback(unprojected, i)

    return destination_points
