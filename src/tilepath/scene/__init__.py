"""Scene module for building renderable worlds.

Components:
    weekend: Demo scene of random small spheres around three feature spheres

A scene is a populated HittableList plus a CameraConfig; any code that can
build those can drive the renderer.
"""

from .weekend import WeekendSceneParams, create_weekend_scene

__all__ = [
    "WeekendSceneParams",
    "create_weekend_scene",
]
