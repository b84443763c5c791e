"""Camera module for view and ray generation.

Components:
    thin_lens: Look-at perspective camera with optional depth of field

Camera responsibilities:
    - Transform (u, v) image coordinates to world-space rays
    - Support look-at positioning with up vector
    - Compute the viewport from vertical field of view and aspect ratio
    - Sample the lens disk for depth of field

Ray generation uses normalized device coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image
"""

from .thin_lens import Camera, CameraConfig

__all__ = [
    "Camera",
    "CameraConfig",
]
