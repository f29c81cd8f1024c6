"""
################################################################

File: ttc_fusion/frame/__init__.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Frame and object-cluster containers for TTC-Fusion.

################################################################

"""

from ttc_fusion.frame.frame import BoundingBox, FrameBuffer, SensorFrame

__all__ = ["BoundingBox", "FrameBuffer", "SensorFrame"]
