"""
################################################################

File: ttc_fusion/io/__init__.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Frame sequence input/output.

################################################################

"""

from ttc_fusion.io.sequence_loader import load_frame, load_sequence, save_frame

__all__ = ["load_frame", "load_sequence", "save_frame"]
