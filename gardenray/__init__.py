"""Software-rendered 3D mazes: wireframe, bitmapped and raycast views in a palette frame buffer."""

__version__ = "1.0.0"