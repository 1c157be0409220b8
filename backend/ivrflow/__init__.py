"""IVR Flow Studio backend.

Design and manage the caller-authentication flows of IVR systems.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
