"""
Reusable 2D image buffers.

An ImageBuffer owns (or views) a numpy array of shape (height, width).
Buffers are created once with a placeholder size and reshaped at the start
of every detection so that storage is only reallocated when the input
dimensions change. Subimages are numpy slices of the parent, so reads and
writes go straight to the parent's storage.
"""

import numpy as np


class ImageBuffer:
    """
    Typed 2D buffer with reshape and subimage views.

    Usage:
        intensity = ImageBuffer(np.float32)
        intensity.reshape(640, 480)
        tile = intensity.subimage(0, 0, 320, 240)
        tile.data[:] = 0  # modifies intensity.data
    """

    def __init__(self, dtype, width: int = 1, height: int = 1):
        self.dtype = np.dtype(dtype)
        self.data = np.zeros((height, width), dtype=self.dtype)
        self.x0 = 0
        self.y0 = 0
        self._parent: "ImageBuffer | None" = None

    @classmethod
    def wrap(cls, array: np.ndarray) -> "ImageBuffer":
        """Create a buffer that uses an existing 2D array as its storage."""
        if array.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {array.shape}")
        buffer = cls.__new__(cls)
        buffer.dtype = array.dtype
        buffer.data = array
        buffer.x0 = 0
        buffer.y0 = 0
        buffer._parent = None
        return buffer

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width), matching numpy."""
        return self.data.shape  # type: ignore[return-value]

    @property
    def is_subimage(self) -> bool:
        return self._parent is not None

    def reshape(self, width: int, height: int) -> None:
        """
        Change the buffer dimensions.

        Storage is reused when the size is unchanged. Contents are undefined
        after a reshape that changes the size.
        """
        if self.is_subimage:
            raise ValueError("Cannot reshape a subimage view")
        if width < 0 or height < 0:
            raise ValueError(f"Invalid dimensions {width}x{height}")
        if self.data.shape != (height, width):
            self.data = np.zeros((height, width), dtype=self.dtype)

    def subimage(self, x0: int, y0: int, x1: int, y1: int) -> "ImageBuffer":
        """
        Return a view over the half-open rectangle [x0, x1) x [y0, y1).

        The view shares storage with this buffer. Its x0/y0 record the
        offset relative to the outermost parent.
        """
        if not (0 <= x0 <= x1 <= self.width and 0 <= y0 <= y1 <= self.height):
            raise ValueError(
                f"Subimage ({x0}, {y0}, {x1}, {y1}) outside {self.width}x{self.height} image"
            )
        view = ImageBuffer.__new__(ImageBuffer)
        view.dtype = self.dtype
        view.data = self.data[y0:y1, x0:x1]
        view.x0 = self.x0 + x0
        view.y0 = self.y0 + y0
        view._parent = self
        return view

    def fill(self, value) -> None:
        self.data.fill(value)

    def __repr__(self) -> str:
        return (
            f"ImageBuffer({self.dtype.name}, {self.width}x{self.height}"
            f"{', view' if self.is_subimage else ''})"
        )
