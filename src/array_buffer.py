from typing import Any, Optional

import numpy as np


class ArrayBuffer:
    """Exclusively owned block of contiguous object slots.

    Slots start out as ``None``. A buffer of capacity 0 holds no storage at
    all. Indexing is unchecked: it goes straight to the backing array.
    """

    def __init__(self, capacity: int = 0) -> None:
        if not isinstance(capacity, int) or capacity < 0:
            raise ValueError("capacity must be a non-negative integer")
        self._items: Optional[np.ndarray] = None
        if capacity > 0:
            self._items = np.empty(capacity, dtype=object)

    def capacity(self) -> int:
        if self._items is None:
            return 0
        return self._items.shape[0]

    def data(self) -> Optional[np.ndarray]:
        return self._items

    def swap(self, other: 'ArrayBuffer') -> None:
        self._items, other._items = other._items, self._items

    def release(self) -> None:
        self._items = None

    def __getitem__(self, index: int) -> Any:
        return self._items[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self._items[index] = value

    def __len__(self) -> int:
        return self.capacity()

    def __bool__(self) -> bool:
        return self._items is not None
