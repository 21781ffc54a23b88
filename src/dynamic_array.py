"""
Growable contiguous array with explicit capacity management.

DynamicArray keeps a logical size and a physical capacity over an owned
ArrayBuffer. Appends and inserts double the capacity when the buffer is full
(0 -> 1 -> 2 -> 4 ...), so a run of push_back calls costs amortized O(1).
resize() grows to exactly the requested size instead. Every reallocation
builds the new buffer completely before installing it, so a failure while
allocating or filling leaves the array as it was.

Element access comes in two flavours: ``arr[i]`` goes straight to the buffer
with no bounds check, while ``at()``/``set_at()`` raise IndexError outside
``[0, size)``.
"""

import copy
import logging
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar, Union

import numpy as np

from array_buffer import ArrayBuffer

T = TypeVar('T')

logger = logging.getLogger(__name__)

_NO_VALUE = object()


class ReserveRequest:
    """Construction hint carrying a capacity to reserve up front."""

    def __init__(self, capacity: int) -> None:
        if not isinstance(capacity, int) or capacity < 0:
            raise ValueError("capacity must be a non-negative integer")
        self.capacity = capacity

    def __repr__(self) -> str:
        return f"ReserveRequest({self.capacity})"


def reserved(capacity: int) -> ReserveRequest:
    """``DynamicArray(reserved(n))`` starts empty with room for n elements."""
    return ReserveRequest(capacity)


class ArrayIterator(Generic[T]):
    """Random-access position inside one DynamicArray.

    Iterating an ArrayIterator yields the elements from its position up to
    the array's end and advances the position as it goes. Positions are
    invalidated by anything that reallocates or shifts the array.
    """

    def __init__(self, array: 'DynamicArray[T]', index: int, mutable: bool = True) -> None:
        self._array = array
        self._index = index
        self._mutable = mutable

    @property
    def index(self) -> int:
        return self._index

    @property
    def mutable(self) -> bool:
        return self._mutable

    @property
    def value(self) -> T:
        return self._array._buffer[self._index]

    @value.setter
    def value(self, value: T) -> None:
        if not self._mutable:
            raise TypeError("cannot assign through a read-only iterator")
        self._array._buffer[self._index] = value

    def belongs_to(self, array: 'DynamicArray') -> bool:
        return self._array is array

    def __add__(self, offset: int) -> 'ArrayIterator[T]':
        return ArrayIterator(self._array, self._index + offset, self._mutable)

    def __sub__(self, other: Union[int, 'ArrayIterator[T]']) -> Union[int, 'ArrayIterator[T]']:
        if isinstance(other, ArrayIterator):
            if other._array is not self._array:
                raise ValueError("iterators belong to different arrays")
            return self._index - other._index
        return ArrayIterator(self._array, self._index - other, self._mutable)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayIterator):
            return NotImplemented
        return self._array is other._array and self._index == other._index

    def __lt__(self, other: 'ArrayIterator[T]') -> bool:
        if not isinstance(other, ArrayIterator):
            return NotImplemented
        return self - other < 0

    __hash__ = None

    def __iter__(self) -> 'ArrayIterator[T]':
        return self

    def __next__(self) -> T:
        if self._index >= self._array._size:
            raise StopIteration
        value = self._array._buffer[self._index]
        self._index += 1
        return value

    def __repr__(self) -> str:
        kind = "ArrayIterator" if self._mutable else "ArrayIterator(read-only)"
        return f"<{kind} at {self._index}>"


class DynamicArray(Generic[T]):
    growth_factor = 2

    def __init__(
        self,
        size: Union[int, ReserveRequest] = 0,
        value: Any = _NO_VALUE,
        *,
        factory: Optional[Callable[[], T]] = None,
    ) -> None:
        self._factory = factory
        self._size = 0
        self._capacity = 0
        self._buffer = ArrayBuffer()
        if isinstance(size, ReserveRequest):
            self.reserve(size.capacity)
            return
        if not isinstance(size, int) or size < 0:
            raise ValueError("size must be a non-negative integer")
        if value is _NO_VALUE:
            self._adopt([self._default() for _ in range(size)])
        else:
            self._adopt([value] * size)

    @classmethod
    def from_iterable(
        cls, values: Iterable[T], *, factory: Optional[Callable[[], T]] = None
    ) -> 'DynamicArray[T]':
        arr: DynamicArray[T] = cls(factory=factory)
        arr._adopt(list(values))
        return arr

    @classmethod
    def take(cls, source: 'DynamicArray[T]') -> 'DynamicArray[T]':
        """Move-construct: steal source's buffer, leaving source empty."""
        arr: DynamicArray[T] = cls(factory=source._factory)
        arr.move_assign(source)
        return arr

    def _default(self) -> Optional[T]:
        if self._factory is None:
            return None
        return self._factory()

    def _adopt(self, items: list) -> None:
        buffer = ArrayBuffer(len(items))
        for i, item in enumerate(items):
            buffer[i] = item
        self._buffer = buffer
        self._size = len(items)
        self._capacity = len(items)

    def _install(self, new_buffer: ArrayBuffer, new_cap: int) -> None:
        logger.debug("DynamicArray reallocated: capacity %d -> %d", self._capacity, new_cap)
        self._buffer.swap(new_buffer)
        new_buffer.release()
        self._capacity = new_cap

    def _position(self, position: Union[int, ArrayIterator[T]], last: int, op: str) -> int:
        if isinstance(position, ArrayIterator):
            if not position.belongs_to(self):
                raise ValueError(f"DynamicArray.{op}: iterator belongs to another array")
            index = position.index
        elif isinstance(position, int):
            index = position
        else:
            raise TypeError(f"DynamicArray.{op}: position must be an int or ArrayIterator")
        if index < 0 or index > last:
            raise IndexError(f"DynamicArray.{op}: position out of range")
        return index

    def at(self, index: int) -> T:
        if index < 0 or index >= self._size:
            raise IndexError("DynamicArray.at: index out of range")
        return self._buffer[index]

    def set_at(self, index: int, value: T) -> None:
        if index < 0 or index >= self._size:
            raise IndexError("DynamicArray.set_at: index out of range")
        self._buffer[index] = value

    def __getitem__(self, index: int) -> T:
        return self._buffer[index]

    def __setitem__(self, index: int, value: T) -> None:
        self._buffer[index] = value

    def front(self) -> T:
        if self._size == 0:
            raise IndexError("DynamicArray.front: array is empty")
        return self._buffer[0]

    def back(self) -> T:
        if self._size == 0:
            raise IndexError("DynamicArray.back: array is empty")
        return self._buffer[self._size - 1]

    def data(self) -> Optional[np.ndarray]:
        """View over the live elements; writes go through to the array."""
        if self._size == 0:
            return None
        return self._buffer.data()[:self._size]

    def size(self) -> int:
        return self._size

    def capacity(self) -> int:
        return self._capacity

    def empty(self) -> bool:
        return self._size == 0

    def reserve(self, new_cap: int) -> None:
        if not isinstance(new_cap, int) or new_cap < 0:
            raise ValueError("capacity must be a non-negative integer")
        if new_cap <= self._capacity:
            return
        new_buffer = ArrayBuffer(new_cap)
        for i in range(self._size):
            new_buffer[i] = self._buffer[i]
        self._install(new_buffer, new_cap)

    def resize(self, new_size: int) -> None:
        if not isinstance(new_size, int) or new_size < 0:
            raise ValueError("size must be a non-negative integer")
        if new_size > self._capacity:
            # grows to fit exactly, unlike insert's doubling
            new_buffer = ArrayBuffer(new_size)
            for i in range(self._size):
                new_buffer[i] = self._buffer[i]
            for i in range(self._size, new_size):
                new_buffer[i] = self._default()
            self._install(new_buffer, new_size)
        else:
            for i in range(self._size, new_size):
                self._buffer[i] = self._default()
        self._size = new_size

    def insert(self, position: Union[int, ArrayIterator[T]], value: T) -> ArrayIterator[T]:
        index = self._position(position, self._size, "insert")
        if self._size == self._capacity:
            new_cap = 1 if self._capacity == 0 else self.growth_factor * self._capacity
            new_buffer = ArrayBuffer(new_cap)
            for i in range(index):
                new_buffer[i] = self._buffer[i]
            new_buffer[index] = value
            for i in range(index, self._size):
                new_buffer[i + 1] = self._buffer[i]
            self._install(new_buffer, new_cap)
        else:
            # back to front so no slot is overwritten before it moves
            for i in range(self._size, index, -1):
                self._buffer[i] = self._buffer[i - 1]
            self._buffer[index] = value
        self._size += 1
        return ArrayIterator(self, index)

    def erase(self, position: Union[int, ArrayIterator[T]]) -> ArrayIterator[T]:
        index = self._position(position, self._size - 1, "erase")
        for i in range(index + 1, self._size):
            self._buffer[i - 1] = self._buffer[i]
        self._size -= 1
        return ArrayIterator(self, index)

    def push_back(self, value: T) -> None:
        self.insert(self._size, value)

    def pop_back(self) -> None:
        if self._size > 0:
            self._size -= 1

    def clear(self) -> None:
        self._size = 0

    def copy(self) -> 'DynamicArray[T]':
        """Copy into a buffer sized to the live elements.

        The elements themselves are shared with the original, as with
        ``list.copy()``; use ``copy.deepcopy`` to duplicate them too.
        """
        return type(self).from_iterable(self, factory=self._factory)

    def assign(self, other: 'DynamicArray[T]') -> 'DynamicArray[T]':
        if other is self:
            return self
        tmp = other.copy()
        self.swap(tmp)
        return self

    def move_assign(self, other: 'DynamicArray[T]') -> 'DynamicArray[T]':
        if other is self:
            return self
        self._buffer.release()
        self._buffer.swap(other._buffer)
        self._size = other._size
        self._capacity = other._capacity
        other._size = 0
        other._capacity = 0
        return self

    def swap(self, other: 'DynamicArray[T]') -> None:
        self._buffer.swap(other._buffer)
        self._size, other._size = other._size, self._size
        self._capacity, other._capacity = other._capacity, self._capacity

    def begin(self) -> ArrayIterator[T]:
        return ArrayIterator(self, 0)

    def end(self) -> ArrayIterator[T]:
        return ArrayIterator(self, self._size)

    def cbegin(self) -> ArrayIterator[T]:
        return ArrayIterator(self, 0, mutable=False)

    def cend(self) -> ArrayIterator[T]:
        return ArrayIterator(self, self._size, mutable=False)

    def __copy__(self) -> 'DynamicArray[T]':
        return self.copy()

    def __deepcopy__(self, memo: dict) -> 'DynamicArray[T]':
        clone: DynamicArray[T] = type(self)(factory=self._factory)
        memo[id(self)] = clone
        clone._adopt([copy.deepcopy(item, memo) for item in self])
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DynamicArray):
            return NotImplemented
        if self._size != other._size:
            return False
        for i in range(self._size):
            if not self._buffer[i] == other._buffer[i]:
                return False
        return True

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, DynamicArray):
            return NotImplemented
        return not self == other

    def __lt__(self, other: 'DynamicArray[T]') -> bool:
        if not isinstance(other, DynamicArray):
            return NotImplemented
        for a, b in zip(self, other):
            if a < b:
                return True
            if b < a:
                return False
        return self._size < other._size

    def __le__(self, other: 'DynamicArray[T]') -> bool:
        if not isinstance(other, DynamicArray):
            return NotImplemented
        return not other < self

    def __gt__(self, other: 'DynamicArray[T]') -> bool:
        if not isinstance(other, DynamicArray):
            return NotImplemented
        return other < self

    def __ge__(self, other: 'DynamicArray[T]') -> bool:
        if not isinstance(other, DynamicArray):
            return NotImplemented
        return not self < other

    __hash__ = None

    def __iter__(self) -> Iterator[T]:
        for i in range(self._size):
            yield self._buffer[i]

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __repr__(self) -> str:
        return f"DynamicArray({list(self)!r})"
