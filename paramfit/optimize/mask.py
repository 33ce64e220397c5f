"""Translation between full parameter vectors and their optimisable subset."""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from .core import Array


class OptimisationMask:
    """
    Per-parameter flags marking which entries of a model are optimised.

    ``True`` entries are free; ``False`` entries stay frozen at whatever value
    the model currently holds.

    Args:
        flags: Boolean flags, one per entry of the model's full parameter vector.
    """

    def __init__(self, flags: Iterable[bool]) -> None:
        if not isinstance(flags, np.ndarray):
            flags = list(flags)
        values = np.asarray(flags)
        if values.ndim != 1:
            raise ValueError(f"mask must be 1-D, got shape {values.shape}")
        if values.size and values.dtype != bool:
            if not np.isin(values, (0, 1)).all():
                raise ValueError("mask entries must be boolean")
        self._flags = values.astype(bool)
        self._flags.setflags(write=False)

    @property
    def flags(self) -> Array:
        return self._flags

    @property
    def free_count(self) -> int:
        return int(np.count_nonzero(self._flags))

    def __len__(self) -> int:
        return int(self._flags.size)

    def __repr__(self) -> str:
        return f"OptimisationMask({self._flags.tolist()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptimisationMask):
            return NotImplemented
        return np.array_equal(self._flags, other._flags)

    def is_free(self, index: int) -> bool:
        return bool(self._flags[index])

    def check_length(self, size: int) -> None:
        """Raise ``ValueError`` unless the mask covers ``size`` parameters."""
        if len(self) != size:
            raise ValueError(
                f"mask length {len(self)} does not match parameter count {size}"
            )

    def extract(self, full: Array) -> Array:
        full = np.asarray(full, dtype=float)
        self.check_length(full.size)
        return full[self._flags].copy()

    def apply(self, full: Array, reduced: Array) -> Array:
        full = np.array(full, dtype=float, copy=True)
        reduced = np.asarray(reduced, dtype=float)
        self.check_length(full.size)
        if reduced.size != self.free_count:
            raise ValueError(
                f"expected {self.free_count} free parameters, got {reduced.size}"
            )
        full[self._flags] = reduced
        return full


def extract_masked(full: Array, mask: Optional[OptimisationMask]) -> Array:
    """Free entries of ``full``, in order; a copy of ``full`` when unmasked."""
    if mask is None:
        return np.array(full, dtype=float, copy=True)
    return mask.extract(full)


def apply_mask(full: Array, mask: Optional[OptimisationMask], reduced: Array) -> Array:
    """Copy of ``full`` with its free entries replaced by ``reduced``.

    Frozen entries are never touched. Without a mask ``reduced`` must already
    be a full vector and is returned as a copy.
    """
    if mask is None:
        reduced = np.array(reduced, dtype=float, copy=True)
        full = np.asarray(full)
        if reduced.shape != full.shape:
            raise ValueError(
                f"expected {full.size} parameters, got {reduced.size}"
            )
        return reduced
    return mask.apply(full, reduced)


__all__ = ["OptimisationMask", "apply_mask", "extract_masked"]
