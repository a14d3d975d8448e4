"""Abstract unit of work.

A unit of work is an atomic group of reads and writes against the store.
Repositories take it as their first argument for every call that must be
isolated (``get_for_update``, ``save``, ``add``).

Usage::

    with uow_factory() as uow:
        ...
        uow.commit()

Leaving the ``with`` block without committing rolls everything back,
whatever the exit path.  A unit of work is single-use.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class UnitOfWork(ABC):

    def __init__(self) -> None:
        self._active = False
        self._finished = False

    @property
    def active(self) -> bool:
        return self._active

    def __enter__(self) -> UnitOfWork:
        if self._active or self._finished:
            raise RuntimeError("Unit of work cannot be reused")
        self._begin()
        self._active = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._active:
            self.rollback()

    def commit(self) -> None:
        self._assert_active()
        try:
            self._commit()
        finally:
            self._end()

    def rollback(self) -> None:
        self._assert_active()
        try:
            self._rollback()
        finally:
            self._end()

    # --- Hooks for concrete implementations -----------------------------------

    @abstractmethod
    def _begin(self) -> None:
        """Open the underlying transaction."""

    @abstractmethod
    def _commit(self) -> None:
        """Make every pending write durable."""

    @abstractmethod
    def _rollback(self) -> None:
        """Discard every pending write."""

    def _release(self) -> None:
        """Free resources held since ``_begin`` (locks, connections)."""

    # --- Internal helpers -----------------------------------------------------

    def _assert_active(self) -> None:
        if not self._active:
            raise RuntimeError("Unit of work is not active")

    def _end(self) -> None:
        self._active = False
        self._finished = True
        self._release()
