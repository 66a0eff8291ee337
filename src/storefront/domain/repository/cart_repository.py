"""Abstract repository for the Cart aggregate, keyed by session."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def load(self, session_id: str) -> Cart | None:
        """Return the stored cart for a session, or None if there is none."""

    @abstractmethod
    def save(self, session_id: str, cart: Cart) -> None:
        """Replace the stored cart for a session.

        Must not return until a subsequent ``load`` would see *cart*.
        """
