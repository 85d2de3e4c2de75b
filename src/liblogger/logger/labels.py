"""
Label sets attached to every entry of a logger.
"""

from __future__ import annotations

from typing import Mapping


class Labels(dict[str, str]):
    """Persistent string key/value context for a logger.

    Mutators return the receiver so calls can be chained::

        labels = Labels(product="Persistor").clone().add({"id": "client0"}).delete("remove")
    """

    def add(self, labels: Mapping[str, str]) -> Labels:
        """Add new and overwrite existing keys."""
        self.update(labels)
        return self

    def delete(self, *keys: str) -> Labels:
        """Delete keys, ignoring the ones that are not present."""
        for key in keys:
            self.pop(key, None)
        return self

    def clone(self) -> Labels:
        return Labels(self)


L = Labels
