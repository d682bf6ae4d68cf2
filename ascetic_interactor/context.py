"""Context - mutable state threaded through an interactor run."""

import copy
from typing import Any


__all__ = (
    'Context',
)


class Context(dict[str, Any]):
    """Dictionary carrying the state of an interactor run.

    It is the only channel between the caller, an interactor and the
    children of an organizer. Children never share a context object
    with their siblings: each one receives a snapshot.
    """

    def snapshot(self) -> 'Context':
        """Return an independent copy of this context.

        Values are deep-copied, so nested lists and dicts mutated by
        a child stay invisible to the parent until the child commits.
        Values that cannot be copied (locks, connections, sessions,
        clients) are shared by reference.
        """
        clone = copy.copy(self)
        memo: dict[int, Any] = {}
        for key, value in self.items():
            attempt = dict(memo)
            try:
                clone[key] = copy.deepcopy(value, attempt)
            except (TypeError, copy.Error):
                clone[key] = value
            else:
                memo = attempt
        return clone
