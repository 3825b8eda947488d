"""Named resource requests attached to jobs."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass
class ResourceReq:
    """One resource request: its name, numeric amount and textual value."""

    name: str
    amount: int = 0
    res_str: str | None = None


@dataclass
class ResourceReqList:
    """An ordered list of resource requests, looked up by name.

    Names are matched exactly, and the first request with a name wins.
    """

    items: list[ResourceReq] = field(default_factory=list)

    def __iter__(self) -> Iterator[ResourceReq]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, name: object) -> bool:
        return any(req.name == name for req in self.items)

    def find(self, name: str) -> ResourceReq | None:
        """Return the first request named ``name``, or None."""
        return next((req for req in self.items if req.name == name), None)

    def find_or_add(self, name: str) -> ResourceReq:
        """Return the request named ``name``, appending a fresh one if absent."""
        found = self.find(name)
        if found is None:
            found = ResourceReq(name)
            self.items.append(found)
        return found

    def clone(self) -> ResourceReqList:
        """Return an independent copy holding copies of every request."""
        return ResourceReqList([copy.copy(req) for req in self.items])

    @classmethod
    def from_requests(cls, requests: Iterable[ResourceReq]) -> ResourceReqList:
        """Build a list from existing requests, keeping their order."""
        return cls(list(requests))


def find_resource_req(reqlist: ResourceReqList | None, name: str) -> ResourceReq | None:
    """Return the request named ``name`` in ``reqlist``, or None if absent or no list."""
    if reqlist is None:
        return None
    return reqlist.find(name)


def find_alloc_resource_req(name: str, reqlist: ResourceReqList | None) -> ResourceReq:
    """Find the request named ``name`` or create one.

    A newly created request is appended to ``reqlist``; with no list it is
    returned on its own.
    """
    if reqlist is None:
        return ResourceReq(name)
    return reqlist.find_or_add(name)


def clone_resource_req_list(reqlist: ResourceReqList | None) -> ResourceReqList | None:
    """Return a deep copy of ``reqlist``, or None when there is no list."""
    if reqlist is None:
        return None
    return reqlist.clone()