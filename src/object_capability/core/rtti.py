"""
Run-time type information

Member scans (collides_with / implemented_on) cost one lookup per member and
cannot see capabilities without members at all. Objects that opt in to RTTI
get an `rtti` tracker instead: a dict keyed by capability unique_id, so
presence checks are O(1) and reflect the last add/remove on the pair.

    point = tracked_capability('point').add_member('x', 0)
    p = point.create()
    p.rtti.is_present(point)    # -> True
    point.remove(p)
    p.rtti.is_present(point)    # -> False

A tracking capability brings `tracked` (which gives the object its tracker
on first use) and records itself from a constructor and a destructor.
"""

from typing import Any, List, Optional

from object_capability.core.capability import Capability
from object_capability.core.factory import make_factory


# The tracker

def _init_tracker(obj, capability):
    if not hasattr(obj, 'present'):
        obj.present = {}


def _added(self, capability: Capability) -> None:
    self.present[capability.unique_id] = capability


def _removed(self, capability: Capability) -> None:
    self.present.pop(capability.unique_id, None)


def _is_present(self, capability: Capability) -> bool:
    return capability.unique_id in self.present


def _present_capabilities(self) -> List[Capability]:
    return list(self.present.values())


tracker = make_factory(name='rtti.tracker').add_constructor(_init_tracker)
tracker.add_member('added', _added)
tracker.add_member('removed', _removed)
tracker.add_member('is_present', _is_present)
tracker.add_member('present_capabilities', _present_capabilities)


# Tracking on an object

def _give_tracker(obj, capability):
    # Lazily, once: brings re-adds member-less capabilities every time
    if getattr(obj, 'rtti', None) is None:
        obj.rtti = tracker()


def _drop_tracker(obj, capability):
    if 'rtti' in getattr(obj, '__dict__', {}):
        del obj.rtti


tracked = Capability('rtti.tracked').add_constructor(_give_tracker).add_destructor(_drop_tracker)


# RTTI-enabled capabilities

def _record_added(obj, capability):
    obj.rtti.added(capability)


def _record_removed(obj, capability):
    rtti = getattr(obj, 'rtti', None)
    if rtti is not None:
        rtti.removed(capability)


def _enable_tracking(target: Capability, enabler: Capability) -> None:
    """Constructor run when rtti_enabled is added to a capability"""
    if _record_added in target.after_add_hooks:
        return
    target.brings(tracked)
    target.add_constructor(_record_added)
    target.add_destructor(_record_removed)


rtti_enabled = Capability('rtti.enabled').add_constructor(_enable_tracking)


def tracked_capability(name: Optional[str] = None, members: Optional[dict] = None) -> Capability:
    """A new capability with RTTI tracking enabled"""
    return rtti_enabled.create(Capability(name, members))


def is_present(capability: Capability, obj: Any) -> bool:
    """
    Presence of capability on obj.

    Uses the object's RTTI tracker when it has one, otherwise falls back to
    a member scan.
    """
    rtti = getattr(obj, 'rtti', None)
    if rtti is not None:
        return rtti.is_present(capability)
    return capability.implemented_on(obj)
