"""
Capability

A capability is a named bundle of members (functions or plain values) that
can be installed on, and removed from, individual objects at runtime.
Capabilities extend an object but never change it: a member that would shadow
an existing attribute is a collision, and the capability is refused.

The record itself is a plain class (members + four hook lists). The
composition operations are module-level functions over that record, and the
Capability methods are a thin builder API on top of them:

    point = Capability('point', {'x': 0, 'y': 0})
    point.add_member('norm', lambda self: (self.x ** 2 + self.y ** 2) ** 0.5)

    p = point.create()          # fresh Instance with x, y and norm
    p.norm()                    # -> 0.0

Pipeline per object:
    add:    before_add_hooks -> collision check -> attach -> after_add_hooks
    remove: before_remove_hooks -> detach -> after_remove_hooks

Hooks are called as hook(obj, capability). Constructors and destructors are
simply after-add and before-remove hooks.

Nothing is rolled back: if a hook or the collision check raises, whatever ran
before it stays in effect.
"""

import inspect
import itertools
import types
from typing import Any, Callable, Dict, List, Optional

from object_capability.core.errors import CollisionError, MissingDependencyError
from object_capability.core.self_logger import get_journal


Hook = Callable[[Any, 'Capability'], None]

# Process-wide capability ids (monotonic, assigned once at construction)
_unique_ids = itertools.count(1)

# Own slot holding {capability unique_id: names attach() installed}
ATTACHED_SLOT = '_capability_slots'


class Instance:
    """Open bag of named slots. The default target for Capability.create()"""

    def __init__(self, **slots):
        for name, value in slots.items():
            setattr(self, name, value)

    def __repr__(self):
        slots = ', '.join(sorted(name for name in vars(self) if name != ATTACHED_SLOT))
        return f'<Instance {slots}>'


class ListInstance(list):
    """A list that also accepts named slots"""
    pass


class Capability:
    """
    Named bundle of members plus add/remove hooks.

    Attributes:
        name: Display name (defaults to 'capability-<unique_id>')
        unique_id: Process-wide id, used as the RTTI key
        members: Member table copied onto objects by attach()
        before_add_hooks, after_add_hooks, before_remove_hooks,
        after_remove_hooks: Hook lists, run in registration order
    """

    def __init__(self, name: Optional[str] = None, members: Optional[Dict[str, Any]] = None):
        self.unique_id = next(_unique_ids)
        self.name = name or f'capability-{self.unique_id}'
        self.members: Dict[str, Any] = dict(members or {})

        self.before_add_hooks: List[Hook] = []
        self.after_add_hooks: List[Hook] = []
        self.before_remove_hooks: List[Hook] = []
        self.after_remove_hooks: List[Hook] = []

    def __repr__(self):
        return f'<{type(self).__name__} {self.name} #{self.unique_id}>'

    # Composition

    def attach(self, obj: Any) -> None:
        attach(self, obj)

    def detach(self, obj: Any) -> None:
        detach(self, obj)

    def add(self, *objs: Any) -> None:
        add(self, *objs)

    def remove(self, *objs: Any) -> None:
        remove(self, *objs)

    def create(self, obj: Any = None) -> Any:
        return create(self, obj)

    # Introspection

    def collides_with(self, obj: Any) -> bool:
        return collides_with(self, obj)

    def implemented_on(self, obj: Any) -> bool:
        return implemented_on(self, obj)

    # Builder API (chainable)

    def requires(self, *capabilities: 'Capability') -> 'Capability':
        """Refuse to be added unless every capability is implemented already"""
        self.before_add_hooks.append(requires(*capabilities))
        return self

    def brings(self, *capabilities: 'Capability') -> 'Capability':
        """Add each capability first unless it is implemented already"""
        self.before_add_hooks.append(brings(*capabilities))
        return self

    def add_constructor(self, fn: Hook) -> 'Capability':
        self.after_add_hooks.append(fn)
        return self

    def add_destructor(self, fn: Hook) -> 'Capability':
        self.before_remove_hooks.append(fn)
        return self

    def add_member(self, name: str, value: Any) -> 'Capability':
        self.members[name] = value
        return self

    def remove_member(self, name: str) -> Any:
        """Drop a member from the table and return it (None if absent)"""
        return self.members.pop(name, None)


def attach(capability: Capability, obj: Any) -> None:
    """
    Copy every member of capability onto obj's own slots.

    Plain functions are bound to obj, so self is the object for good. This is
    the raw primitive: existing slots are not checked (add() does that).
    """
    installed = []
    for name, value in capability.members.items():
        if inspect.isfunction(value):
            value = types.MethodType(value, obj)
        setattr(obj, name, value)
        installed.append(name)

    if not installed:
        return
    record = obj.__dict__.setdefault(ATTACHED_SLOT, {})
    names = record.setdefault(capability.unique_id, [])
    names.extend(name for name in installed if name not in names)


def detach(capability: Capability, obj: Any) -> None:
    """
    Delete the names attach() installed for capability from obj's own slots.

    Member table changes made after the attach do not matter. Objects with
    no record of the capability fall back to the current member table.
    """
    slots = getattr(obj, '__dict__', {})
    record = slots.get(ATTACHED_SLOT, {})
    names = record.pop(capability.unique_id, None)
    if names is None:
        names = list(capability.members)
    if ATTACHED_SLOT in slots and not record:
        del obj.__dict__[ATTACHED_SLOT]

    for name in names:
        if name in slots:
            delattr(obj, name)


def collides_with(capability: Capability, obj: Any) -> bool:
    """True if any member name already resolves on obj"""
    return any(hasattr(obj, name) for name in capability.members)


def implemented_on(capability: Capability, obj: Any) -> bool:
    """
    True iff every member name resolves on obj.

    A capability without members is never implemented: there is nothing to
    observe. Use the RTTI tracker for presence of such capabilities.
    """
    if not capability.members:
        return False
    return all(hasattr(obj, name) for name in capability.members)


def detect_collisions(capability: Capability, obj: Any) -> None:
    """Raise CollisionError for the first member name that already resolves on obj"""
    for name in capability.members:
        if hasattr(obj, name):
            _journal('WARNING', 'Capability collision', capability, obj, member=name)
            raise CollisionError(obj, capability, name)


def add(capability: Capability, *objs: Any) -> None:
    """Run the full add pipeline for each object, in order"""
    for obj in objs:
        for hook in list(capability.before_add_hooks):
            hook(obj, capability)

        detect_collisions(capability, obj)
        attach(capability, obj)

        for hook in list(capability.after_add_hooks):
            hook(obj, capability)

        _journal('DEBUG', 'Capability added', capability, obj, phase='add')


def remove(capability: Capability, *objs: Any) -> None:
    """Run the full remove pipeline for each object, in order"""
    for obj in objs:
        for hook in list(capability.before_remove_hooks):
            hook(obj, capability)

        detach(capability, obj)

        for hook in list(capability.after_remove_hooks):
            hook(obj, capability)

        _journal('DEBUG', 'Capability removed', capability, obj, phase='remove')


def create(capability: Capability, obj: Any = None) -> Any:
    """Add capability to obj (a fresh Instance if omitted) and return it"""
    if obj is None:
        obj = Instance()
    add(capability, obj)
    return obj


def requires(*capabilities: Capability) -> Hook:
    """Build a before-add hook that fails on the first missing prerequisite"""
    def check_requirements(obj, dependent):
        for prerequisite in capabilities:
            if not implemented_on(prerequisite, obj):
                _journal('WARNING', 'Missing dependency', dependent, obj,
                         requires=prerequisite.name)
                raise MissingDependencyError(obj, prerequisite, dependent)
    return check_requirements


def brings(*capabilities: Capability) -> Hook:
    """Build a before-add hook that adds each missing prerequisite"""
    def bring_prerequisites(obj, dependent):
        for prerequisite in capabilities:
            if not implemented_on(prerequisite, obj):
                add(prerequisite, obj)
    return bring_prerequisites


def _journal(level: str, message: str, capability: Capability, obj: Any, **fields) -> None:
    journal = get_journal()
    if journal is None:
        return
    journal.log(
        level,
        message,
        capability=capability.name,
        capability_id=capability.unique_id,
        target=type(obj).__name__,
        **fields,
    )
