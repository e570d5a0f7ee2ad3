"""
Event Wrapper - composing presentation capabilities onto host objects

Host environments hand out low-level event objects whose fields differ from
platform to platform. Instead of subclassing or copying them, the adapter
adds small capabilities to the event object it was given and returns it.

Capabilities:
- detects_mouse_button: is_left_button(), is_right_button()
- targeted_event: actual_target() (text nodes resolve to their parent)
- stoppable_event: stop() (stop_propagation() or cancel_bubble)
- accurately_positioned: real_x(), real_y() (page coordinates)
- event_wrapper: brings all of the above

Example:
    event = HostEvent(button=0, client_x=10, client_y=5, scroll_x=100, scroll_y=0)
    wrap_event(event).real_x()      # -> 110
"""

from object_capability import Capability, logs_to_itself

TEXT_NODE = 3


class HostEvent:
    """Stand-in for an event object allocated by the host environment"""

    def __init__(self, **fields):
        for name, value in fields.items():
            setattr(self, name, value)


detects_mouse_button = Capability('detects_mouse_button')
detects_mouse_button.add_member('is_left_button', lambda self: self.button < 2)
detects_mouse_button.add_member('is_right_button', lambda self: self.button == 2)


def _actual_target(self):
    result = getattr(self, 'target', None) or getattr(self, 'src_element', None)
    if getattr(result, 'node_type', None) == TEXT_NODE:
        return result.parent_node
    return result


targeted_event = Capability('targeted_event').add_member('actual_target', _actual_target)


def _stop(self):
    if callable(getattr(self, 'stop_propagation', None)):
        self.stop_propagation()
    else:
        self.cancel_bubble = True


stoppable_event = Capability('stoppable_event').add_member('stop', _stop)


def _real_x(self):
    return getattr(self, 'page_x', None) or self.client_x + getattr(self, 'scroll_x', 0)


def _real_y(self):
    return getattr(self, 'page_y', None) or self.client_y + getattr(self, 'scroll_y', 0)


accurately_positioned = Capability('accurately_positioned')
accurately_positioned.add_member('real_x', _real_x)
accurately_positioned.add_member('real_y', _real_y)


event_wrapper = Capability('event_wrapper').brings(
    detects_mouse_button,
    targeted_event,
    stoppable_event,
    accurately_positioned,
)


def wrap_event(event):
    """Compose the event wrapper onto a host event and return it"""
    return event_wrapper.create(event)


def wrap_logged_event(event):
    """Like wrap_event(), and the event keeps its own log"""
    event = wrap_event(event)
    logs_to_itself.add(event)
    event.log.debug('Event wrapped', button=getattr(event, 'button', None))
    return event
