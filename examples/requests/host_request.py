"""
Host Request - a reliable request factory over unreliable host allocators

Host environments differ in how (and whether) they hand out request objects.
The factory's base tries each allocator in ALLOCATORS in order and composes
request helpers onto the first object it gets back.

Calling request_factory(method='POST', url='/orders') returns a host request
that has been opened with those parameters and answers is_done() and
succeeded(). When no allocator works, HostUnavailable propagates.

Example:
    request = request_factory(url='/status')
    request.send()
    request.succeeded()     # -> True once the host completed it with a 2xx
"""

from object_capability import make_factory

UNSENT, OPENED, DONE = 0, 1, 4


class HostUnavailable(Exception):
    """Raised when the host cannot allocate a request object"""
    pass


class HostRequest:
    """Stand-in for a request object allocated by the host environment"""

    def __init__(self, kind):
        self.kind = kind
        self.method = None
        self.url = None
        self.status = None
        self.ready_state = UNSENT

    def open(self, method, url):
        self.method = method
        self.url = url
        self.ready_state = OPENED

    def send(self, status=200):
        self.status = status
        self.ready_state = DONE


def native_request():
    return HostRequest('native')


def legacy_request():
    return HostRequest('legacy')


# Tried in order; an allocator signals absence by raising HostUnavailable
ALLOCATORS = [native_request, legacy_request]


def _allocate_request():
    for allocator in ALLOCATORS:
        try:
            return allocator()
        except HostUnavailable:
            continue
    raise HostUnavailable('No request implementation available')


def _open_from_parameters(obj, capability):
    params = obj.construction_parameters
    if 'url' in params:
        obj.open(params.get('method', 'GET'), params['url'])


def _is_done(self):
    return self.ready_state == DONE


def _succeeded(self):
    return self.is_done() and 200 <= self.status < 300


request_factory = (make_factory(base=_allocate_request, name='request')
                   .add_constructor(_open_from_parameters)
                   .add_member('is_done', _is_done)
                   .add_member('succeeded', _succeeded))
