"""
Integration tests for the host request example

The example is loaded from examples/requests/host_request.py. Its factory is
chained on a plain callable base that falls back across host allocators.
"""

import importlib.util
import os

import pytest

from tests.fixtures import EXAMPLES_DIR


def load_example(relative_path):
    """Load an example file as a module"""
    path = os.path.join(EXAMPLES_DIR, relative_path)
    spec = importlib.util.spec_from_file_location('example_host_request', path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope='module')
def requests_example():
    return load_example(os.path.join('requests', 'host_request.py'))


def unavailable():
    raise KeyError('not raised as HostUnavailable')


class TestRequestFactory:
    """Test building requests from host allocators"""

    def test_first_allocator_wins(self, requests_example):
        request = requests_example.request_factory()

        assert isinstance(request, requests_example.HostRequest)
        assert request.kind == 'native'
        assert request.construction_parameters == {}
        assert request.ready_state == requests_example.UNSENT

    def test_falls_back_to_next_allocator(self, requests_example, monkeypatch):
        def missing():
            raise requests_example.HostUnavailable('no native requests here')

        monkeypatch.setattr(requests_example, 'ALLOCATORS', [missing, requests_example.legacy_request])

        assert requests_example.request_factory().kind == 'legacy'

    def test_no_allocator_available(self, requests_example, monkeypatch):
        monkeypatch.setattr(requests_example, 'ALLOCATORS', [])

        with pytest.raises(requests_example.HostUnavailable):
            requests_example.request_factory(url='/status')

    def test_other_allocator_errors_propagate(self, requests_example, monkeypatch):
        monkeypatch.setattr(requests_example, 'ALLOCATORS', [unavailable, requests_example.legacy_request])

        with pytest.raises(KeyError):
            requests_example.request_factory()

    def test_opened_from_parameters(self, requests_example):
        request = requests_example.request_factory(method='POST', url='/orders')

        assert request.method == 'POST'
        assert request.url == '/orders'
        assert request.ready_state == requests_example.OPENED
        assert request.construction_parameters == {'method': 'POST', 'url': '/orders'}

    def test_method_defaults_to_get(self, requests_example):
        assert requests_example.request_factory(url='/status').method == 'GET'

    def test_completion_helpers(self, requests_example):
        ok = requests_example.request_factory(url='/status')
        missing = requests_example.request_factory(url='/gone')

        assert not ok.is_done()
        ok.send()
        missing.send(status=404)

        assert ok.is_done() and ok.succeeded()
        assert missing.is_done() and not missing.succeeded()

    def test_each_call_allocates_a_new_request(self, requests_example):
        first = requests_example.request_factory()
        second = requests_example.request_factory()

        assert first is not second
        assert first.is_done.__self__ is first
