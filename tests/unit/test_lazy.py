import threading
from unittest.mock import Mock

import pytest

from hateoas_registry.cache.lazy import LazyResource


def test_fetches_once():
    fetch = Mock(return_value="value")
    lazy = LazyResource(fetch, href="https://example.org/x")
    assert not lazy.is_resolved
    assert lazy.value == "value"
    assert lazy.value == "value"
    assert lazy.is_resolved
    fetch.assert_called_once_with()


def test_failed_fetch_is_retried():
    fetch = Mock(side_effect=[RuntimeError("boom"), "value"])
    lazy = LazyResource(fetch)
    with pytest.raises(RuntimeError):
        lazy.value
    assert not lazy.is_resolved
    assert lazy.value == "value"


def test_concurrent_access_fetches_once():
    calls = []
    release = threading.Event()

    def fetch():
        calls.append(1)
        release.wait(timeout=5)
        return "value"

    lazy = LazyResource(fetch)
    results = []
    threads = [threading.Thread(target=lambda: results.append(lazy.value)) for _ in range(5)]
    for t in threads:
        t.start()
    release.set()
    for t in threads:
        t.join(timeout=5)

    assert results == ["value"] * 5
    assert len(calls) == 1
