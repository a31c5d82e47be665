"""Pytest configuration. Shared call counters for combiners."""
import functools

import pytest


class CallCounter:
    """Wraps functions and counts how many times they are actually executed."""

    def __init__(self):
        self.count = 0

    def __call__(self, fn):
        @functools.wraps(fn)
        def wrapper(*args):
            self.count += 1
            return fn(*args)
        return wrapper


@pytest.fixture
def make_counter():
    return CallCounter
