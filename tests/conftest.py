import sys, os

import pytest

# Ensure project root (parent of tests directory) is on sys.path for imports when
# test execution occurs in environments that don't automatically include it.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from kube_capacity.util import logging as log  # noqa: E402


@pytest.fixture(autouse=True)
def reset_logging():
    log.configure_logging('INFO', 'json')
    yield
    log.configure_logging('INFO', 'json')
