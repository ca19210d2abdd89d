import pytest

from http_errors import Settings, configure
from http_errors import errors as errors_module


@pytest.fixture(autouse=True)
def default_registries():
    configure(Settings())
    yield
    errors_module._normalizer = None
