import textwrap

import pytest

from wirebox import Registry, configure


@pytest.fixture(autouse=True)
def fresh_registry():
    Registry.reset_instance()
    configure(quiet=False)
    yield
    Registry.reset_instance()


@pytest.fixture
def write_module(tmp_path):
    """Write a python source file under tmp_path and return its path."""

    def write(name: str, source: str, directory=None):
        path = (directory or tmp_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
        return path

    return write
