import pytest

from scalar_grad import use_tape


@pytest.fixture(autouse=True)
def fresh_tape():
    """Every test records on its own tape."""
    with use_tape() as tape:
        yield tape
