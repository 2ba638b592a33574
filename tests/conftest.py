import pytest

from queens_daily.helpers.Game import Game


@pytest.fixture(scope="session")
def solvable_seed():
    """A seed whose 7x7 puzzle generates within the default attempt budget."""
    for seed in range(50):
        if Game(7, 100).generate_puzzle(seed) is not None:
            return seed
    pytest.skip("no solvable seed in range")
