import pytest

from tests.builders import build_transfer, build_vaa


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--network", action="store_true", help="run tests that talk to a live guardian"
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "network: needs access to a live guardian RPC")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("--network"):
        return
    skip = pytest.mark.skip(reason="needs --network")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def transfer_vaa() -> bytes:
    return build_vaa(build_transfer(amount=1_000_000))
