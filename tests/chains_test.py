import pytest

from coo.chains import Chain, chain_id, chain_name, parse_chain, to_chain


def test_known_ids_map_to_chains() -> None:
    for chain in Chain:
        assert to_chain(int(chain)) is chain


def test_unknown_ids_are_preserved() -> None:
    chain = to_chain(4242)
    assert chain == 4242
    assert not isinstance(chain, Chain)
    assert chain_id(chain) == 4242
    assert chain_name(chain) == "unknown(4242)"


@pytest.mark.parametrize("value", [-1, 0x10000])
def test_out_of_range_ids(value: int) -> None:
    with pytest.raises(ValueError):
        to_chain(value)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("avalanche", Chain.Avalanche),
        ("Ethereum", Chain.Ethereum),
        ("BSC", Chain.Bsc),
        ("6", Chain.Avalanche),
        ("4242", 4242),
    ],
)
def test_parse_chain(text: str, expected: int) -> None:
    assert parse_chain(text) == expected


def test_parse_chain_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_chain("not-a-chain")


def test_chain_name() -> None:
    assert chain_name(Chain.Avalanche) == "avalanche"
    assert chain_id(Chain.Avalanche) == 6
