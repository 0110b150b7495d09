import base64
import json
from pathlib import Path

import httpx
import pytest

from coo.cli import main
from tests.builders import build_vaa

AVAX_TOKEN = "0000000000000000000000000e082f06ff657d94310cb8ce8b0d9a04541d8052"


def test_decode_hex(tmp_path: Path, transfer_vaa: bytes, capsys: pytest.CaptureFixture) -> None:
    code = main(["--app-path", str(tmp_path), "vaa", "decode", "-d", "hex", transfer_vaa.hex()])
    out = capsys.readouterr().out

    assert code == 0
    assert "VAA Information" in out
    assert "Wormhole Token Transfer" in out
    assert (tmp_path / "cache").is_dir()
    assert (tmp_path / "config").is_dir()


def test_decode_base64_json(tmp_path: Path, transfer_vaa: bytes, capsys: pytest.CaptureFixture) -> None:
    data = base64.b64encode(transfer_vaa).decode("utf8")
    assert main(["--app-path", str(tmp_path), "vaa", "decode", "--json", data]) == 0
    decoded = json.loads(capsys.readouterr().out)
    assert decoded["payload"]["type"] == "TokenTransfer"


def test_decode_forced_raw(tmp_path: Path, transfer_vaa: bytes, capsys: pytest.CaptureFixture) -> None:
    args = ["--app-path", str(tmp_path), "vaa", "decode", "-d", "hex", "-p", "raw-bytes", "--json"]
    assert main([*args, transfer_vaa.hex()]) == 0
    assert json.loads(capsys.readouterr().out)["payload"]["type"] == "RawBytes"


def test_decode_cached_path(tmp_path: Path, transfer_vaa: bytes, capsys: pytest.CaptureFixture) -> None:
    (tmp_path / "cache").mkdir()
    (tmp_path / "cache" / "2-ab-7.vaa").write_bytes(transfer_vaa)

    assert main(["--app-path", str(tmp_path), "vaa", "decode", "-d", "path", "2-ab-7.vaa"]) == 0
    assert "VAA Information" in capsys.readouterr().out


def test_decode_failure_exits_nonzero(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    bad = build_vaa(version=9).hex()
    assert main(["--app-path", str(tmp_path), "vaa", "decode", "-d", "hex", bad]) == 1


def test_list(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    cache = tmp_path / "cache"
    cache.mkdir()
    (cache / "2-ab-7.vaa").write_bytes(b"")
    (cache / "6-cd-1.vaa").write_bytes(b"")

    assert main(["--app-path", str(tmp_path), "vaa", "list"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["0  : 6 cd 1", "1  : 2 ab 7"]


def test_query_unknown_emitter(tmp_path: Path) -> None:
    args = ["--app-path", str(tmp_path), "vaa", "query", "solana", "token", "1"]
    assert main(args) == 1


def test_no_command(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert main(["--app-path", str(tmp_path)]) == 0
    assert "No command specified" in capsys.readouterr().out


def test_query_caches_and_prints(
    tmp_path: Path, transfer_vaa: bytes, capsys: pytest.CaptureFixture
) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json={"vaaBytes": base64.b64encode(transfer_vaa).decode("utf8")}
        )

    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    args = ["--app-path", str(tmp_path), "vaa", "query", "avalanche", "token", "1"]
    assert main(args, http_client=http_client) == 0

    cached = tmp_path / "cache" / f"6-{AVAX_TOKEN}-1.vaa"
    assert cached.read_bytes() == transfer_vaa
    assert seen[0].url.path == f"/v1/signed_vaa/6/{AVAX_TOKEN}/1"

    out = capsys.readouterr().out.splitlines()
    assert out[0] == f"saved {len(transfer_vaa)} bytes to {cached}"
    assert out[1] == f"vaa data: {transfer_vaa.hex()}"


def test_query_guardian_error(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": 5})

    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    args = ["--app-path", str(tmp_path), "vaa", "query", "6", "token", "1"]
    assert main(args, http_client=http_client) == 1
    assert list((tmp_path / "cache").iterdir()) == []


@pytest.mark.parametrize("sequence", ["-1", str(2**64), "ten"])
def test_query_rejects_bad_sequence(tmp_path: Path, sequence: str) -> None:
    args = ["--app-path", str(tmp_path), "vaa", "query", "avalanche", "token", sequence]
    with pytest.raises(SystemExit) as e:
        main(args)
    assert e.value.code == 2


def test_query_accepts_max_sequence() -> None:
    from coo.cli import parse_sequence

    assert parse_sequence(str(2**64 - 1)) == 2**64 - 1
    assert parse_sequence("0") == 0


@pytest.mark.parametrize(
    "name,expected",
    [
        ("wormhole-token-transfer", "TokenTransfer"),
        ("token-transfer", "TokenTransfer"),
        ("raw-bytes", "RawBytes"),
    ],
)
def test_decode_payload_type_names(
    tmp_path: Path, transfer_vaa: bytes, capsys: pytest.CaptureFixture, name: str, expected: str
) -> None:
    args = ["--app-path", str(tmp_path), "vaa", "decode", "-d", "hex", "-p", name, "--json"]
    assert main([*args, transfer_vaa.hex()]) == 0
    assert json.loads(capsys.readouterr().out)["payload"]["type"] == expected


def test_decode_rejects_whitespace_hex(tmp_path: Path, transfer_vaa: bytes) -> None:
    spaced = transfer_vaa.hex()[:10] + " " + transfer_vaa.hex()[10:]
    assert main(["--app-path", str(tmp_path), "vaa", "decode", "-d", "hex", spaced]) == 1
