from __future__ import annotations

import pytest

from ledgerdump.core.principal import Principal, PrincipalError


def test_management_canister_is_empty_principal() -> None:
    principal = Principal.from_text("aaaaa-aa")

    assert principal.raw == b""
    assert principal.to_text() == "aaaaa-aa"


def test_anonymous_principal_round_trips() -> None:
    principal = Principal(b"\x04")

    assert str(principal) == "2vxsx-fae"
    assert Principal.from_text("2vxsx-fae") == principal


def test_canister_id_parses() -> None:
    text = "zfcdd-tqaaa-aaaaq-aaaga-cai"

    principal = Principal.from_text(text)

    assert len(principal.raw) == 10
    assert principal.to_text() == text


@pytest.mark.parametrize(
    "text",
    [
        "not-a-principal!",
        "2vxsx-faf",
        "2vxsxfae",
        "",
    ],
)
def test_invalid_text_is_rejected(text: str) -> None:
    with pytest.raises(PrincipalError):
        Principal.from_text(text)


def test_oversized_principal_is_rejected() -> None:
    with pytest.raises(PrincipalError, match="at most 29"):
        Principal(bytes(30))


def test_uppercase_text_parses_to_same_principal() -> None:
    principal = Principal.from_text("ZFCDD-TQAAA-AAAAQ-AAAGA-CAI")

    assert principal == Principal.from_text("zfcdd-tqaaa-aaaaq-aaaga-cai")
    assert principal.to_text() == "zfcdd-tqaaa-aaaaq-aaaga-cai"
