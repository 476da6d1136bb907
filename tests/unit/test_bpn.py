"""Unit tests for BPN format checks."""

import pytest

from partnerpool.common.bpn import BPN_LENGTH, BpnKind, bpn_kind, is_valid_bpn


class TestBpnKind:
    """Tests for bpn_kind()."""

    @pytest.mark.parametrize(
        ("bpn", "kind"),
        [
            ("BPNL000000000065", BpnKind.LEGAL_ENTITY),
            ("BPNS0000000000WN", BpnKind.SITE),
            ("BPNA00000000009W", BpnKind.ADDRESS),
        ],
    )
    def test_well_formed(self, bpn: str, kind: BpnKind):
        assert len(bpn) == BPN_LENGTH
        assert bpn_kind(bpn) == kind

    @pytest.mark.parametrize(
        "bpn",
        [
            None,
            "",
            "BPNL000065",  # too short
            "BPNL0000000000650",  # too long
            "BPNX000000000065",  # unknown kind
            "bpnl000000000065",  # lower-case prefix
            "BPNL00000000006w",  # lower-case body
            " BPNL000000000065",
        ],
    )
    def test_malformed(self, bpn: str | None):
        assert bpn_kind(bpn) is None


class TestIsValidBpn:
    """Tests for is_valid_bpn()."""

    def test_any_kind(self):
        assert is_valid_bpn("BPNA00000000009W")

    def test_matching_kind(self):
        assert is_valid_bpn("BPNL000000000065", BpnKind.LEGAL_ENTITY)

    def test_other_kind(self):
        assert not is_valid_bpn("BPNL000000000065", BpnKind.SITE)

    def test_malformed(self):
        assert not is_valid_bpn("BPNL000065", BpnKind.LEGAL_ENTITY)
