"""Business Partner Number (BPN) format checks.

A BPN is ``BPN`` + a kind letter (``L`` legal entity, ``S`` site,
``A`` address) + 12 upper-case alphanumeric characters.
"""

import re
from enum import Enum

BPN_LENGTH = 16

_BPN_PATTERN = re.compile(r"^BPN([LSA])[0-9A-Z]{12}$")


class BpnKind(str, Enum):
    """Kind letter encoded in a BPN prefix."""

    LEGAL_ENTITY = "L"
    SITE = "S"
    ADDRESS = "A"


def bpn_kind(bpn: str | None) -> BpnKind | None:
    """Return the kind of a well-formed BPN, or None if it is malformed.

    The check is case-sensitive: ``"bpnl..."`` is malformed.
    """
    if not bpn:
        return None
    match = _BPN_PATTERN.match(bpn)
    if match is None:
        return None
    return BpnKind(match.group(1))


def is_valid_bpn(bpn: str | None, kind: BpnKind | None = None) -> bool:
    """Check that ``bpn`` is well-formed and, if given, of the expected kind."""
    actual = bpn_kind(bpn)
    if actual is None:
        return False
    return kind is None or actual == kind
