"""
Poll Label Tables
=================

Static lookup tables that map command and exception codes to
human-readable labels. Each table has exactly 256 entries, indexed by the
byte value. Codes that have not been catalogued map to the empty string,
which callers treat as "no description available".

Tables:
    LONG_POLL_LABELS: long-poll command code -> label
    LONG_POLL_RESPONSE_LABELS: long-poll command code -> response label
    EXCEPTION_LABELS: exception code (general poll reply) -> label

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import Dict, Final, Mapping, Tuple


TABLE_SIZE: Final[int] = 0x100


def build_label_table(entries: Mapping[int, str]) -> Tuple[str, ...]:
    """
    Expand a sparse {code: label} mapping into a 256-entry table.

    Args:
        entries: Catalogued labels keyed by byte value.

    Returns:
        Tuple of 256 strings, "" where no label is catalogued.

    Raises:
        ValueError: If a key is outside 0-255.
    """
    table = [""] * TABLE_SIZE
    for code, label in entries.items():
        if not 0 <= code < TABLE_SIZE:
            raise ValueError(f"Label code out of range: {code}")
        table[code] = label
    return tuple(table)


# =============================================================================
# Long Poll Commands
# =============================================================================

_LONG_POLL_ENTRIES: Final[Dict[int, str]] = {
    0x01: "LP 01 - SHUTDOWN",
    0x02: "LP 02 - STARTUP",
    0x03: "LP 03 - SOUND OFF",
    0x04: "LP 04 - SOUND ON",
    0x05: "LP 05 - REEL SPIN OR GAME PLAY SOUNDS DISABLED",
    0x06: "LP 06 - ENABLE BILL ACCEPTOR",
    0x07: "LP 07 - DISABLE BILL ACCEPTOR",
    0x08: "LP 08 - CONFIGURE BILL DENOMINATIONS",
    0x09: "LP 09 - ENABLE/DISABLE GAME N",
    0x0A: "LP 0A - ENTER MAINTENANCE MODE",
    0x0B: "LP 0B - EXIT MAINTENANCE MODE",
    0x0E: "LP 0E - ENABLE/DISABLE REAL TIME EVENT REPORTING",
    0x0F: "LP 0F - SEND METERS 10-15",
    0x10: "LP 10 - SEND TOTAL CANCELLED CREDITS METER",
    0x11: "LP 11 - SEND TOTAL COIN IN METER",
    0x12: "LP 12 - SEND TOTAL COIN OUT METER",
    0x13: "LP 13 - SEND TOTAL DROP METER",
    0x14: "LP 14 - SEND TOTAL JACKPOT METER",
    0x15: "LP 15 - SEND GAMES PLAYED METER",
    0x16: "LP 16 - SEND GAMES WON METER",
    0x17: "LP 17 - SEND GAMES LOST METER",
    0x18: "LP 18 - SEND GAMES PLAYER SINCE LAST POWER UP",
    0x19: "LP 19 - SEND METERS 11 - 15",
    0x1A: "LP 1A - SEND CURRENT CREDITS",
    0x1B: "LP 1B - SEND HANDPAY INFORMATION",
    0x1C: "LP 1C - SEND METERS",
    0x1E: "LP 1E - SEND TOTAL BILL METERS (# OF BILLS)",
    0x1F: "LP 1F - SEND GAMING MACHINE ID & INFORMATION",
    0x20: "LP 20 - SEND TOTAL BILL METERS (VALUE OF BILLS)",
    0x21: "LP 21 - ROM SIGNATURE VERIFICATION",
    0x2A: "LP 2A - SEND TRUE COIN IN",
    0x2B: "LP 2B - SEND TRUE COIN OUT",
    0x2C: "LP 2C - SEND CURRENT HOPPER LEVEL",
    0x2D: "LP 2D - SEND TOTAL HAND PAID CANCELLED CREDITS",
    0x2E: "LP 2E - DELAY GAME",
    0x2F: "LP 2F - SEND SELECTED METERS FOR GAME N",
    0x31: "LP 31 - SEND $1 BILLS IN METER",
    0x32: "LP 32 - SEND $2 BILLS IN METER",
    0x33: "LP 33 - SEND $5 BILLS IN METER",
    0x34: "LP 34 - SEND $10 BILLS IN METER",
    0x35: "LP 35 - SEND $20 BILLS IN METER",
    0x36: "LP 36 - SEND $50 BILLS IN METER",
    0x37: "LP 37 - SEND $100 BILLS IN METER",
    0x38: "LP 38 - SEND $500 BILLS IN METER",
    0x39: "LP 39 - SEND $1,000 BILLS IN METER",
    0x3A: "LP 3A - SEND $200 BILLS IN METER",
    0x3B: "LP 3B - SEND $25 BILLS IN METER",
    0x3C: "LP 3C - SEND $2,000 BILLS IN METER",
    0x3D: "LP 3D - SEND CASH OUT TICKET INFORMATION",
    0x3E: "LP 3E - SEND $2,500 BILLS IN METER",
    0x3F: "LP 3F - SEND $5,000 BILLS IN METER",
    0x40: "LP 40 - SEND $10,000 BILLS IN METER",
    0x41: "LP 41 - SEND $20,000 BILLS IN METER",
    0x42: "LP 42 - SEND $25,000 BILLS IN METER",
    0x43: "LP 43 - SEND $50,000 BILLS IN METER",
    0x44: "LP 44 - SEND $100,000 BILLS IN METER",
    0x45: "LP 45 - SEND $250 BILLS IN METER",
    0x46: "LP 46 - SEND CREDIT AMOUNT OF ALL BILLS ACCEPTED",
    0x47: "LP 47 - SEND COIN AMOUNT ACCEPTED FROM AN EXTERNAL COIN ACCEPTOR",
    0x48: "LP 48 - SEND LAST BILL ACCEPTED INFORMATION",
    0x49: "LP 49 - SEND NUMBER OF BILLS CURRENTLY IN STACKER",
    0x4A: "LP 4A - SEND TOTAL CREDIT AMOUNT OF ALL BILLS CURRENTLY IN STACKED",
    0x4C: "LP 4C - SET SECURE ENHANCED VALIDATION ID",
    0x4D: "LP 4D - SEND ENHANCED VALIDATION INFORMATION",
    0x4F: "LP 4F - SEND CURRENT HOPPER STATUS",
    0x50: "LP 50 - SEND VALIDATION METERS",
    0x51: "LP 51 - SEND TOTAL NUMBER OF GAMES IMPLEMENTED",
    0x52: "LP 52 - SEND GAME N METERS",
    0x53: "LP 53 - SEND GAME N CONFIGURATION",
    0x54: "LP 54 - SEND SAS VERSION ID AND EGM SERIAL #",
    0x55: "LP 55 - SEND SELECTED GAME NUMBER",
    0x56: "LP 56 - SEND ENABLED GAME NUMBERS",
    0x57: "LP 57 - SEND PENDING CASHOUT INFORMATION",
    0x58: "LP 58 - RECEIVE VALIDATION NUMBER",
    0x6E: "LP 6E - SEND AUTHENTICATION INFORMATION",
    0x6F: "LP 6F - SEND EXTENDED METERS FOR GAME N",
    0x70: "LP 70 - SEND TICKET VALIDATION DATA",
    0x71: "LP 71 - REDEEM TICKET",
    0x72: "LP 72 - AFT TRANSFER FUNDS",
    0x73: "LP 73 - AFT REGISTER GAMING MACHINE",
    0x74: "LP 74 - ADT GAME LOCK AND STATUS REQUEST",
    0x75: "LP 75 - SET AFT RECEIPT DATA",
    0x76: "LP 76 - SET CUSTOM AFT TICKET DATA",
    0x7B: "LP 7B - EXTENDED VALIDATION STATUS",
    0x7C: "LP 7C - SET EXTENDED TICKET DATA",
    0x7D: "LP 7D - SET TICKET DATA",
    0x7E: "LP 7E - SEND CURRENT DATE TIME",
    0x7F: "LP 7F - SET CURRENT DATE TIME",
    0x80: "LP 80 - RECEIVE PROGRESSIVE INFORMATION",
    0x83: "LP 83 - SEND CUMULATIVE PROGRESSIVE WINS",
    0x84: "LP 84 - SEND PROGRESSIVE WIN AMOUNT",
    0x85: "LP 85 - SEND SAS PROGRESSIVE WIN AMOUNT",
    0x86: "LP 86 - RECEIVE MULTIPLE PROGRESSIVE LEVELS",
    0x87: "LP 87 - SEND MULTIPLE SAS PROGRESSIVE WIN AMOUNTS",
    0x8A: "LP 8A - INITIATE A LEGACY BONUS PAY",
    0x8B: "LP 8B - INITIATE MULTIPLIED JACKPOT MODE (OBSOLETE)",
    0x8C: "LP 8C - ENTER/EXIT TOURNAMENT MODE",
    0x8E: "LP 8E - SEND CARD INFORMATION",
    0x8F: "LP 8F - SEND PHYSICAL REEL STOP INFORMATION",
    0x90: "LP 90 - SEND LEGACY BONUS WIN AMOUNT",
    0x94: "LP 94 - REMOTE HANDPAY RESET",
    0x95: "LP 95 - SEND TOURNAMENT GAMES PLAYED",
    0x96: "LP 96 - SEND TOURNAMENT GAMES WON",
    0x97: "LP 97 - SEND TOURNAMENT GAMES WAGERED",
    0x98: "LP 98 - SEND TOURNAMENT CREDITS WAGERED",
    0x99: "LP 99 - SEND METERS 95-98",
    0x9A: "LP 9A - SEND LEGACY BONUS METERS",
    0xA0: "LP A0 - SEND ENABLED FEATURES",
    0xA4: "LP A4 - SEND CASH OUT LIMIT",
    0xA8: "LP A8 - ENABLED JACKPOT HANDPAY RESET METHOD",
    0xAA: "LP AA - ENABLE/DISABLE AUTO REBET",
    0xB0: "LP B0 - MULTI-DENOM PREAMBLE",
    0xB1: "LP B1 - SEND CURRENT PLAYER DENOMINATION",
    0xB2: "LP B2 - SEND ENABLED PLAYER DENOMINATIONS",
    0xB3: "LP B3 - SEND TOKEN DENOMINATION",
    0xB4: "LP B4 - SEND WAGER CATEGORY INFORMATION",
    0xB5: "LP B5 - SEND EXTENDED GAME N INFORMATION",
    0xFF: "LP FF - EVENT RESPONSE TO LONG POLL",
}

LONG_POLL_LABELS: Final[Tuple[str, ...]] = build_label_table(_LONG_POLL_ENTRIES)


# =============================================================================
# Long Poll Responses
# =============================================================================

# No response labels have been catalogued yet
LONG_POLL_RESPONSE_LABELS: Final[Tuple[str, ...]] = build_label_table({})


# =============================================================================
# Exception Codes
# =============================================================================

_EXCEPTION_ENTRIES: Final[Dict[int, str]] = {
    0x11: "EXCEPTION 11 - SLOT DOOR WAS OPENED",
    0x12: "EXCEPTION 12 - SLOT DOOR WAS CLOSED",
    0x13: "EXCEPTION 13 - DROP DOOR WAS OPENED",
    0x14: "EXCEPTION 14 - DROP DOOR WAS CLOSED",
}

EXCEPTION_LABELS: Final[Tuple[str, ...]] = build_label_table(_EXCEPTION_ENTRIES)
