"""
Utility functions for the Meetings app.
"""
import secrets

ROOM_CODE_BYTES = 4


def generate_room_code():
    """
    Generate an 8-character lowercase hex room code.

    Codes are random and not checked against existing meetings.
    """
    return secrets.token_hex(ROOM_CODE_BYTES)
