"""Session identifier generation."""

import base64
import secrets

from .errors import EntropyUnavailableError

# 256 bits of entropy
SESSION_ID_BYTES = 32


def new_session_id() -> str:
    """
    Generate a cryptographically random, URL-safe session identifier.

    Returns:
        32 random bytes, URL-safe base64 encoded (44 characters)

    Raises:
        EntropyUnavailableError: If the system random source fails
    """
    try:
        raw = secrets.token_bytes(SESSION_ID_BYTES)
    except (OSError, NotImplementedError) as e:
        raise EntropyUnavailableError(f"cannot read secure random bytes: {e}") from e

    if len(raw) != SESSION_ID_BYTES:
        raise EntropyUnavailableError(
            f"short read from random source: {len(raw)} of {SESSION_ID_BYTES} bytes"
        )

    return base64.urlsafe_b64encode(raw).decode("ascii")
