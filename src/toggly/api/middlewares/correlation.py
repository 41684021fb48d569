"""Request correlation id settings for asgi-correlation-id."""

import secrets


def generate_request_id() -> str:
    """Generate an id of the form ``req-<digits>`` for requests that carry none."""
    return f"req-{secrets.randbits(63)}"
