"""Call status callback logging."""

import logging
from datetime import datetime, timezone

logger = logging.getLogger("call_gateway.status")


def record_status(
    call_sid: str | None,
    call_status: str | None,
    from_: str | None,
    to: str | None,
    **details: str | None,
) -> None:
    """
    Log a Twilio status callback.

    No field is validated; missing values are logged as null.
    """
    extra = {
        "call_sid": call_sid,
        "call_status": call_status,
        "from": from_,
        "to": to,
        "received_at": datetime.now(timezone.utc).isoformat(),
    }
    extra.update({key: value for key, value in details.items() if value})
    logger.info("call.status", extra=extra)
