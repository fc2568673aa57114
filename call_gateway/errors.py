"""Gateway exceptions mapped to HTTP responses by the application error handler."""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    status_code: int = 500
    kind: str = "gateway_error"
    default_detail: str = "Gateway error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "error": self.kind, "detail": self.detail}


class ConfigurationError(GatewayError):
    status_code = 503
    kind = "configuration_error"
    default_detail = "Twilio credentials not configured"


class ProviderRequestFailed(GatewayError):
    """A Twilio REST call raised (network, auth, unknown or finished call)."""

    status_code = 502
    kind = "provider_request_failed"
    default_detail = "Twilio request failed"

    def __init__(
        self,
        detail: str | None = None,
        *,
        operation: str | None = None,
        call_sid: str | None = None,
        code: int | None = None,
    ) -> None:
        super().__init__(detail)
        self.operation = operation
        self.call_sid = call_sid
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update(operation=self.operation, callSid=self.call_sid, code=self.code)
        return payload


class TransferFailed(GatewayError):
    """A transfer step failed before any call leg was changed."""

    status_code = 502
    kind = "transfer_failed"
    default_detail = "Transfer failed"

    def __init__(
        self,
        detail: str | None = None,
        *,
        failed_step: str,
        call_sid: str | None = None,
        state: str = "failed",
        applied_steps: list[str] | None = None,
    ) -> None:
        super().__init__(detail)
        self.failed_step = failed_step
        self.call_sid = call_sid
        self.state = state
        self.applied_steps = list(applied_steps or [])

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update(
            failedStep=self.failed_step,
            callSid=self.call_sid,
            state=self.state,
            appliedSteps=self.applied_steps,
        )
        return payload


class PartialTransferFailure(TransferFailed):
    """A later transfer step failed after earlier steps were applied."""

    kind = "partial_transfer_failure"
    default_detail = "Transfer partially applied"
