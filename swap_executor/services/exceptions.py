from typing import Optional


class ExecutorError(Exception):
    """
    Base class for every failure the executor reports back to the caller.
    Carries enough structure for the HTTP layer to build a payload.
    """
    error_type = "EXECUTOR_ERROR"
    http_status = 500

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg

    def to_payload(self) -> dict:
        return {"error_type": self.error_type, "message": self.msg}


class ConfigurationError(ExecutorError):
    """
    Missing or invalid deployment input (signing key, RPC endpoint, router address).
    Reported as a client error: the request cannot be served with this context.
    """
    error_type = "CONFIGURATION"
    http_status = 400

    def __init__(self, msg: str, setting: Optional[str] = None):
        super().__init__(msg)
        self.setting = setting

    def to_payload(self) -> dict:
        out = super().to_payload()
        if self.setting:
            out["setting"] = self.setting
        return out


class ValidationError(ExecutorError):
    """
    Raised when a request field is malformed (bad address, non-positive amount...).
    Nothing was sent on-chain.
    """
    error_type = "VALIDATION"
    http_status = 400

    def __init__(self, msg: str, field: Optional[str] = None):
        super().__init__(msg)
        self.field = field

    def to_payload(self) -> dict:
        out = super().to_payload()
        if self.field:
            out["field"] = self.field
        return out


class UpstreamError(ExecutorError):
    """
    RPC node or router contract read failed (includes ABI decode failures).
    """
    error_type = "UPSTREAM"
    http_status = 502


class SubmissionError(ExecutorError):
    """
    Signing or broadcasting was rejected (insufficient funds, nonce conflict, RPC rejection).
    No transaction hash exists for the caller.
    """
    error_type = "SUBMISSION_REJECTED"
    http_status = 502


class ConfirmationError(ExecutorError):
    """
    The tx WAS broadcast, but waiting for its receipt failed.
    The tx may still be mined later: tx_hash is kept so callers can follow up.
    """
    error_type = "CONFIRMATION_FAILED"
    http_status = 502

    def __init__(self, msg: str, tx_hash: Optional[str] = None):
        super().__init__(msg)
        self.tx_hash = tx_hash

    def to_payload(self) -> dict:
        out = super().to_payload()
        out["tx_hash"] = self.tx_hash
        return out
