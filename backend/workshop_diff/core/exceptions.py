from __future__ import annotations


class ClientInputError(Exception):
    """The caller sent a request that cannot be processed (maps to HTTP 400)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UpstreamCallError(Exception):
    """The Workshop catalog call failed or returned an unusable body (maps to HTTP 500)."""

    def __init__(self, message: str, *, batch_index: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.batch_index = batch_index
