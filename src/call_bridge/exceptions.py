"""Exceptions raised while setting up a voice session for a call."""


class CallBridgeError(Exception):
    """Base exception for call bridge errors."""


class SessionError(CallBridgeError):
    """Raised when the voice session could not be created."""


class SessionTransportError(SessionError):
    """The session API could not be reached or did not answer in time."""


class SessionParseError(SessionError):
    """The session API answered with a body that is not a JSON object."""

    def __init__(self, raw_body: str):
        self.raw_body = raw_body
        super().__init__(f"Parse error: {raw_body}")
