from enum import Enum


class WebinarErrorCode(str, Enum):
    E_ENDPOINT_NOT_CONFIGURED = "E_ENDPOINT_NOT_CONFIGURED"
    E_TOKEN_UNAVAILABLE = "E_TOKEN_UNAVAILABLE"

    def __str__(self) -> str:
        return self.value


class WebinarError(Exception):
    """Failure raised by the webinar client itself, as opposed to its transport."""

    def __init__(self, errcode: WebinarErrorCode, errmesg: str) -> None:
        super().__init__(f"{errcode}: {errmesg}")
        self.errcode = errcode
        self.errmesg = errmesg
