# This project was developed with assistance from AI tools.
"""Problem Details body returned by every failing staff or borrower endpoint.

Wizard clients branch on ``status`` (404 unknown link, 410 expired link,
409 step out of order, 502 aggregator down); ``detail`` carries the
message shown to the customer or agent.
"""

from pydantic import BaseModel, Field

STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    409: "Conflict",
    410: "Gone",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
}


class ErrorResponse(BaseModel):
    """RFC 7807 error shape (https://datatracker.ietf.org/doc/html/rfc7807)."""

    type: str = Field(default="about:blank", description="Problem type URI.")
    title: str = Field(description="Reason phrase for ``status``.")
    status: int = Field(description="HTTP status code.")
    detail: str = Field(default="", description="Message for this failure.")
    request_id: str = Field(
        default="",
        description="X-Request-ID echoed back, or a generated UUID.",
    )
    instance: str = Field(default="", description="Request path that failed.")

    @classmethod
    def for_status(
        cls, status_code: int, detail: str, request_id: str, instance: str = ""
    ) -> "ErrorResponse":
        return cls(
            title=STATUS_TITLES.get(status_code, "Error"),
            status=status_code,
            detail=detail,
            request_id=request_id,
            instance=instance,
        )
