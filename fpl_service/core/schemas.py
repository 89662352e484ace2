"""Response schemas shared by the HTTP layer."""

from __future__ import annotations

from http import HTTPStatus

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetail(BaseModel):
    """RFC 7807 problem details body."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(default="about:blank", description="Problem type identifier")
    title: str = Field(..., description="Short summary of the problem type")
    status: int = Field(..., ge=400, le=599, description="HTTP status code")
    detail: str | None = Field(default=None, description="Explanation of this occurrence")
    instance: str | None = Field(default=None, description="URI of this occurrence")
    request_id: str | None = Field(default=None, description="X-Request-ID of the failing request")

    @staticmethod
    def default_title(status_code: int) -> str:
        try:
            return HTTPStatus(status_code).phrase
        except ValueError:
            return "Error"
