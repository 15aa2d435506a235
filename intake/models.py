from __future__ import annotations

from pydantic import BaseModel, Field


class SubmissionIn(BaseModel):
    name: str
    email: str


class Submission(BaseModel):
    timestamp: str = Field(examples=["2026-01-01T12:00:00.000000+00:00"])
    name: str
    email: str


class StatusResponse(BaseModel):
    message: str
    time: str


class SubmitResponse(BaseModel):
    status: str = "success"
    message: str
    data: Submission


class ErrorResponse(BaseModel):
    status: str = "error"
    message: str
