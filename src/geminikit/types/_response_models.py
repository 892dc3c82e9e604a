from typing import (
    List,
)

import pydantic
from pydantic import ConfigDict, Field


class ResponsePart(pydantic.BaseModel):
    text: str = ""


class ResponseContent(pydantic.BaseModel):
    parts: List[ResponsePart] = Field(default_factory=list)
    role: str | None = None


class SafetyRating(pydantic.BaseModel):
    category: str = ""
    probability: str = ""


class Candidate(pydantic.BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: ResponseContent = Field(default_factory=ResponseContent)
    finish_reason: str | None = Field(None, alias="finishReason")
    safety_ratings: List[SafetyRating] = Field(default_factory=list, alias="safetyRatings")


class UsageMetadata(pydantic.BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt_token_count: int = Field(0, alias="promptTokenCount")
    candidates_token_count: int = Field(0, alias="candidatesTokenCount")
    total_token_count: int = Field(0, alias="totalTokenCount")


class GenerateContentResponse(pydantic.BaseModel):
    """Body returned by the ``generateContent`` endpoint.

    Fields we do not model (``modelVersion``, ``responseId``, ...) are
    ignored when parsing.
    """

    model_config = ConfigDict(populate_by_name=True)

    candidates: List[Candidate] = Field(default_factory=list)
    usage_metadata: UsageMetadata = Field(default_factory=UsageMetadata, alias="usageMetadata")

    @property
    def text(self) -> str:
        """Text of the first candidate, all parts concatenated in order.

        Returns an empty string when there is no candidate or the first
        candidate has no parts. Other candidates are ignored.
        """
        if not self.candidates:
            return ""
        return "".join(part.text for part in self.candidates[0].content.parts)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
