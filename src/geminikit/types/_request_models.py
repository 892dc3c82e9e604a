from typing import (
    List,
)

import pydantic
from pydantic import ConfigDict, Field


class Part(pydantic.BaseModel):
    text: str


class Content(pydantic.BaseModel):
    parts: List[Part]
    role: str | None = None


class GenerationConfig(pydantic.BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    max_output_tokens: int | None = Field(None, alias="maxOutputTokens")
    # None means "not set". 0.0 is a legitimate value and must be sent.
    temperature: float | None = None


class GoogleSearch(pydantic.BaseModel):
    """Marker enabling grounding with Google Search. It has no fields."""


class Tool(pydantic.BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    google_search: GoogleSearch | None = Field(None, alias="googleSearch")


class GenerateContentRequest(pydantic.BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contents: List[Content]
    generation_config: GenerationConfig = Field(
        default_factory=GenerationConfig,
        alias="generationConfig",
    )
    tools: List[Tool] | None = None

    @classmethod
    def from_prompt(
        cls,
        prompt: str,
        max_output_tokens: int,
        temperature: float | None,
        google_search: bool = False,
    ) -> "GenerateContentRequest":
        """Builds the request for a single text prompt.

        The prompt is stored verbatim as the only part of the only
        content block.
        """
        tools = None
        if google_search:
            tools = [Tool(google_search=GoogleSearch())]
        return cls(
            contents=[Content(parts=[Part(text=prompt)])],
            generation_config=GenerationConfig(
                max_output_tokens=max_output_tokens,
                temperature=temperature,
            ),
            tools=tools,
        )

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
