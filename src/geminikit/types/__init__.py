from ._request_models import (
    Content,
    GenerateContentRequest,
    GenerationConfig,
    GoogleSearch,
    Part,
    Tool,
)

from ._response_models import (
    Candidate,
    GenerateContentResponse,
    ResponseContent,
    ResponsePart,
    SafetyRating,
    UsageMetadata,
)
