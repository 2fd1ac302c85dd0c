from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union

from .messages import Message, Tool


MessageParam = Union[Message, Dict[str, Any]]
ToolParam = Union[Tool, Dict[str, Any]]


class MessageCreateParams(BaseModel):
    """
    Request parameters for the Messages endpoint.

    Optional fields left unset are omitted from the request body; no range
    checks are applied to sampling parameters, the API validates them.
    """
    model_config = ConfigDict(extra="forbid")

    # Required
    model: str = Field(..., description="Model identifier")
    messages: List[MessageParam] = Field(..., description="Ordered conversation turns")
    max_tokens: int = Field(..., description="Maximum tokens to generate")

    # Optional
    system: Optional[Union[str, List[Dict[str, Any]]]] = Field(None, description="System prompt")
    temperature: Optional[float] = Field(None, description="Sampling temperature, nominally 0.0-1.0")
    top_p: Optional[float] = Field(None, description="Nucleus sampling threshold")
    top_k: Optional[int] = Field(None, description="Top-k sampling parameter")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Request metadata (e.g. user_id)")
    stop_sequences: Optional[List[str]] = Field(None, description="Custom stop sequences")
    tools: Optional[List[ToolParam]] = Field(None, description="Tool definitions")
    tool_choice: Optional[Dict[str, Any]] = Field(None, description="Tool selection strategy")

    def to_body(self, stream: bool = False) -> Dict[str, Any]:
        """Serialize to a JSON-ready request body.

        Args:
            stream: Add `"stream": true` for a streaming request
        """
        body = self.model_dump(exclude_none=True)
        if stream:
            body["stream"] = True
        return body


class CountTokensParams(BaseModel):
    """Request parameters for the count_tokens endpoint."""
    model_config = ConfigDict(extra="forbid")

    model: str = Field(..., description="Model identifier")
    messages: List[MessageParam] = Field(..., description="Ordered conversation turns")
    system: Optional[Union[str, List[Dict[str, Any]]]] = Field(None, description="System prompt")
    tools: Optional[List[ToolParam]] = Field(None, description="Tool definitions")

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
