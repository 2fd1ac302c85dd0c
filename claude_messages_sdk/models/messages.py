from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Literal, Optional, Union


class TextContent(BaseModel):
    """Plain text content block."""
    type: Literal["text"] = "text"
    text: str


class ImageSource(BaseModel):
    """Inline image payload (base64 data plus media type)."""
    type: str = "base64"
    media_type: str
    data: str


class ImageContent(BaseModel):
    """Image content block."""
    type: Literal["image"] = "image"
    source: ImageSource


class ToolUseContent(BaseModel):
    """A tool invocation requested by the model."""
    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: Dict[str, Any] = Field(default_factory=dict)


class ToolResultContent(BaseModel):
    """The result of a tool invocation, sent back by the caller."""
    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str
    content: Union[str, List[Any]]
    is_error: Optional[bool] = None


ContentBlock = Union[TextContent, ImageContent, ToolUseContent, ToolResultContent]

# Blocks with a tag missing from this table are kept as plain dicts.
CONTENT_BLOCK_TYPES = {
    "text": TextContent,
    "image": ImageContent,
    "tool_use": ToolUseContent,
    "tool_result": ToolResultContent,
}


def parse_content_block(raw: Any) -> Any:
    """Decode one content block by its `type` tag.

    Known tags become their block model; anything else is returned as is.
    """
    if isinstance(raw, dict):
        block_cls = CONTENT_BLOCK_TYPES.get(raw.get("type"))
        if block_cls is not None:
            return block_cls.model_validate(raw)
    return raw


def parse_content_blocks(value: Any) -> Any:
    if isinstance(value, list):
        return [parse_content_block(item) for item in value]
    return value


class Message(BaseModel):
    """
    A conversation turn sent to the API.

    `content` is either a string or a list of content blocks (block models
    or plain dicts in the wire format).
    """
    role: str
    content: Union[str, List[Union[ContentBlock, Dict[str, Any]]]]

    @field_validator("content", mode="before")
    @classmethod
    def _decode_blocks(cls, value):
        return parse_content_blocks(value)

    @classmethod
    def user(cls, content: Union[str, List[Any]]) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: Union[str, List[Any]]) -> "Message":
        return cls(role="assistant", content=content)


class ToolInputSchema(BaseModel):
    """JSON schema describing a tool's input object."""
    type: str = "object"
    properties: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)


class Tool(BaseModel):
    """Definition of a tool the model may call."""
    name: str
    description: Optional[str] = None
    input_schema: ToolInputSchema

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tool":
        return cls.model_validate(data)


class Usage(BaseModel):
    """Token usage information for a request."""
    model_config = ConfigDict(extra="allow")

    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: Optional[int] = None
    cache_read_input_tokens: Optional[int] = None

    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class MessageResponse(BaseModel):
    """
    A message generated by the API.

    Also used as the running snapshot of a streamed message; see
    `MessageStream.final_message()`.
    """
    model_config = ConfigDict(extra="allow")

    id: str
    type: str = "message"
    role: str = "assistant"
    content: List[Union[ContentBlock, Dict[str, Any]]] = Field(default_factory=list)
    model: str
    stop_reason: Optional[str] = None
    stop_sequence: Optional[str] = None
    usage: Usage = Field(default_factory=Usage)

    @field_validator("content", mode="before")
    @classmethod
    def _decode_blocks(cls, value):
        return parse_content_blocks(value)

    def get_text(self) -> str:
        """Concatenate the text of all text blocks."""
        return "".join(block.text for block in self.content if isinstance(block, TextContent))

    def tool_uses(self) -> List[ToolUseContent]:
        return [block for block in self.content if isinstance(block, ToolUseContent)]


class CountTokensResponse(BaseModel):
    """Response from the count_tokens endpoint."""
    model_config = ConfigDict(extra="allow")

    input_tokens: int
