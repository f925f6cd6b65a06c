import mcp.types as types
from pydantic import BaseModel


def model_to_mcp_tool(
    name: str,
    description: str,
    input_model: type[BaseModel],
    output_model: type[BaseModel],
) -> types.Tool:
    """Describe a tool with JSON Schemas derived from its Pydantic models."""
    return types.Tool(
        name=name,
        description=description,
        inputSchema=input_model.model_json_schema(by_alias=True),
        outputSchema=output_model.model_json_schema(by_alias=True, mode="serialization"),
    )
