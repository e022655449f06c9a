from .tool_declarations import to_function_declaration, to_function_declarations

__all__ = [
    "to_function_declaration",
    "to_function_declarations",
]
