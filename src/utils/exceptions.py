"""
Application Exceptions
"""


class NotFoundError(Exception):
    """Target row is absent (zero rows affected or no row returned)"""

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"{entity} not found")


class ToolArgumentError(Exception):
    """A model-issued tool call carried malformed or missing arguments"""

    def __init__(self, tool_name: str, message: str):
        self.tool_name = tool_name
        super().__init__(f"Invalid arguments for {tool_name}: {message}")


def ensure_found(rows_affected: int, entity: str) -> int:
    """
    Apply the rows-affected contract

    Args:
        rows_affected: Count returned by a mutating procedure
        entity: Entity name used in the not-found message

    Returns:
        int: rows_affected when positive

    Raises:
        NotFoundError: when nothing was mutated
    """
    if rows_affected <= 0:
        raise NotFoundError(entity)
    return rows_affected
