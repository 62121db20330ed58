"""Builder errors."""


class BuilderError(Exception):
    """Base class for rejected builder mutations."""

    pass


class DuplicateComponentError(BuilderError):
    """A component id is already present in the page tree."""

    def __init__(self, component_id: str) -> None:
        super().__init__(f"Component id '{component_id}' already exists in the page tree")
        self.component_id = component_id


class ReorderError(BuilderError, IndexError):
    """Reorder indices fall outside the root component list."""

    def __init__(self, start: int, end: int, length: int) -> None:
        super().__init__(
            f"Cannot move component {start} -> {end} in a list of {length} components"
        )
        self.start = start
        self.end = end
        self.length = length


class UnknownFieldError(BuilderError, ValueError):
    """An update names fields the target model does not have."""

    def __init__(self, model: str, fields: list[str]) -> None:
        super().__init__(f"{model} has no field(s): {', '.join(fields)}")
        self.model = model
        self.fields = fields
