"""Domain exceptions raised by the service layer."""


class MealPlannerError(Exception):
    """Base exception for mealplanner errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(MealPlannerError):
    """Raised when a referenced aggregate or child entity does not exist."""

    def __init__(self, entity: str, entity_id: int | str, message: str | None = None):
        super().__init__(message or f"{entity} with ID {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidArgumentError(MealPlannerError):
    """Raised when a caller-supplied value violates a precondition."""

    def __init__(self, message: str, argument: str | None = None):
        super().__init__(message)
        self.argument = argument


class ConflictError(MealPlannerError):
    """Raised when a change would break a uniqueness or reference rule."""
