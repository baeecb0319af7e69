class TaskError(Exception):
    default_message = "task error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    def with_context(self, label: str) -> "TaskError":
        return type(self)(f"{label}: {self}")


class ValidationError(TaskError, ValueError):
    default_message = "invalid task"


class EmptyTitleError(ValidationError):
    default_message = "title must not be empty"


class TitleTooLongError(ValidationError):
    default_message = "title must be at most 255 characters"


class InvalidStatusError(ValidationError):
    default_message = "invalid status"


class InvalidPriorityError(ValidationError):
    default_message = "invalid priority"


class InvalidDueDateError(ValidationError):
    default_message = "invalid due date"


class TaskNotFoundError(TaskError, LookupError):
    default_message = "task not found"


class AlreadyCompletedError(TaskError):
    default_message = "task already completed"


class InvalidFilterError(TaskError, ValueError):
    default_message = "invalid filter"


class RepositoryError(TaskError):
    default_message = "repository error"
