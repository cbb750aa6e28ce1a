"""Domain layer errors.

Every error carries structured attributes so the boundary layer can map it
to a response without parsing the message.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when an actor lacks permission for the requested mutation."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class SelfVoteError(DomainError):
    """Raised when an author votes on their own content."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(f"User {user_id} cannot vote on their own {resource}")


class DuplicateAnswerError(DomainError):
    """Raised when an author answers the same question twice."""

    def __init__(self, question_id: str, user_id: str, existing_answer_id: str):
        self.question_id = question_id
        self.user_id = user_id
        self.existing_answer_id = existing_answer_id
        super().__init__(
            f"User {user_id} has already answered question {question_id}"
        )


class MismatchError(DomainError):
    """Raised when two entities that must be linked are not."""

    def __init__(self, resource: str, resource_id: str, expected_parent: str):
        self.resource = resource
        self.resource_id = resource_id
        self.expected_parent = expected_parent
        super().__init__(f"{resource} {resource_id} does not belong to {expected_parent}")


class ConflictError(DomainError):
    """Raised when a concurrent writer changed an entity first."""

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} was modified concurrently")


class TransientStoreError(DomainError):
    """Raised when the backing store is temporarily unavailable (retryable)."""

    def __init__(self, message: str = "Backing store temporarily unavailable"):
        super().__init__(message)
