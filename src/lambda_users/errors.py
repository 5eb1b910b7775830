from enum import Enum


class UserErrorKind(Enum):
    """Every way a user operation can fail, with the message sent to clients."""

    INVALID_USER_DATA = "Invalid user data"
    INVALID_EMAIL = "Invalid email"
    USER_ALREADY_EXISTS = "User already exists"
    USER_DOES_NOT_EXIST = "User does not exist"
    MARSHAL_FAILED = "Could not marshal item"
    FETCH_FAILED = "Failed to fetch record"
    PUT_FAILED = "Could not dynamo put item"
    DELETE_FAILED = "Could not delete item"
    METHOD_NOT_ALLOWED = "Method not allowed"

    @property
    def message(self) -> str:
        return self.value


class UserError(Exception):
    """Raised by the user service; the API layer turns it into a response."""

    def __init__(self, kind: UserErrorKind):
        super().__init__(kind.message)
        self.kind = kind

    def __repr__(self):
        return f"UserError({self.kind.name})"
