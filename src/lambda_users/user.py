from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lambda_users.errors import UserError, UserErrorKind
from lambda_users.store import ConditionFailed, PutCondition, StoreError, UserStore
from lambda_users.validators import is_email_valid


class User(BaseModel):
    """A user as stored in the table and exchanged over the API.

    Missing fields decode to empty strings and unknown fields are ignored,
    so an update body that omits a name clears it.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane.doe@example.com",
                "firstName": "Jane",
                "lastName": "Doe",
            }
        },
    )

    email: str = Field("", description="Unique identifier of the user (table partition key).")
    first_name: str = Field("", alias="firstName", description="Given name.")
    last_name: str = Field("", alias="lastName", description="Family name.")

    def to_item(self) -> dict:
        """Flat attribute map written to DynamoDB."""
        return self.model_dump(by_alias=True)


def fetch_user(email: str, table_name: str, store: UserStore) -> Optional[User]:
    """Point lookup by email. Returns ``None`` when there is no such user."""
    try:
        item = store.get(table_name, email)
    except StoreError as e:
        raise UserError(UserErrorKind.FETCH_FAILED) from e
    if item is None:
        return None
    try:
        return User.model_validate(item)
    except ValidationError as e:
        raise UserError(UserErrorKind.FETCH_FAILED) from e


def fetch_users(table_name: str, store: UserStore) -> List[User]:
    """Every user in the table, in whatever order the scan returns them."""
    try:
        items = store.scan(table_name)
    except StoreError as e:
        raise UserError(UserErrorKind.FETCH_FAILED) from e
    try:
        return [User.model_validate(item) for item in items]
    except ValidationError as e:
        raise UserError(UserErrorKind.FETCH_FAILED) from e


def create_user(
    body: Union[str, bytes, None],
    table_name: str,
    store: UserStore,
    conditional_writes: bool = False,
) -> User:
    """
    Decode ``body``, validate the email and insert the user.

    The existence check and the put are two separate calls, so two
    concurrent creates for the same email can both succeed unless
    ``conditional_writes`` is set, in which case DynamoDB rejects the
    second put.
    """
    user = _decode_body(body)
    if not is_email_valid(user.email):
        raise UserError(UserErrorKind.INVALID_EMAIL)

    if _existing_user(user.email, table_name, store) is not None:
        raise UserError(UserErrorKind.USER_ALREADY_EXISTS)

    condition = PutCondition.MUST_NOT_EXIST if conditional_writes else None
    _put_user(user, table_name, store, condition, UserErrorKind.USER_ALREADY_EXISTS)
    return user


def update_user(
    body: Union[str, bytes, None],
    table_name: str,
    store: UserStore,
    conditional_writes: bool = False,
) -> User:
    """Overwrite every field of an existing user with the decoded ``body``."""
    user = _decode_body(body)

    if _existing_user(user.email, table_name, store) is None:
        raise UserError(UserErrorKind.USER_DOES_NOT_EXIST)

    condition = PutCondition.MUST_EXIST if conditional_writes else None
    _put_user(user, table_name, store, condition, UserErrorKind.USER_DOES_NOT_EXIST)
    return user


def delete_user(email: str, table_name: str, store: UserStore) -> None:
    """Delete by email. Deleting a user that does not exist is not an error."""
    try:
        store.delete(table_name, email)
    except StoreError as e:
        raise UserError(UserErrorKind.DELETE_FAILED) from e


def _decode_body(body):
    if body is None:
        raise UserError(UserErrorKind.INVALID_USER_DATA)
    try:
        return User.model_validate_json(body)
    except ValidationError as e:
        raise UserError(UserErrorKind.INVALID_USER_DATA) from e


def _existing_user(email, table_name, store):
    # A failed lookup counts as "no such user".
    try:
        return fetch_user(email, table_name, store)
    except UserError:
        return None


def _put_user(user, table_name, store, condition, condition_failed_kind):
    try:
        item = user.to_item()
    except ValueError as e:
        raise UserError(UserErrorKind.MARSHAL_FAILED) from e
    try:
        store.put(table_name, item, condition)
    except ConditionFailed as e:
        raise UserError(condition_failed_kind) from e
    except StoreError as e:
        raise UserError(UserErrorKind.PUT_FAILED) from e
