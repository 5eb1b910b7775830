import logging
from functools import lru_cache
from typing import List, Optional, Union

import boto3
from fastapi import Depends, FastAPI, Path, Query, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lambda_users.config import Settings, get_settings
from lambda_users.errors import UserError, UserErrorKind
from lambda_users.logging_config import setup_logging
from lambda_users.store import DynamoUserStore, UserStore
from lambda_users.user import User, create_user, delete_user, fetch_user, fetch_users, update_user

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    UserErrorKind.INVALID_USER_DATA: 400,
    UserErrorKind.INVALID_EMAIL: 400,
    UserErrorKind.USER_ALREADY_EXISTS: 409,
    UserErrorKind.USER_DOES_NOT_EXIST: 404,
    UserErrorKind.MARSHAL_FAILED: 500,
    UserErrorKind.FETCH_FAILED: 500,
    UserErrorKind.PUT_FAILED: 500,
    UserErrorKind.DELETE_FAILED: 500,
    UserErrorKind.METHOD_NOT_ALLOWED: 405,
}


@lru_cache
def get_store() -> UserStore:
    """DynamoDB-backed store, created once per Lambda container."""
    settings = get_settings()
    dynamodb = boto3.resource(
        'dynamodb',
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url,
    )
    return DynamoUserStore(dynamodb)


async def raw_body(request: Request) -> bytes:
    # Create and update decode the body themselves.
    return await request.body()


setup_logging(get_settings().log_level)

#FastAPI Application
app = FastAPI(
    title="Users API",
    description="Create, read, update and delete users stored in DynamoDB.",
    version="1.0.0"
)


@app.exception_handler(UserError)
async def user_error_handler(request: Request, exc: UserError):
    status_code = ERROR_STATUS_CODES[exc.kind]
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.kind.name, exc_info=exc.__cause__)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.kind.name)
    return JSONResponse(status_code=status_code, content={"error": exc.kind.message})


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    response = await user_error_handler(request, UserError(UserErrorKind.METHOD_NOT_ALLOWED))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


@app.get("/")
def read_root():
    """A simple root endpoint to confirm API is running."""
    return {"message": "Welcome to the Users API."}


@app.get(
    "/users",
    response_model=Union[User, List[User]],
    summary="List every user, or fetch one with ?email=",
    tags=["Users"]
)
def get_users(
    email: Optional[str] = Query(None, description="Return only the user with this email."),
    settings: Settings = Depends(get_settings),
    store: UserStore = Depends(get_store),
):
    """
    Without ``email`` this scans the whole table in a single call, so very
    large tables come back truncated at DynamoDB's page size.
    """
    if email:
        return _get_one(email, settings, store)
    logger.info("Fetching all users from %s", settings.dynamodb_table_name)
    return fetch_users(settings.dynamodb_table_name, store)


@app.get(
    "/users/{email}",
    response_model=User,
    summary="Fetch a single user",
    tags=["Users"]
)
def get_user(
    email: str = Path(..., description="Email of the user to fetch."),
    settings: Settings = Depends(get_settings),
    store: UserStore = Depends(get_store),
):
    return _get_one(email, settings, store)


@app.post("/users", response_model=User, status_code=201, summary="Create a user", tags=["Users"])
def post_user(
    body: bytes = Depends(raw_body),
    settings: Settings = Depends(get_settings),
    store: UserStore = Depends(get_store),
):
    user = create_user(body, settings.dynamodb_table_name, store, settings.conditional_writes)
    logger.info("Created user %s", user.email)
    return user


@app.put("/users", response_model=User, summary="Replace an existing user", tags=["Users"])
def put_user(
    body: bytes = Depends(raw_body),
    settings: Settings = Depends(get_settings),
    store: UserStore = Depends(get_store),
):
    user = update_user(body, settings.dynamodb_table_name, store, settings.conditional_writes)
    logger.info("Updated user %s", user.email)
    return user


@app.delete("/users/{email}", summary="Delete a user", tags=["Users"])
def delete_user_by_path(
    email: str = Path(..., description="Email of the user to delete."),
    settings: Settings = Depends(get_settings),
    store: UserStore = Depends(get_store),
):
    return _delete(email, settings, store)


@app.delete("/users", summary="Delete a user given as ?email=", tags=["Users"])
def delete_user_by_query(
    email: str = Query(..., min_length=1, description="Email of the user to delete."),
    settings: Settings = Depends(get_settings),
    store: UserStore = Depends(get_store),
):
    return _delete(email, settings, store)


def _get_one(email, settings, store):
    logger.info("Fetching user %s", email)
    user = fetch_user(email, settings.dynamodb_table_name, store)
    if user is None:
        raise UserError(UserErrorKind.USER_DOES_NOT_EXIST)
    return user


def _delete(email, settings, store):
    logger.info("Deleting user %s", email)
    delete_user(email, settings.dynamodb_table_name, store)
    return None
