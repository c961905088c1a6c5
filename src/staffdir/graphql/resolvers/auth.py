"""Resolvers for signup and login."""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError

from ...auth.passwords import hash_password, reject_password, verify_password
from ...auth.tokens import get_token_service
from ...database.connection import get_async_session
from ...dbmodels import Users
from ...logging import get_logger
from ..types.responses import AuthPayload, FieldError
from ..types.user import User
from ..validators import validate

if TYPE_CHECKING:
    from ..mutations.root import SignupInput
    from ..queries.root import LoginInput

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
USER_EXISTS = "Username or email already exists"


async def login(info: strawberry.Info, input: LoginInput) -> AuthPayload:
    """
    Exchange a username or email plus password for a fresh token.

    Unknown accounts and wrong passwords produce the same response.
    """
    violations = validate(
        "login", {"usernameOrEmail": input.username_or_email, "password": input.password}
    )
    if violations:
        return AuthPayload(
            success=False,
            message="Validation failed",
            errors=FieldError.from_violations(violations),
        )

    async with get_async_session() as session:
        stmt = (
            select(Users)
            .where(
                or_(
                    Users.username == input.username_or_email,
                    Users.email == input.username_or_email,
                )
            )
            .limit(1)
        )
        user = (await session.execute(stmt)).scalars().first()

    if user is None:
        verified = await reject_password(input.password)
    else:
        verified = await verify_password(input.password, user.password)

    if not verified:
        logger.info("Login rejected")
        return AuthPayload(success=False, message=INVALID_CREDENTIALS)

    token = get_token_service().issue_token(user)
    logger.info("User logged in", user_id=str(user.id))
    return AuthPayload(
        success=True,
        message="Login successful",
        token=token,
        user=User.from_model(user),
    )


async def signup(info: strawberry.Info, input: SignupInput) -> AuthPayload:
    """Create an account and return a token for it."""
    violations = validate(
        "signup",
        {"username": input.username, "email": input.email, "password": input.password},
    )
    if violations:
        return AuthPayload(
            success=False,
            message="Validation failed",
            errors=FieldError.from_violations(violations),
        )

    async with get_async_session() as session:
        stmt = (
            select(Users.id)
            .where(or_(Users.username == input.username, Users.email == input.email))
            .limit(1)
        )
        if (await session.execute(stmt)).first() is not None:
            return AuthPayload(success=False, message=USER_EXISTS)

        user = Users(
            username=input.username,
            email=input.email,
            password=await hash_password(input.password),
        )
        session.add(user)
        try:
            await session.flush()
        except IntegrityError:
            # Lost a race with a concurrent signup; the unique constraint decides
            await session.rollback()
            logger.info("Signup conflict on unique constraint", username=input.username)
            return AuthPayload(success=False, message=USER_EXISTS)

    token = get_token_service().issue_token(user)
    logger.info("User signed up", user_id=str(user.id))
    return AuthPayload(
        success=True,
        message="Signup successful",
        token=token,
        user=User.from_model(user),
    )
