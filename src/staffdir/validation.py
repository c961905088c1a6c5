"""
Configuration validation for the employee directory.

Checks run once at startup so misconfiguration shows up in the logs before
the first request does.
"""

from __future__ import annotations

from typing import Any

from .config import is_production, settings
from .database.connection import check_database_connection
from .logging import get_logger

logger = get_logger(__name__)


class ValidationError(Exception):
    """Raised when application validation fails."""

    pass


def _results(**info: Any) -> dict[str, Any]:
    return {"valid": True, "warnings": [], "errors": [], **info}


async def validate_database_connection() -> dict[str, Any]:
    """Validate that the database is accessible and responsive."""
    results = _results(connection_info=None)

    success, error_message = await check_database_connection()

    if success:
        results["connection_info"] = {
            "status": "connected",
            "message": "Database connection successful",
        }
        logger.info("Database connection validation successful")
    else:
        results["valid"] = False
        results["errors"].append(error_message)
        logger.error("Database connection validation failed", error=error_message)

    return results


def validate_auth_configuration() -> dict[str, Any]:
    """
    Validate authentication configuration.

    A missing signing secret is an error: tokens can neither be issued nor
    verified without it.
    """
    results = _results(
        auth_info={
            "algorithm": settings.jwt_algorithm,
            "enforced": settings.auth_enforced,
            "token_expiry_hours": settings.jwt_expiry_hours,
        }
    )

    if not settings.jwt_secret:
        error = "JWT secret not configured (set STAFFDIR_JWT_SECRET)"
        results["errors"].append(error)
        results["valid"] = False
        logger.error(error)
    elif len(settings.jwt_secret) < 32:
        results["warnings"].append("JWT secret is shorter than 32 characters")

    if not settings.auth_enforced:
        warning = "Employee operations are open to unauthenticated callers"
        if is_production():
            warning += " in production - this is a security risk!"
        results["warnings"].append(warning)
        logger.warning(warning)

    return results


def validate_media_configuration() -> dict[str, Any]:
    """Validate that the configured media store can be built."""
    from .media.factory import create_media_store

    results = _results(media_info={"provider": settings.media_provider})

    try:
        store = create_media_store()
    except (ValueError, ImportError) as e:
        results["valid"] = False
        results["errors"].append(f"Media store misconfigured: {e}")
        logger.error("Media store validation failed", error=str(e))
        return results

    results["media_info"]["store"] = store.name
    results["media_info"]["folder"] = settings.media_folder
    logger.info("Media store validation successful", store=store.name)
    return results


async def validate_startup_configuration() -> dict[str, Any]:
    """Run every startup check and combine the results."""
    logger.info("Starting application configuration validation")

    db_results = await validate_database_connection()
    auth_results = validate_auth_configuration()
    media_results = validate_media_configuration()
    sections = {"database": db_results, "auth": auth_results, "media": media_results}

    combined_results: dict[str, Any] = {
        "overall_valid": all(section["valid"] for section in sections.values()),
        **sections,
        "environment": {
            "environment": settings.environment,
            "debug": settings.debug,
            "media_provider": settings.media_provider,
        },
    }

    all_errors = [e for section in sections.values() for e in section["errors"]]
    all_warnings = [w for section in sections.values() for w in section["warnings"]]

    if combined_results["overall_valid"]:
        logger.info("Application configuration validation completed successfully")
    else:
        logger.error("Application configuration validation failed", errors=all_errors)

    if all_warnings:
        logger.warning("Configuration warnings detected", warnings=all_warnings)

    return combined_results


def get_startup_recommendations(validation_results: dict[str, Any]) -> list[str]:
    """Generate startup recommendations based on validation results."""
    recommendations = []

    if not validation_results.get("database", {}).get("valid", False):
        recommendations.append(
            "Database connection failed - check that the database is running and accessible"
        )

    if not validation_results.get("auth", {}).get("valid", False):
        recommendations.append("Set STAFFDIR_JWT_SECRET before accepting signups or logins")

    media_info = validation_results.get("media", {}).get("media_info", {})
    if media_info.get("provider") == "local" and is_production():
        recommendations.append("Use the s3 media provider for production deployments")

    if not validation_results.get("overall_valid", False):
        recommendations.append("Fix configuration errors before deploying to production")

    return recommendations
