"""
Exception hierarchy for endurance-rpg

Scoring itself never raises: unknown activity types and anti-cheat vetoes
are normal outcomes. Errors come from the edges, i.e. malformed activity
payloads, bad game configuration and profile storage.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import json
import logging

import pydantic

logger = logging.getLogger(__name__)


class EnduranceRPGError(Exception):
    """
    Base exception for endurance-rpg

    Carries the user and, when one is involved, the activity being scored,
    so a failed webhook delivery or sync can be traced back to the Strava
    activity that triggered it. Logged on creation.

    Example:
        raise EnduranceRPGError(
            message="Failed to save game profile",
            user_id="athlete-42",
            activity_id="11872648412",
            operation="process_activity"
        )
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        activity_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.activity_id = str(activity_id) if activity_id is not None else None
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "Your activity could not be scored. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        self._log_error()

    def _log_error(self) -> None:
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # 'message' is reserved on LogRecord
            "request_id": self.request_id,
            "user_id": self.user_id,
            "activity_id": self.activity_id,
            "operation": self.operation,
            "error_context": self.context,
        }

        where = f" (activity {self.activity_id})" if self.activity_id else ""
        logger.error(
            f"{self.__class__.__name__}{where}: {self.message}",
            extra=log_data,
            exc_info=self.cause
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for CLI and API error output"""
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }
        if self.activity_id:
            data["activity_id"] = self.activity_id
        return data


class ValidationError(EnduranceRPGError):
    """
    Activity or profile payload failed validation

    Examples:
    - Strava activity missing its start date
    - Negative distance or moving time
    - Stored snapshot with a malformed tier
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context={"field": field, "value": value},
            **kwargs
        )


class ConfigurationError(EnduranceRPGError):
    """Game configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The game is not properly configured. Please contact support.",
            context={"config_key": config_key},
            **kwargs
        )


class StorageError(EnduranceRPGError):
    """Reading or writing game profiles, stats or profile files failed"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("user_message", "Your game profile is temporarily unavailable. Please try again.")
        super().__init__(message=message, **kwargs)


class RecordNotFoundError(StorageError):
    """Requested stored record does not exist"""

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(
            message=message,
            user_message=f"{record_type or 'Record'} not found.",
            context={"record_type": record_type, "record_id": record_id},
            **kwargs
        )


def wrap_external_exception(
    error: Exception,
    operation: str,
    user_id: Optional[str] = None,
    activity_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> EnduranceRPGError:
    """
    Wrap library exceptions (pydantic, json, I/O) into our exception hierarchy

    Operations starting with "load_config" map to ConfigurationError.

    Example:
        try:
            ActivityRecord.model_validate(payload)
        except pydantic.ValidationError as e:
            raise wrap_external_exception(e, operation="parse_strava_activity", activity_id=payload.get("id"))
    """
    is_config_load = operation.startswith("load_config")

    if isinstance(error, pydantic.ValidationError):
        errors = error.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        detail = first.get("msg", str(error))
        if is_config_load:
            return ConfigurationError(
                message=f"Invalid game configuration: {detail}",
                config_key=field,
                user_id=user_id,
                operation=operation,
                cause=error
            )
        return ValidationError(
            message=detail,
            field=field,
            value=first.get("input"),
            user_id=user_id,
            activity_id=activity_id,
            operation=operation,
            cause=error
        )

    elif isinstance(error, (OSError, json.JSONDecodeError)) and is_config_load:
        return ConfigurationError(
            message=f"Could not read game configuration: {str(error)}",
            user_id=user_id,
            operation=operation,
            cause=error
        )

    # OSError covers ConnectionError and TimeoutError from remote stores
    elif isinstance(error, OSError):
        return StorageError(
            message=f"{operation} failed: {str(error)}",
            user_id=user_id,
            activity_id=activity_id,
            operation=operation,
            context=context,
            cause=error
        )

    else:
        return EnduranceRPGError(
            message=f"{operation} failed: {str(error)}",
            user_id=user_id,
            activity_id=activity_id,
            operation=operation,
            context=context,
            cause=error
        )
