from member_grid.clients.members_sdk.errors import ApiError


class ErrorMapper:
    _KNOWN_CODES = {
        "NETWORK_ERROR": ("The members API is unreachable.", "Check the network connection and try again."),
        "TIMEOUT_ERROR": ("The members API took too long to answer.", "Retry the action."),
        "app.team.remove_member.group_constrained.app_error": (
            "This member is managed by a synced group.",
            "Remove the member from the linked group instead.",
        ),
        "store.sql_user.missing_account.const": ("The member no longer exists.", "Reload the member list."),
    }

    _STATUS_HINTS = {
        401: ("SESSION_EXPIRED", "The session is no longer valid.", "Sign in again."),
        403: ("PERMISSION_DENIED", "You are not allowed to change this membership.", "Ask a system admin for permissions."),
        404: ("NOT_FOUND", "The member or container was not found.", "Reload the member list."),
        500: ("INTERNAL_ERROR", "The members API failed.", "Retry and share the request_id if it persists."),
    }

    @classmethod
    def to_payload(cls, error: Exception) -> dict:
        if isinstance(error, ApiError):
            status_code = error.status_code or -1
            mapped = cls._STATUS_HINTS.get(status_code)
            if mapped is None and status_code >= 500:
                mapped = cls._STATUS_HINTS[500]
            if mapped is not None:
                code, message, suggestion = mapped
            else:
                message, suggestion = cls._KNOWN_CODES.get(
                    error.code,
                    (error.message, "Contact support with the request_id."),
                )
                code = error.code
            return {
                "code": code,
                "message": message,
                "details": error.details,
                "trace_id": error.trace_id,
                "suggestion": suggestion,
            }
        return {
            "code": "INTERNAL_ERROR",
            "message": str(error),
            "details": None,
            "trace_id": None,
            "suggestion": "Retry and report the incident if it persists.",
        }

    @classmethod
    def to_display_message(cls, error: Exception) -> str:
        payload = cls.to_payload(error)
        return f"[{payload['code']}] {payload['message']} (request_id={payload['trace_id']})"
