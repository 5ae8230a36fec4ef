"""
Response envelope for the profiles API.

Every JSON body leaving the API has the shape:
{
    "status": "success" | "error",
    "message": "user-facing notice or empty",
    "data": {...} | [] | null
}

Redirect responses (302) carry no JSON body and are passed through untouched.
"""
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status as http_status
from rest_framework.renderers import JSONRenderer


def custom_exception_handler(exc, context):
    """
    Let DRF build the error response, then wrap its payload in the envelope.
    """
    response = exception_handler(exc, context)

    if response is not None:
        response.data = format_error_response(response.data, response.status_code)

    return response


def format_error_response(errors, status_code):
    """
    Flatten DRF / Django error payloads into a single message.

    - {"label": ["This field is required."]} -> "label: This field is required."
    - {"detail": "Not found."} -> "Not found."
    - ["a", "b"] -> "a, b"
    """
    message = ""

    if isinstance(errors, dict):
        parts = []
        for field, field_errors in errors.items():
            if field == 'detail':
                message = str(field_errors)
            elif isinstance(field_errors, list):
                parts.append(f"{field}: {', '.join(str(e) for e in field_errors)}")
            elif isinstance(field_errors, dict):
                parts.append(f"{field}: {format_nested_errors(field_errors)}")
            else:
                parts.append(f"{field}: {field_errors}")

        if parts:
            message = "; ".join(parts)

    elif isinstance(errors, list):
        message = ", ".join(str(e) for e in errors)

    else:
        message = str(errors)

    return {
        "status": "error",
        "message": message,
        "data": errors if isinstance(errors, dict) and 'detail' not in errors else None
    }


def format_nested_errors(errors_dict):
    """Format nested error dictionaries."""
    messages = []
    for key, value in errors_dict.items():
        if isinstance(value, list):
            messages.append(f"{key}: {', '.join(str(v) for v in value)}")
        elif isinstance(value, dict):
            messages.append(f"{key}: {format_nested_errors(value)}")
        else:
            messages.append(f"{key}: {value}")
    return "; ".join(messages)


class StandardizedJSONRenderer(JSONRenderer):
    """
    JSON renderer that wraps bodies not already in the envelope.
    """

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = renderer_context.get('response') if renderer_context else None

        # 204 No Content has no body
        if response is not None and response.status_code == 204:
            return b''

        if response is not None and not self.is_already_formatted(data):
            if response.status_code >= 400:
                data = format_error_response(data, response.status_code)
            else:
                data = self.format_success_response(data)

        return super().render(data, accepted_media_type, renderer_context)

    def is_already_formatted(self, data):
        return isinstance(data, dict) and {'status', 'message', 'data'} <= set(data)

    def format_success_response(self, data):
        if isinstance(data, dict) and 'detail' in data:
            return {"status": "success", "message": str(data['detail']), "data": None}
        if data is None or (isinstance(data, dict) and not data):
            return {"status": "success", "message": "", "data": None}
        return {"status": "success", "message": "", "data": data}


def success_response(data=None, message="", status_code=http_status.HTTP_200_OK):
    """
    Build an enveloped success response.

    Usage:
        return success_response(
            data=ProfileTypeSerializer(profile_type).data,
            message="Personal data profile type has been created.",
            status_code=status.HTTP_201_CREATED
        )
    """
    return Response({
        "status": "success",
        "message": message,
        "data": data
    }, status=status_code)


def error_response(message, data=None, status_code=http_status.HTTP_400_BAD_REQUEST):
    """Build an enveloped error response."""
    return Response({
        "status": "error",
        "message": message,
        "data": data
    }, status=status_code)


def validation_error_response(exc, status_code=http_status.HTTP_400_BAD_REQUEST):
    """
    Convert a django ValidationError raised by a service into a 400 response.

    Field errors are kept in ``data`` so clients can attach them to inputs.
    """
    if hasattr(exc, 'message_dict'):
        detail = exc.message_dict
        message = format_error_response(detail, status_code)['message']
    else:
        detail = None
        message = "; ".join(exc.messages) if hasattr(exc, 'messages') else str(exc)
    return error_response(message, data=detail, status_code=status_code)
