#middleware/response_middleware
from flask import request, jsonify, make_response
from typing import Dict, Optional, Any
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class ResponseMiddleware:

    @staticmethod
    def create_error_response(message: str, status_code: int = 400, details: Optional[Dict] = None,
                              error_type: str = None):
        """
        Unified error response with consistent format
        """
        error_data = {
            'status': 'error',
            'error': message,
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'path': request.path,
            'method': request.method
        }

        if error_type:
            error_data['type'] = error_type

        if details:
            error_data['details'] = details

        return make_response(jsonify(error_data), status_code)

    @staticmethod
    def create_success_response(data: Any, message: str = "Success", status_code: int = 200):
        """
        Unified success response with consistent format
        """
        response_data = {
            'status': 'success',
            'message': message,
            'data': data,
            'timestamp': datetime.now(timezone.utc).isoformat()
        }

        return make_response(jsonify(response_data), status_code)


response_middleware = ResponseMiddleware()
