"""
Centralized logging service for the store admin dashboard.
Provides structured logging with request context and easy integration.
"""

import json
import logging
import traceback
from datetime import datetime
from flask import request, has_request_context

_log = logging.getLogger('storeadmin')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        try:
            ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            if ip_address and ',' in ip_address:
                ip_address = ip_address.split(',')[0].strip()

            user_agent = request.headers.get('User-Agent', '')
            request_path = request.path

            return ip_address, user_agent, request_path
        except Exception:
            return None, None, None

    @staticmethod
    def log(level, source, message, details=None):
        """
        Log a message to the storeadmin logger

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (products, orders, health, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
        """
        try:
            ip_address, user_agent, request_path = LoggingService._get_request_context()

            if isinstance(details, dict):
                details = json.dumps(details, indent=2, default=str)

            levelno = logging.getLevelName(level.upper())
            if not isinstance(levelno, int):
                levelno = logging.INFO

            line = f"[{source}] {message}"
            if request_path:
                line += f" (path={request_path} ip={ip_address})"
            if details:
                line += f"\nDetails: {details}"

            _log.log(levelno, line, extra={
                'source': source,
                'details': details,
                'ip_address': ip_address,
                'user_agent': user_agent,
                'request_path': request_path,
            })

        except Exception as e:
            # Fallback to console logging if the logger itself fails
            print(f"[{datetime.now().isoformat()}] [{level.upper()}] [{source}] {message}")
            if details:
                print(f"Details: {details}")
            print(f"Logging service error: {e}")

    @staticmethod
    def info(source, message, details=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details)

    @staticmethod
    def warning(source, message, details=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details)

    @staticmethod
    def error(source, message, details=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details)

    @staticmethod
    def log_user_action(source, action, details=None):
        """Log staff actions (create product, delete product, order status change)"""
        LoggingService.info(source, f"User action: {action}", details)

    @staticmethod
    def log_api_call(source, endpoint, method='GET', status_code=200, details=None):
        """Log calls to the remote services"""
        message = f"API {method} {endpoint} - Status: {status_code}"
        level = 'INFO' if 200 <= status_code < 400 else 'WARNING' if status_code < 500 else 'ERROR'
        LoggingService.log(level, source, message, details)

    @staticmethod
    def log_error_with_traceback(source, message, error, details=None):
        """Log error with exception type and full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        status_code = getattr(error, 'status_code', None)
        if status_code is not None:
            error_details['status_code'] = status_code
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, message, error_details)
