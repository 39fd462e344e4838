"""HTTP middleware: timeout, request size limit, request ID, security headers.

Applied in main app; order matters (first added = outermost).
Import and use from sikap.main.
"""

from sikap.middleware.request_id import RequestIDMiddleware
from sikap.middleware.request_size_limit import RequestSizeLimitMiddleware
from sikap.middleware.security_headers import SecurityHeadersMiddleware
from sikap.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
