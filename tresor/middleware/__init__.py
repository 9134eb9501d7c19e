"""HTTP middleware: timeout, request size limit, request ID.

Applied in main app; order matters (first added = outermost).
"""

from tresor.middleware.request_id import RequestIDMiddleware
from tresor.middleware.request_size_limit import RequestSizeLimitMiddleware
from tresor.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "TimeoutMiddleware",
]
