"""
Handlers.

HTTP route handlers. Each returns the {"success": ..., "data": ...}
envelope; failures are raised and rendered by the error middleware.
"""
