"""
API Initialization Module.

This module contains all initialization logic split into focused modules:
- services: Service construction and registration on the app
- routes: Route registration and CORS
"""

__all__ = []
