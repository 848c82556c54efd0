"""
Services.

Business logic layer between the HTTP handlers and the contract gateway.
"""
