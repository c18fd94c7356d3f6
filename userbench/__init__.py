"""
userbench - fixed-payload HTTP fixtures for load testing.
Two independent Flask apps serve GET /api/v1/users:
users_app returns 1000 synthetic records as JSON behind a permit gate,
hello_app returns a static greeting.
"""

__version__ = "1.0.0"
