# smarttravel/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- cookies: Signed session cookie set/read/clear
- db: Database configuration and connection management
- errors: Error taxonomy and JSON error responses
- security: Password hashing and session token service
"""
