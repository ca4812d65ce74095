"""Authentication and authorization.

Learn: Cookie-based sessions backed by signed JWTs:
1. Register / login → bcrypt check → signed token in an HTTP-only cookie
2. Every protected request → session gate verifies the cookie
3. Task and profile handlers → ownership check against the principal
"""
