"""
Services Layer

Business logic services that:
- Accept domain inputs (usernames, DTOs, repositories)
- Return ServiceResult pairs of status and DTO payload
- Do NOT depend on FastAPI request/response objects
- Raise UserServiceError subclasses instead of HTTP errors
"""
