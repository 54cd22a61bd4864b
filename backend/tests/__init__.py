# Force SQLModel table registration at test discovery time
# This ensures the users table is registered before any test database creation
from app.models.user import User  # noqa: F401
