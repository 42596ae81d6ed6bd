from app.models.manager import Manager
from app.models.user import User

__all__ = [ "Manager", "User" ]
