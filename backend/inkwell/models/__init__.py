# Importing every model registers its table on Base.metadata
from inkwell.models.user import User
from inkwell.models.post import Post
from inkwell.models.liked import Liked

__all__ = ["User", "Post", "Liked"]
