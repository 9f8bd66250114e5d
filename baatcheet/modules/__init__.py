"""
Modules package initialization.
This package contains all the functional modules of the application.
"""

from baatcheet.modules import auth
from baatcheet.modules import user_management
from baatcheet.modules import friendships
from baatcheet.modules import posts
