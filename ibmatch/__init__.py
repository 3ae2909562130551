# Export the public matching API for easy imports
from .logic import *  # noqa: F401,F403
from .logic import __all__
