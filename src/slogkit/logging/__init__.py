"""Standard library logging integration.

Routes ``logging`` records through slogkit encoders.
"""

from slogkit.logging.config import configure_logging
from slogkit.logging.handlers import SlogkitHandler, from_stdlib_level, to_stdlib_level

__all__ = [
    "SlogkitHandler",
    "configure_logging",
    "from_stdlib_level",
    "to_stdlib_level",
]
