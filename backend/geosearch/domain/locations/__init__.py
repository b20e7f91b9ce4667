"""Location hierarchy domain — static tree, field mapping and tri-state selection."""

from .hierarchy import *  # noqa: F401,F403
from .catalog import *  # noqa: F401,F403
from .selection import *  # noqa: F401,F403
