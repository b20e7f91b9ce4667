"""Search domain — result and facet value objects plus backend ports."""

from .models import *  # noqa: F401,F403
from .ports import *  # noqa: F401,F403
