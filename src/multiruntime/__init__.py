"""
multiruntime resolves, downloads and unpacks language runtimes (JDKs, Node.js)
for a target platform.
"""

from .multiruntime_config import MultiruntimeConfig, RuntimeName
from .multiruntime_logger import MultiruntimeLogger
from .multiruntime_utils import PlatformUtils
from .runtime_models import TargetDescriptor
from .executors import RuntimeExecutor

__all__ = [
    "MultiruntimeConfig",
    "MultiruntimeLogger",
    "PlatformUtils",
    "RuntimeExecutor",
    "RuntimeName",
    "TargetDescriptor",
]
