"""
Configuration parameters for multiruntime.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class RuntimeName(str, Enum):
    """
    Possible runtimes with multiruntime.
    """

    JAVA = "java"
    NODE = "node"

    def __str__(self) -> str:
        return self.value


@dataclass
class MultiruntimeConfig:
    """
    Configuration parameters
    """

    runtime: RuntimeName
    command: Optional[str] = None
    target: Optional[str] = None
    project_root: str = "."
    cache_directory: Optional[str] = None
    request_timeout: float = 60.0

    def __post_init__(self) -> None:
        if self.command is None:
            self.command = self.runtime.value

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "MultiruntimeConfig":
        """
        Create a MultiruntimeConfig instance from a dictionary
        """
        import inspect

        values = {k: v for k, v in env.items() if k in inspect.signature(cls).parameters}
        values["runtime"] = RuntimeName(str(values["runtime"]).lower())
        return cls(**values)
