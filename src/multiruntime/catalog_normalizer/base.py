"""
Base class of the provider-specific catalog normalizers.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from pydantic import ValidationError

from multiruntime.multiruntime_exceptions import MalformedCatalog
from multiruntime.multiruntime_logger import MultiruntimeLogger
from multiruntime.runtime_models import Artifact, Catalog, Provider


class CatalogNormalizer(ABC):
    """
    Turns the raw catalog of one provider into an ordered list of Artifacts.

    A top-level structure that cannot be parsed is fatal for the whole catalog
    (MalformedCatalog); a single malformed record is skipped and logged.
    """

    provider: Provider

    def __init__(self, logger: MultiruntimeLogger):
        self.logger = logger

    @abstractmethod
    def normalize(self, raw: str) -> Catalog:
        """
        Args:
            raw: The catalog text as returned by the fetcher

        Returns:
            Artifacts in provider order

        Raises:
            MalformedCatalog: If the top-level structure cannot be parsed
        """

    def load_json_array(self, raw: str) -> List[Any]:
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise MalformedCatalog(f"{self.provider.value} catalog is not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise MalformedCatalog(
                f"{self.provider.value} catalog must be a JSON array, got {type(data).__name__}"
            )
        return data

    def build_artifact(self, **fields: Any) -> Optional[Artifact]:
        try:
            return Artifact(provider=self.provider, **fields)
        except ValidationError as e:
            self.logger.log(f"Skipping {self.provider.value} artifact {fields.get('url')}: {e}", logging.DEBUG)
            return None
