"""
Normalizer for the Azul Zulu bundle listing (flat JSON record array).
"""

import logging
from typing import Dict, Optional, Tuple

from pydantic import ValidationError

from multiruntime.multiruntime_logger import MultiruntimeLogger
from multiruntime.runtime_models import Arch, AzulBundle, Catalog, Os, Provider
from multiruntime.catalog_normalizer.base import CatalogNormalizer

# (cpu family, hardware bitness) -> architecture. Pairs missing here are
# dropped from the catalog.
AZUL_ARCHITECTURES: Dict[Tuple[str, str], Arch] = {
    ("x86", "64"): Arch.X86_64,
    ("arm", "64"): Arch.ARM64,
    ("arm", "32"): Arch.ARMV7,
}


def azul_os(os_name: str) -> Optional[Os]:
    """Map the free-text OS field of a bundle, e.g. "linux_musl" or "macos"."""
    os_name = os_name.lower()
    if os_name == "windows":
        return Os.WINDOWS
    if "linux" in os_name:
        return Os.LINUX
    if os_name in ("macos", "mac", "macosx"):
        return Os.MAC
    return None


class AzulNormalizer(CatalogNormalizer):
    """
    Normalizes the Azul bundle records. Records already carry os, arch,
    bitness, extension and version; the listing order is kept.
    """

    provider = Provider.AZUL

    def __init__(self, logger: MultiruntimeLogger, architectures: Optional[Dict[Tuple[str, str], Arch]] = None):
        super().__init__(logger)
        self.architectures = AZUL_ARCHITECTURES if architectures is None else architectures

    def normalize(self, raw: str) -> Catalog:
        catalog = []
        for record in self.load_json_array(raw):
            try:
                bundle = AzulBundle.model_validate(record)
            except ValidationError as e:
                self.logger.log(f"Skipping malformed Azul record: {e}", logging.DEBUG)
                continue

            os_name = azul_os(bundle.os)
            arch = self.architectures.get((bundle.arch.lower(), bundle.hw_bitness))
            if os_name is None or arch is None:
                continue

            tags = []
            if bundle.latest:
                tags.append("latest")
            if (bundle.support_term or "").lower() == "lts":
                tags.append("lts")

            artifact = self.build_artifact(
                version=bundle.version_label,
                url=bundle.url,
                os=os_name,
                arch=arch,
                musl="musl" in bundle.os.lower(),
                tags=tuple(tags),
                extension=bundle.ext,
                bitness=bundle.hw_bitness,
                features=tuple(bundle.features),
            )
            if artifact is not None:
                catalog.append(artifact)
        return catalog
