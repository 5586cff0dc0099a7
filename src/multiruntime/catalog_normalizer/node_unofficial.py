"""
Normalizer for the unofficial-builds Node.js release index (indexed JSON array).
"""

import logging
from typing import Dict, Tuple

from pydantic import ValidationError

from multiruntime.runtime_models import Arch, Catalog, NodeRelease, Os, Provider
from multiruntime.catalog_normalizer.base import CatalogNormalizer
from multiruntime.catalog_normalizer.node_files import UNOFFICIAL_SUFFIXES, archive_extension

RELEASE_URL_TEMPLATE = "https://unofficial-builds.nodejs.org/download/release/{version}/node-{version}-{file}"

_PLATFORMS: Dict[str, Tuple[Os, Arch, bool]] = {suffix: key for key, suffix in UNOFFICIAL_SUFFIXES.items()}


def file_name_suffix(file_key: str) -> str:
    """Turn an index file key into the suffix of the published file name."""
    if file_key.endswith("-zip"):
        return file_key[: -len("-zip")] + ".zip"
    return file_key + ".tar.gz"


class NodeIndexNormalizer(CatalogNormalizer):
    """
    Normalizes the unofficial index. The index is sorted newest first and that
    order is kept as-is; selection takes the first compatible entry.
    """

    provider = Provider.NODE_UNOFFICIAL

    def normalize(self, raw: str) -> Catalog:
        catalog = []
        for record in self.load_json_array(raw):
            try:
                release = NodeRelease.model_validate(record)
            except ValidationError as e:
                self.logger.log(f"Skipping malformed release record: {e}", logging.DEBUG)
                continue

            tags = []
            if release.lts.is_lts:
                tags.append("lts")
            if release.security:
                tags.append("security")

            for file_key in release.files:
                if file_key not in _PLATFORMS:
                    continue
                os_name, arch, musl = _PLATFORMS[file_key]
                artifact = self.build_artifact(
                    version=release.version,
                    url=RELEASE_URL_TEMPLATE.format(version=release.version, file=file_name_suffix(file_key)),
                    os=os_name,
                    arch=arch,
                    musl=musl,
                    tags=tuple(tags),
                    extension=archive_extension(file_key),
                    suffix=file_key,
                )
                if artifact is not None:
                    catalog.append(artifact)
        return catalog
