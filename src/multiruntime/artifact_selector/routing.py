"""
Provider routing.

Every (runtime, os, arch, variant) combination resolves to exactly one
provider, together with the normalizer and selector that handle its catalog.
"""

from dataclasses import dataclass
from typing import Callable, Dict

from multiruntime.multiruntime_config import RuntimeName
from multiruntime.multiruntime_logger import MultiruntimeLogger
from multiruntime.catalog_normalizer import (
    AzulNormalizer,
    CatalogNormalizer,
    NodeIndexNormalizer,
    NodeReleaseTableNormalizer,
    official_suffix,
    unofficial_suffix,
)
from multiruntime.runtime_models import Arch, Os, Provider, TargetDescriptor
from multiruntime.artifact_selector.selector import (
    ArtifactSelector,
    FirstMatchSelector,
    VersionedListingSelector,
)


@dataclass(frozen=True)
class ProviderRoute:
    """The capabilities needed to resolve an artifact from one provider."""

    provider: Provider
    normalizer: Callable[[MultiruntimeLogger], CatalogNormalizer]
    selector: ArtifactSelector


PROVIDER_ROUTES: Dict[Provider, ProviderRoute] = {
    Provider.AZUL: ProviderRoute(Provider.AZUL, AzulNormalizer, FirstMatchSelector()),
    Provider.NODE_OFFICIAL: ProviderRoute(
        Provider.NODE_OFFICIAL, NodeReleaseTableNormalizer, VersionedListingSelector(official_suffix)
    ),
    Provider.NODE_UNOFFICIAL: ProviderRoute(
        Provider.NODE_UNOFFICIAL, NodeIndexNormalizer, VersionedListingSelector(unofficial_suffix)
    ),
}


def route(runtime: RuntimeName, target: TargetDescriptor) -> ProviderRoute:
    """
    Pick the provider that serves {runtime} builds for {target}.

    Java always comes from Azul. Node.js comes from the unofficial builds for
    musl Linux and for Windows on ARM64, and from nodejs.org otherwise.
    """
    if runtime == RuntimeName.JAVA:
        return PROVIDER_ROUTES[Provider.AZUL]

    if (target.os == Os.LINUX and target.is_musl) or (target.os == Os.WINDOWS and target.arch == Arch.ARM64):
        return PROVIDER_ROUTES[Provider.NODE_UNOFFICIAL]
    return PROVIDER_ROUTES[Provider.NODE_OFFICIAL]
