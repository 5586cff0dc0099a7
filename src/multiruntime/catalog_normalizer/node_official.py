"""
Normalizer for the nodejs.org release table (HTML).

The page lists one release per row of ``table#tbVersions``; cells are
identified by their ``data-label`` attribute rather than their position. The
page changes shape from time to time, so everything that depends on its markup
lives in this module.
"""

import logging
from html.parser import HTMLParser
from typing import Dict, List, Optional, Tuple

from multiruntime.multiruntime_exceptions import MalformedCatalog
from multiruntime.runtime_models import Catalog, Provider
from multiruntime.catalog_normalizer.base import CatalogNormalizer
from multiruntime.catalog_normalizer.node_files import OFFICIAL_SUFFIXES, archive_extension

RELEASE_URL_TEMPLATE = "https://nodejs.org/download/release/v{version}/node-v{version}-{suffix}"


class ReleaseTableParser(HTMLParser):
    """
    Collects the ``data-label`` cells of every body row of one table.

    ``<tbody>`` and the end tags of cells and rows are optional in HTML: any
    row outside ``<thead>`` is a body row, and an open cell or row is closed
    by the next one or by the end of its table section.
    """

    def __init__(self, table_id: str):
        super().__init__(convert_charrefs=True)
        self.table_id = table_id
        self.found_table = False
        self.rows: List[Dict[str, str]] = []
        self._table_depth = 0
        self._in_head = False
        self._row: Optional[Dict[str, str]] = None
        self._label: Optional[str] = None
        self._text: Optional[List[str]] = None

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if tag == "table":
            if self._table_depth:
                self._table_depth += 1
            elif dict(attrs).get("id") == self.table_id:
                self.found_table = True
                self._table_depth = 1
            return
        if self._table_depth != 1:
            return

        if tag == "thead":
            self._end_row()
            self._in_head = True
        elif tag in ("tbody", "tfoot"):
            self._end_row()
            self._in_head = False
        elif tag == "tr":
            self._end_row()
            if not self._in_head:
                self._row = {}
        elif tag in ("td", "th"):
            self._end_cell()
            if self._row is not None:
                self._label = dict(attrs).get("data-label")
                self._text = []

    def handle_endtag(self, tag: str) -> None:
        if tag == "table" and self._table_depth:
            if self._table_depth == 1:
                self._end_row()
            self._table_depth -= 1
            return
        if self._table_depth != 1:
            return

        if tag in ("td", "th"):
            self._end_cell()
        elif tag == "tr":
            self._end_row()
        elif tag == "thead":
            self._in_head = False
        elif tag in ("tbody", "tfoot"):
            self._end_row()

    def handle_data(self, data: str) -> None:
        if self._text is not None:
            self._text.append(data)

    def _end_cell(self) -> None:
        if self._text is not None and self._label is not None and self._row is not None:
            text = " ".join("".join(self._text).split())
            self._row[self._label.strip()] = text.replace("Node.js", "").strip()
        self._label = None
        self._text = None

    def _end_row(self) -> None:
        self._end_cell()
        if self._row is not None:
            self.rows.append(self._row)
            self._row = None


class NodeReleaseTableNormalizer(CatalogNormalizer):
    """
    Normalizes the official release table. The table carries no URLs; one
    artifact per official platform suffix is synthesized for every release.
    """

    provider = Provider.NODE_OFFICIAL

    def normalize(self, raw: str) -> Catalog:
        parser = ReleaseTableParser("tbVersions")
        parser.feed(raw)
        parser.close()
        if not parser.found_table:
            raise MalformedCatalog("nodejs.org release listing has no tbVersions table")

        catalog = []
        for row in parser.rows:
            version = row.get("Version", "")
            if not version:
                self.logger.log(f"Skipping release row without a version: {row}", logging.DEBUG)
                continue
            version = version.lstrip("vV")
            tags = ("lts",) if row.get("LTS") else ()

            for (os_name, arch), suffix in OFFICIAL_SUFFIXES.items():
                artifact = self.build_artifact(
                    version=version,
                    url=RELEASE_URL_TEMPLATE.format(version=version, suffix=suffix),
                    os=os_name,
                    arch=arch,
                    tags=tags,
                    extension=archive_extension(suffix),
                    suffix=suffix,
                )
                if artifact is None:
                    break
                catalog.append(artifact)
        return catalog
