"""
density-finder
==============
ASTM D 1250 / IP 200 Table 53: reduction of observed density to density at 15°C.

Modules:
    reference_grid      - Hardcoded anchor table (density x temperature)
    correlation         - Domain check and bilinear interpolation
    table_materializer  - Full paginated table, CSV export
    extracted_text      - Plain-text rendering of table pages
    visualization       - Correction surface charts (matplotlib + plotly)
    config              - Global constants and defaults
"""

from .correlation import CorrelationEngine, DomainError, correlate
from .extracted_text import ExtractedPage, text_renderings
from .reference_grid import TABLE_53, NotFoundError, ReferenceGrid
from .table_materializer import TableMaterializer, TablePage, materialized_pages

__version__ = "0.1.0"
