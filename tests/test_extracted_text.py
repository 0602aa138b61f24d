"""
Tests for the plain-text page export.
"""

import re

import pytest

from density_finder.extracted_text import (
    ExtractedPage, render_page, render_pages, sample_temperatures, text_renderings,
)

DATA_ROW = re.compile(r"^\d+\.\d\s* \| ")


def data_rows(content):
    return [line for line in content.splitlines() if DATA_ROW.match(line)]


@pytest.fixture(scope="module")
def texts():
    return text_renderings()


class TestRenderings:

    def test_one_entry_per_page(self, texts, pages):
        assert len(texts) == len(pages) == 31
        assert [t.page_number for t in texts] == list(range(1, 32))
        assert all(isinstance(t, ExtractedPage) for t in texts)

    def test_sample_temperatures(self):
        assert sample_temperatures() == tuple(float(t) for t in range(0, 55, 5))

    def test_every_page_has_eleven_rows(self, texts):
        for t in texts:
            assert len(data_rows(t.content)) == 11, f"page {t.page_number}"

    def test_footer(self, texts):
        for t in texts:
            assert t.content.rstrip().endswith(f"(End of Section {t.page_number})")

    def test_render_pages_matches_default(self, texts, pages):
        assert render_pages(pages[:3]) == texts[:3]


class TestFirstPage:

    def test_header_block(self, texts):
        content = texts[0].content
        assert content.startswith("ASTM-IP PETROLEUM MEASUREMENT TABLES")
        assert "ASTM Designation: D 1250 | IP Designation: 200" in content
        assert "REDUCTION OF OBSERVED DENSITY TO DENSITY AT 15°C" in content

    def test_worked_example_is_live(self, texts):
        content = texts[0].content
        assert "Observed Density: 0.690 @ 25.0°C" in content
        assert "Correction: +0.0086" in content
        assert "Density @ 15°C: 0.6986" in content

    def test_only_first_page_has_header(self, texts):
        for t in texts[1:]:
            assert "ASTM Designation" not in t.content


class TestPageBody:

    def test_ranges(self, texts):
        content = texts[16].content
        assert "DENSITY RANGE: 0.850 TO 0.859" in content
        assert "TEMPERATURE RANGE: 0.0°C TO 50.0°C" in content

    def test_column_header(self, texts):
        content = texts[16].content
        header = next(line for line in content.splitlines() if line.startswith("Temp | "))
        assert header == "Temp | " + " | ".join(f"0.{m}" for m in range(850, 860))

    def test_values_drop_leading_zero(self, texts):
        rows = data_rows(texts[16].content)
        assert rows[3].startswith("15.0 | .8500 | .8510 | .8520")
        assert rows[0].startswith("0.0  | .8399")

    def test_out_of_range_page_flagged(self, texts):
        content = texts[24].content
        assert "NOTE: 1010 values outside the correlation range" in content
        assert data_rows(content)[0].endswith(".0000")

    def test_in_range_page_not_flagged(self, texts):
        assert "NOTE:" not in texts[5].content

    def test_render_single_page_numbering(self, pages):
        content = render_page(pages[3], 4)
        assert "(End of Section 4)" in content
        assert "ASTM Designation" not in content
