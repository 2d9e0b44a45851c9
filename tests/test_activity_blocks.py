import os
import unittest

from zaitrack.extraction.activity_blocks import extract_statuses, find_block_end, iter_activity_blocks
from zaitrack.tracking.types import TrackingEvent


FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


def _block(timestamp, status, detail=None, *, wrap_row=False, close=True):
    paragraphs = f"<p><span>{timestamp}</span> <span>{status}</span></p>"
    if detail is not None:
        paragraphs += f"<p>{detail}</p>"
    cells = (
        '<div class="tbl-cell tbl-cell-icon"><i class="fa fa-check"></i></div>'
        f'<div class="tbl-cell">{paragraphs}</div>'
    )
    if wrap_row:
        cells = f'<div class="tbl-row">{cells}</div>'
    return f'<div class="widget-activity-item clearfix">{cells}' + ("</div>" if close else "")


class TestActivityBlocks(unittest.TestCase):
    def test_fixture_page(self):
        with open(os.path.join(FIXTURES, "activity_page.html"), "r", encoding="utf-8") as f:
            html = f.read()
        events = extract_statuses(html)
        self.assertEqual(events, [TrackingEvent("12/05/2024 10:30", "En tránsito", "Bodega Santiago")])

    def test_no_blocks(self):
        self.assertEqual(extract_statuses("<html><body><p>Guía no encontrada</p></body></html>"), [])
        self.assertEqual(extract_statuses(""), [])

    def test_document_order(self):
        html = "<div>" + _block("12/05/2024 10:30", "En tránsito", "Santiago") + _block("10/05/2024 08:15", "Recibido", "Miami") + "</div>"
        events = extract_statuses(html)
        self.assertEqual([e.status for e in events], ["En tránsito", "Recibido"])
        self.assertEqual(events[1].detail, "Miami")

    def test_missing_detail_is_empty(self):
        events = extract_statuses(_block("12/05/2024", "Entregado"))
        self.assertEqual(events, [TrackingEvent("12/05/2024", "Entregado", "")])

    def test_nested_divs_do_not_end_block_early(self):
        html = _block("12/05/2024 10:30", "En tránsito", "Bodega Santiago", wrap_row=True)
        events = extract_statuses(html)
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].detail, "Bodega Santiago")

    def test_find_block_end_balances_depth(self):
        html = '<div class="widget-activity-item"><div><div></div></div></div><div>after</div>'
        opening = len('<div class="widget-activity-item">')
        self.assertEqual(find_block_end(html, opening), html.index("<div>after"))

    def test_unterminated_block_runs_to_end(self):
        html = _block("01/02/2024 08:00", "Recibido", "Miami", close=False)
        self.assertEqual(find_block_end(html, html.index(">") + 1), len(html))
        self.assertEqual(list(iter_activity_blocks(html)), [(0, len(html))])
        self.assertEqual(extract_statuses(html), [TrackingEvent("01/02/2024 08:00", "Recibido", "Miami")])

    def test_template_detail_discards_whole_event(self):
        html = _block("12/05/2024 10:30", "En tránsito", "Dato.Comentarios")
        self.assertEqual(extract_statuses(html), [])

    def test_concatenation_in_status_discards_event(self):
        html = _block("12/05/2024 10:30", "' + valor + '", "Bodega")
        self.assertEqual(extract_statuses(html), [])

    def test_timestamp_without_digits_is_dropped(self):
        self.assertEqual(extract_statuses(_block("pendiente", "Creada", "Web")), [])
        self.assertEqual(extract_statuses(_block("", "Creada", "Web")), [])

    def test_block_with_single_cell_is_skipped(self):
        html = (
            '<div class="widget-activity-item"><div class="tbl-cell"><p><span>12/05/2024</span></p></div></div>'
            + _block("13/05/2024", "Entregado")
        )
        self.assertEqual([e.timestamp for e in extract_statuses(html)], ["13/05/2024"])

    def test_class_match_is_case_insensitive_substring(self):
        html = _block("12/05/2024", "Entregado").replace("widget-activity-item clearfix", "row WIDGET-ACTIVITY-ITEM")
        self.assertEqual(len(extract_statuses(html)), 1)

    def test_replaceable_detector(self):
        html = _block("12/05/2024", "Entregado", "Dato.Comentarios")
        events = extract_statuses(html, is_template_text=lambda value: False)
        self.assertEqual(events[0].detail, "Dato.Comentarios")


if __name__ == "__main__":
    unittest.main()
