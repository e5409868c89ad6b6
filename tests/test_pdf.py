import unittest

import fitz

from nameplate_export import get_exporter
from nameplate_export.pdf import render_pdf
from order_data import parse_order


def _payload(count: int, **extra: object) -> dict:
    payload: dict = {
        "refId": "PO-42",
        "labels": [
            {
                "id": i,
                "width": 7,
                "height": 2,
                "corners": "rounded" if i % 2 else "squared",
                "labelColor": "#3B82F6",
                "textColor": "#FFFFFF",
                "stickyBack": i == 1,
                "textLines": [{"text": f"ROOM {i}", "fontSize": 24}],
            }
            for i in range(1, count + 1)
        ],
    }
    payload.update(extra)
    return payload


class PdfRenderTests(unittest.TestCase):
    def test_page_count_matches_layout(self) -> None:
        pdf_bytes, summary = render_pdf(parse_order(_payload(15)))
        self.assertTrue(pdf_bytes.startswith(b"%PDF"))
        self.assertGreater(summary.pages, 1)
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            self.assertEqual(doc.page_count, summary.pages)

    def test_text_is_searchable(self) -> None:
        pdf_bytes, _ = render_pdf(
            parse_order(_payload(2, contactName="Pat", notes="Fragile"))
        )
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            text = "".join(page.get_text() for page in doc)
        for expected in ("Nameplate order PO-42", "ROOM 1", "ROOM 2", "Design #2",
                         "STICKY BACK", "Contact: Pat", "Fragile"):
            self.assertIn(expected, text)

    def test_unknown_font_still_renders(self) -> None:
        payload = _payload(1)
        payload["labels"][0]["font"] = "Comic Sans MS"
        pdf_bytes, summary = render_pdf(parse_order(payload))
        self.assertEqual(summary.pages, 1)
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            self.assertIn("ROOM 1", doc.load_page(0).get_text())

    def test_truetype_font_renders(self) -> None:
        payload = _payload(1)
        payload["labels"][0]["font"] = "Bitstream Vera Sans"
        pdf_bytes, _ = render_pdf(parse_order(payload))
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            self.assertIn("ROOM 1", doc.load_page(0).get_text())

    def test_exporter_artifact(self) -> None:
        artifact = get_exporter("pdf").render(parse_order(_payload(1)))
        self.assertEqual(artifact.kind, "pdf")
        self.assertEqual(artifact.content_type, "application/pdf")
        self.assertTrue(artifact.data.startswith(b"%PDF"))


if __name__ == "__main__":
    unittest.main()
