import unittest

from nameplate_export import get_exporter
from nameplate_export.preview import build_preview, design_summary
from order_data import parse_order


def _order(**extra: object):
    payload: dict = {
        "refId": "R1",
        "labels": [
            {
                "id": 1,
                "width": 7,
                "height": 2,
                "quantity": 3,
                "labelColor": "#22C55E",
                "textLines": [{"text": "ACME"}],
            },
            {
                "id": 2,
                "width": 4.5,
                "height": 2,
                "stickyBack": True,
                "corners": "rounded",
                "textLines": [{"text": "LOT 7"}, {"text": "B2"}],
            },
        ],
    }
    payload.update(extra)
    return parse_order(payload)


class DesignSummaryTests(unittest.TestCase):
    def test_summary_fields(self) -> None:
        summary = design_summary(_order().labels[1])
        self.assertEqual(summary["primary_text"], "LOT 7")
        self.assertEqual(summary["lines"], ["LOT 7", "B2"])
        self.assertEqual(summary["width"], 4.5)
        self.assertEqual(summary["height"], 2)
        self.assertEqual(summary["corners"], "Rounded")
        self.assertEqual(summary["label_color"], "Black")

    def test_placeholder_and_truncation(self) -> None:
        order = parse_order(
            {"refId": "R1", "labels": [{}, {"textLines": [{"text": "Y" * 50}]}]}
        )
        self.assertEqual(design_summary(order.labels[0])["primary_text"], "—")
        self.assertEqual(
            design_summary(order.labels[1])["primary_text"], "Y" * 32 + "…"
        )


class BuildPreviewTests(unittest.TestCase):
    def test_one_section_per_design(self) -> None:
        html = build_preview(_order())
        self.assertEqual(html.count('class="design"'), 2)
        self.assertIn('data-design-id="1"', html)
        self.assertIn('data-design-id="2"', html)
        self.assertIn("4 labels across 2 designs", html)
        self.assertIn("Green", html)
        self.assertIn("LOT 7 / B2", html)

    def test_user_text_is_escaped(self) -> None:
        html = build_preview(_order(notes="<script>alert(1)</script>", contactName="A&B"))
        self.assertNotIn("<script>", html)
        self.assertIn("&lt;script&gt;", html)
        self.assertIn("A&amp;B", html)

    def test_exporter_artifact(self) -> None:
        artifact = get_exporter("preview").render(_order())
        self.assertEqual(artifact.extension, "html")
        self.assertTrue(artifact.content_type.startswith("text/html"))
        self.assertIn(b"Nameplate order R1", artifact.data)


class RegistryTests(unittest.TestCase):
    def test_known_formats(self) -> None:
        from nameplate_export import list_formats

        self.assertEqual(list(list_formats()), ["pdf", "preview", "spreadsheet"])
        self.assertEqual(get_exporter(" PDF ").kind, "pdf")

    def test_unknown_format(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unknown output format"):
            get_exporter("docx")


if __name__ == "__main__":
    unittest.main()
