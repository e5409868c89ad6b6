import unittest

from nameplate_errors import ValidationError
from order_data import DEFAULTS, parse_design, parse_order, parse_text_line


class ParseOrderTests(unittest.TestCase):
    def test_rejects_non_object(self) -> None:
        for payload in (None, [], "order", 3):
            with self.assertRaises(ValidationError):
                parse_order(payload)

    def test_requires_ref_id(self) -> None:
        with self.assertRaisesRegex(ValidationError, "refId"):
            parse_order({"labels": [{}]})
        with self.assertRaisesRegex(ValidationError, "refId"):
            parse_order({"refId": "   ", "labels": [{}]})

    def test_requires_labels(self) -> None:
        for labels in (None, [], {}, "x"):
            with self.assertRaisesRegex(ValidationError, "labels"):
                parse_order({"refId": "R1", "labels": labels})

    def test_envelope_fields(self) -> None:
        order = parse_order(
            {
                "refId": " R1 ",
                "contactName": "Pat",
                "contactEmail": "pat@example.com",
                "notes": "Ship fast",
                "labels": [{"quantity": 3}, {"quantity": 2}],
            }
        )
        self.assertEqual(order.ref_id, "R1")
        self.assertEqual(order.contact_name, "Pat")
        self.assertEqual(order.contact_email, "pat@example.com")
        self.assertEqual(order.notes, "Ship fast")
        self.assertEqual(order.total_labels, 5)


class ParseDesignTests(unittest.TestCase):
    def test_empty_design_gets_defaults(self) -> None:
        design = parse_design({}, 4)
        self.assertEqual(design.id, 4)
        self.assertEqual(design.width, DEFAULTS["width"])
        self.assertEqual(design.height, DEFAULTS["height"])
        self.assertEqual(design.font, "Helvetica")
        self.assertEqual(design.label_color, "#000000")
        self.assertEqual(design.text_color, "#FFFFFF")
        self.assertEqual(design.corners, "squared")
        self.assertFalse(design.sticky_back)
        self.assertEqual(design.quantity, 1)
        self.assertEqual(design.text_lines, ())

    def test_non_mapping_design_gets_defaults(self) -> None:
        self.assertEqual(parse_design("junk", 2), parse_design({}, 2))

    def test_quantity_is_at_least_one(self) -> None:
        for quantity in (0, -4, "abc", None, True):
            self.assertEqual(parse_design({"quantity": quantity}, 1).quantity, 1)
        self.assertEqual(parse_design({"quantity": "3"}, 1).quantity, 3)

    def test_bad_dimensions_fall_back(self) -> None:
        design = parse_design({"width": -2, "height": "nan"}, 1)
        self.assertEqual(design.width, 7.0)
        self.assertEqual(design.height, 2.0)
        design = parse_design({"width": "4.5", "height": 1}, 1)
        self.assertEqual(design.width, 4.5)
        self.assertEqual(design.height, 1.0)

    def test_corners(self) -> None:
        self.assertEqual(parse_design({"corners": "Rounded"}, 1).corners, "rounded")
        self.assertEqual(parse_design({"corners": "beveled"}, 1).corners, "squared")

    def test_sticky_back_values(self) -> None:
        self.assertTrue(parse_design({"stickyBack": True}, 1).sticky_back)
        self.assertTrue(parse_design({"stickyBack": "yes"}, 1).sticky_back)
        self.assertTrue(parse_design({"stickyBack": 1}, 1).sticky_back)
        self.assertFalse(parse_design({"stickyBack": "no"}, 1).sticky_back)

    def test_text_lines_must_be_a_list(self) -> None:
        self.assertEqual(parse_design({"textLines": "ACME"}, 1).text_lines, ())
        design = parse_design({"textLines": [{"text": "ACME"}, {"text": ""}]}, 1)
        self.assertEqual([line.text for line in design.text_lines], ["ACME", ""])


class ParseTextLineTests(unittest.TestCase):
    def test_defaults(self) -> None:
        line = parse_text_line({})
        self.assertEqual(line.text, "")
        self.assertEqual(line.font_size, 12.0)
        self.assertEqual((line.x, line.y), (50.0, 50.0))

    def test_positions_are_clamped(self) -> None:
        line = parse_text_line({"text": "A", "x": -20, "y": 140})
        self.assertEqual((line.x, line.y), (0.0, 100.0))

    def test_text_whitespace_is_kept(self) -> None:
        self.assertEqual(parse_text_line({"text": "  A  "}).text, "  A  ")

    def test_bad_font_size_falls_back(self) -> None:
        self.assertEqual(parse_text_line({"fontSize": 0}).font_size, 12.0)
        self.assertEqual(parse_text_line({"fontSize": "18"}).font_size, 18.0)


if __name__ == "__main__":
    unittest.main()
