"""
Unit tests for color and threshold conversion.
"""

import unittest

from dashboard_importer.converters.palette import BUILTIN_COLORS, resolve_color
from dashboard_importer.converters.thresholds import convert_thresholds


class TestPalette(unittest.TestCase):
    """Test cases for named color resolution."""

    def test_known_names_resolve_to_hex(self):
        self.assertEqual(resolve_color("red"), "#F2495C")
        self.assertEqual(resolve_color("orange"), "#FF9830")
        self.assertEqual(resolve_color("dark-purple"), "#8F3BB8")

    def test_palette_size(self):
        self.assertEqual(len(BUILTIN_COLORS), 30)

    def test_unknown_tokens_pass_through(self):
        self.assertEqual(resolve_color("#123456"), "#123456")
        self.assertEqual(resolve_color("rgba(0, 0, 0, 0.5)"), "rgba(0, 0, 0, 0.5)")
        self.assertIsNone(resolve_color(None))

    def test_palette_is_read_only(self):
        with self.assertRaises(TypeError):
            BUILTIN_COLORS["red"] = "#000000"


class TestThresholds(unittest.TestCase):
    """Test cases for threshold conversion."""

    def test_base_step_tagging(self):
        thresholds = convert_thresholds(
            {
                "thresholds": {
                    "mode": "absolute",
                    "steps": [
                        {"value": None, "color": "red"},
                        {"value": 10, "color": "orange"},
                    ],
                }
            }
        )

        steps = thresholds["steps"]
        self.assertEqual(steps[0]["type"], "base")
        self.assertEqual(steps[0]["color"], "#F2495C")
        self.assertNotIn("type", steps[1])
        self.assertEqual(steps[1]["color"], "#FF9830")
        self.assertEqual(steps[1]["value"], 10)

    def test_mode_copied_and_style_fixed(self):
        thresholds = convert_thresholds(
            {
                "thresholds": {"mode": "percentage", "steps": []},
                "custom": {"thresholdsStyle": {"mode": "area"}},
            }
        )
        self.assertEqual(thresholds["mode"], "percentage")
        self.assertEqual(thresholds["style"], "line")
        self.assertEqual(thresholds["steps"], [])

    def test_first_step_with_value_is_not_base(self):
        thresholds = convert_thresholds(
            {"thresholds": {"steps": [{"value": 0, "color": "green"}]}}
        )
        self.assertNotIn("type", thresholds["steps"][0])

    def test_null_value_after_first_step_is_not_base(self):
        thresholds = convert_thresholds(
            {
                "thresholds": {
                    "steps": [
                        {"value": 5, "color": "green"},
                        {"value": None, "color": "red"},
                    ]
                }
            }
        )
        self.assertTrue(all("type" not in step for step in thresholds["steps"]))

    def test_foreign_step_type_is_replaced(self):
        thresholds = convert_thresholds(
            {"thresholds": {"steps": [{"value": 3, "color": "blue", "type": "base"}]}}
        )
        self.assertNotIn("type", thresholds["steps"][0])

    def test_order_preserved(self):
        colors = ["green", "#EAB839", "red"]
        thresholds = convert_thresholds(
            {
                "thresholds": {
                    "steps": [
                        {"value": None, "color": colors[0]},
                        {"value": 80, "color": colors[1]},
                        {"value": 90, "color": colors[2]},
                    ]
                }
            }
        )
        self.assertEqual(
            [step["color"] for step in thresholds["steps"]],
            ["#73BF69", "#EAB839", "#F2495C"],
        )

    def test_missing_thresholds(self):
        thresholds = convert_thresholds({"unit": "percent"})
        self.assertEqual(thresholds, {"mode": None, "style": "line", "steps": []})

    def test_first_step_without_value_is_not_base(self):
        thresholds = convert_thresholds(
            {"thresholds": {"steps": [{"color": "red"}, {"value": 10, "color": "green"}]}}
        )
        self.assertNotIn("type", thresholds["steps"][0])
        self.assertNotIn("value", thresholds["steps"][0])
        self.assertEqual(thresholds["steps"][0]["color"], "#F2495C")

    def test_input_not_modified(self):
        step = {"value": None, "color": "red"}
        convert_thresholds({"thresholds": {"steps": [step]}})
        self.assertEqual(step, {"value": None, "color": "red"})


if __name__ == "__main__":
    unittest.main()
