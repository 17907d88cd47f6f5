import json
import unittest

from nutrigen.domain.FoodAnalysis import FoodAnalysis
from nutrigen.logic.analysis.food_analysis import (
    FOOD_ANALYSIS_SCHEMA, analyze_food_image, strip_data_uri
)
from nutrigen.utilities.errors import EmptyResponseError, MalformedResponseError

from plan_fixtures import ANALYSIS_DICT, StubModelClient


class TestStripDataUri(unittest.TestCase):

    def test_prefix_removed(self):
        self.assertEqual(strip_data_uri("data:image/jpeg;base64,QUJD"), "QUJD")

    def test_raw_base64_unchanged(self):
        self.assertEqual(strip_data_uri("QUJD"), "QUJD")

    def test_prefix_without_payload_is_left_alone(self):
        self.assertEqual(strip_data_uri("data:image/png;base64,"), "data:image/png;base64,")


class TestAnalyzeFoodImage(unittest.TestCase):

    def test_sends_raw_bytes_and_parses_result(self):
        client = StubModelClient(json.dumps(ANALYSIS_DICT, ensure_ascii=False))
        result = analyze_food_image("data:image/jpeg;base64,QUJD", client=client)

        self.assertIsInstance(result, FoodAnalysis)
        self.assertEqual(result.food_name, "宫保鸡丁")
        self.assertEqual(result.health_score, 6)
        call = client.calls[0]
        self.assertEqual(call["image_base64"], "QUJD")
        self.assertIs(call["schema"], FOOD_ANALYSIS_SCHEMA)
        self.assertIn("健康评分(0-10)", call["instruction"])

    def test_same_input_same_result_with_deterministic_model(self):
        # e.g. a photo of a chair: the stubbed model answers with a low-confidence guess
        answer = json.dumps({"food_name": "无法识别", "calories": 0, "protein": 0, "carbs": 0,
                             "fat": 0, "health_score": 0, "advice": "图片中未发现食物。"},
                            ensure_ascii=False)
        first = analyze_food_image("QUJD", client=StubModelClient(answer))
        second = analyze_food_image("QUJD", client=StubModelClient(answer))
        self.assertEqual(first, second)

    def test_macros_default_to_zero(self):
        data = {k: v for k, v in ANALYSIS_DICT.items() if k not in ("protein", "carbs", "fat")}
        result = analyze_food_image("QUJD", client=StubModelClient(json.dumps(data)))
        self.assertEqual((result.protein, result.carbs, result.fat), (0, 0, 0))

    def test_empty_response_raises(self):
        with self.assertRaises(EmptyResponseError):
            analyze_food_image("QUJD", client=StubModelClient(""))

    def test_missing_required_field_is_malformed(self):
        data = dict(ANALYSIS_DICT)
        del data["advice"]
        with self.assertRaises(MalformedResponseError):
            analyze_food_image("QUJD", client=StubModelClient(json.dumps(data)))

    def test_schema_is_flat(self):
        for prop in FOOD_ANALYSIS_SCHEMA["properties"].values():
            self.assertIn(prop["type"], ("string", "number"))


if __name__ == '__main__':
    unittest.main()
