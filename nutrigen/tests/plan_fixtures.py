"""Canned model payloads shared by the tests."""
import copy
import json


def make_meal(name, calories, prompt="steamed fish with rice"):
    return {
        "name": name,
        "calories": calories,
        "protein": "20g",
        "carbs": "40g",
        "fat": "10g",
        "ingredients": [{"name": "鸡蛋", "amount": "1个"}, {"name": "小米", "amount": "50g"}],
        "recipe_steps": ["1. 小米洗净煮粥。", "2. 鸡蛋水煮8分钟。"],
        "visual_prompt_en": prompt,
    }


def make_day(label, snack=True):
    day = {
        "day": label,
        "breakfast": make_meal("小米粥配水煮蛋", 350, "bowl of millet porridge and boiled egg"),
        "lunch": make_meal("番茄炒蛋", 550, "tomato scrambled eggs with rice"),
        "dinner": make_meal("清蒸鲈鱼", 450, "steamed sea bass"),
        "snack": make_meal("苹果", 100, "fresh red apple") if snack else None,
        "total_calories": 1450 if snack else 1350,
    }
    return day


PLAN_DICT = {
    "title": "28岁女性减脂食谱",
    "summary": "清淡少油，七日循环。",
    "days": [make_day(f"周{d}") for d in "一二三四五六日"],
    "shopping_list": ["小米 350g", "鸡蛋 14个", "鲈鱼 2条"],
}

ANALYSIS_DICT = {
    "food_name": "宫保鸡丁",
    "calories": 520,
    "protein": 28,
    "carbs": 30,
    "fat": 32,
    "health_score": 6,
    "advice": "少油少糖，搭配蔬菜。",
}


def plan_dict():
    return copy.deepcopy(PLAN_DICT)


def plan_json(**overrides):
    data = plan_dict()
    data.update(overrides)
    return json.dumps(data, ensure_ascii=False)


class StubModelClient:
    """Records every submit() and answers with a canned text."""

    def __init__(self, text):
        self.text = text
        self.calls = []

    def submit(self, instruction, schema, *, schema_name, temperature=None, image_base64=None):
        self.calls.append({
            "instruction": instruction,
            "schema": schema,
            "schema_name": schema_name,
            "temperature": temperature,
            "image_base64": image_base64,
        })
        return self.text
