from typing import Final

PLAN_DAYS: Final[int] = 7

# Image cache
IMAGE_CACHE_VERSION: Final[str] = "nutrigen_img_v2"
IMAGE_SIZE: Final[int] = 200
IMAGE_MODEL: Final[str] = "flux"
IMAGE_PROMPT_SUFFIX: Final[str] = (
    ", food photography, high resolution, appetizing, isolated on white plate, studio lighting"
)
PLACEHOLDER_IMAGE: Final[str] = "https://placehold.co/200x200/FFFBF0/F97316?text=Delicious"
LOADING_IMAGE: Final[str] = "https://placehold.co/200x200/FFFBF0/F97316?text=Food"
BROKEN_IMAGE: Final[str] = "https://placehold.co/200x200/FFFBF0/F97316?text=Meal"

# Prompts
PLAN_PROMPT_TEMPLATE: Final[str] = (
    """请为一位中国用户生成详细的{days}天【{goal}】食谱。

用户档案: 性别{gender}, {age}岁, {height}cm, {weight}kg, 活动量: {activity}。{constraints}

要求：
1. **排版风格**: 内容需适配海报式排版。
2. **菜品接地气**: 必须是中国大陆常见的家常菜（如：凉拌木耳、番茄炒蛋、清蒸鲈鱼、杂粮粥等）。
3. **做法详情**: 每个菜必须包含【做法步骤】，不能只有名字。
4. **精确分量**: 食材必须有克数。
5. **视觉关键词**: visual_prompt_en 必须非常具体，例如 "bowl of millet porridge and boiled egg" 而不是 "breakfast"。
6. **采购清单**: 生成一份本周所需的全部食材采购清单。

请返回JSON格式。"""
)
EXCLUDED_LINE: Final[str] = "\n- **严格忌口/不吃**: {value}"
PREFERENCE_LINE: Final[str] = "\n- **饮食偏好**: {value}"
FOOD_ANALYSIS_PROMPT: Final[str] = "分析食物图片。识别名称、热量、营养占比、健康评分(0-10)及建议。JSON格式返回。"
IMAGE_MIME_TYPE: Final[str] = "image/jpeg"

# User-facing messages
PLAN_FAILED_MESSAGE: Final[str] = "生成食谱失败，请重试。建议检查网络或API Key。"
ANALYSIS_FAILED_MESSAGE: Final[str] = "识别失败，请确保图片清晰，并包含食物。"
DEFAULT_PLAN_TITLE: Final[str] = "定制健康食谱"
BRAND_NAME: Final[str] = "NutriGen AI"
DIET_NOTES: Final[tuple[str, ...]] = (
    "烹饪时请控制油盐用量，推荐使用橄榄油或山茶油。",
    "每天饮水至少 2000ml。",
    "蔬菜分量不限，饿了可以多吃绿叶菜。",
    "如有食物过敏，请自行替换同类食材。",
)

# Poster slots: (attribute, short label, long label)
MEAL_SLOTS: Final[tuple[tuple[str, str, str], ...]] = (
    ("breakfast", "早", "早餐"),
    ("lunch", "午", "午餐"),
    ("dinner", "晚", "晚餐"),
    ("snack", "加", "加餐"),
)
MIN_CHART_PCT: Final[float] = 5.0
PRINT_TITLE_RESTORE_MS: Final[int] = 1000
