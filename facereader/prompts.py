# facereader/prompts.py
"""
Prompt templates for the face reading endpoint.

The prompt sent to the model is ``base + " " + stylePrompt + " " + end``
where the base/end pair is looked up by analysis type and language.
"""
from typing import Dict, Tuple

DEFAULT_LANGUAGE = "zh"
DEFAULT_ANALYSIS_TYPE = "normal"
DEFAULT_STYLE = "mild"

DEFAULT_STYLE_PROMPT = "請專業分析這張人像照片的面部特徵與可能的性格特質"

SUPPORTED_LANGUAGES = ("zh", "en", "ja")
ANALYSIS_TYPES = ("normal", "fortune")

BASE_PROMPTS: Dict[str, Dict[str, str]] = {
    "normal": {
        "zh": "你是一位專業的面相分析師，擅長通過觀察人的面部特徵來分析性格特質和個人特色。",
        "en": "You are a professional physiognomy analyst who excels at analyzing personality traits and personal characteristics through facial features.",
        "ja": "あなたは顔の特徴を通じて性格特性や個人的特徴を分析することに長けた専門的な人相分析師です。",
    },
    "fortune": {
        "zh": "你是一位經驗豐富的命理面相師，擅長從面部特徵解讀一個人的運勢走向，包括事業、財運、感情與健康。",
        "en": "You are an experienced fortune-telling face reader who interprets a person's fortune, including career, wealth, relationships and health, from their facial features.",
        "ja": "あなたは顔の特徴から仕事運、金運、恋愛運、健康運などの運勢を読み解くことに長けた経験豊富な占い人相師です。",
    },
}

END_PROMPTS: Dict[str, Dict[str, str]] = {
    "normal": {
        "zh": "請用不超過 150 字進行專業的面像分析，包括：1.面部特徵描述 2.可能的性格特質 3.個人魅力點 4.建議的發展方向。語氣要專業但親切，給予正面積極的分析。",
        "en": "Please provide a professional physiognomy analysis in no more than 150 words, including: 1.Facial feature description 2.Possible personality traits 3.Personal charm points 4.Suggested development directions. Maintain a professional yet friendly tone with positive analysis.",
        "ja": "150文字以内で専門的な人相分析を提供してください。含める内容：1.顔の特徴の説明 2.可能性のある性格特性 3.個人的な魅力ポイント 4.推奨される発展方向。専門的でありながら親しみやすい口調で、ポジティブな分析を行ってください。",
    },
    "fortune": {
        "zh": "請用不超過 150 字預測此人近期的運勢，包括：1.整體運勢 2.事業運 3.財運 4.感情運 5.開運建議。語氣輕鬆有趣，內容僅供娛樂參考。",
        "en": "Please predict this person's near-term fortune in no more than 150 words, including: 1.Overall fortune 2.Career 3.Wealth 4.Relationships 5.Tips for better luck. Keep the tone light and fun; this is for entertainment only.",
        "ja": "150文字以内でこの人の近い将来の運勢を予測してください。含める内容：1.全体運 2.仕事運 3.金運 4.恋愛運 5.開運のアドバイス。気軽で楽しい口調で、娯楽目的の内容にしてください。",
    },
}


def normalize_language(language: str) -> str:
    return language if language in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def normalize_analysis_type(analysis_type: str) -> str:
    return analysis_type if analysis_type in ANALYSIS_TYPES else DEFAULT_ANALYSIS_TYPE


def select_templates(analysis_type: str, language: str) -> Tuple[str, str]:
    """Return the (base, end) template pair, falling back to "zh" for unknown languages."""
    base_table = BASE_PROMPTS[normalize_analysis_type(analysis_type)]
    end_table = END_PROMPTS[normalize_analysis_type(analysis_type)]
    return (
        base_table.get(language, base_table[DEFAULT_LANGUAGE]),
        end_table.get(language, end_table[DEFAULT_LANGUAGE]),
    )


def build_prompt(analysis_type: str, language: str, style_prompt: str) -> str:
    base, end = select_templates(analysis_type, language)
    return f"{base} {style_prompt} {end}"
