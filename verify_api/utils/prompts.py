"""Prompt templates and response schemas, one per content type."""
from typing import Any, Dict, Optional

from ..models.enum.analysis import ContentType

ASSISTANT_INSTRUCTION = (
    "You are the VERIFY AI Assistant. Help users understand content authenticity, "
    "deepfakes, and how to use the platform. Answer concisely."
)


class Prompt:
    def __init__(self, text: str, response_schema: Optional[Dict[str, Any]] = None):
        self.text = text
        self.response_schema = response_schema


#################
# RESPONSE SCHEMAS
#################


def _obj(properties: Dict[str, Any], required=None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "OBJECT", "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


def _arr(items: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "ARRAY", "items": items}


NUMBER = {"type": "NUMBER"}
STRING = {"type": "STRING"}
BOOLEAN = {"type": "BOOLEAN"}

COMMON_PROPERTIES = {
    "aiProbability": NUMBER,
    "humanProbability": NUMBER,
    "confidence": STRING,
    "explanation": STRING,
}
COMMON_REQUIRED = tuple(COMMON_PROPERTIES)

RESPONSE_SCHEMAS: Dict[ContentType, Dict[str, Any]] = {
    ContentType.text: _obj(
        {
            **COMMON_PROPERTIES,
            "plagiarism": _obj(
                {"isPlagiarized": BOOLEAN, "sources": _arr(STRING), "score": NUMBER},
                ("isPlagiarized", "sources", "score"),
            ),
            "credibility": _obj(
                {"rating": STRING, "reason": STRING}, ("rating", "reason")
            ),
            "comparison": _obj(
                {"humanTraits": STRING, "detectedTraits": STRING},
                ("humanTraits", "detectedTraits"),
            ),
            "suspiciousSections": _arr(
                _obj(
                    {"text": STRING, "reason": STRING, "severity": STRING},
                    ("text", "reason", "severity"),
                )
            ),
        },
        COMMON_REQUIRED
        + ("plagiarism", "credibility", "comparison", "suspiciousSections"),
    ),
    ContentType.image: _obj(
        {
            **COMMON_PROPERTIES,
            "watermarkDetected": BOOLEAN,
            "manipulatedRegions": _arr(
                _obj(
                    {"region": STRING, "issue": STRING, "severity": STRING},
                    ("region", "issue", "severity"),
                )
            ),
            "reverseSearch": _obj(
                {"found": BOOLEAN, "similarSources": _arr(STRING)},
                ("found", "similarSources"),
            ),
        },
        COMMON_REQUIRED + ("watermarkDetected", "manipulatedRegions", "reverseSearch"),
    ),
    ContentType.video: _obj(
        {**COMMON_PROPERTIES, "deepfakeSigns": _arr(STRING)},
        COMMON_REQUIRED + ("deepfakeSigns",),
    ),
    ContentType.link: _obj(
        {
            **COMMON_PROPERTIES,
            "sourceRating": STRING,
            "isFake": BOOLEAN,
            "redFlags": _arr(STRING),
        },
        COMMON_REQUIRED + ("sourceRating", "isFake"),
    ),
    ContentType.profile: _obj(
        {
            **COMMON_PROPERTIES,
            "isAIInfluencer": BOOLEAN,
            "botProbability": NUMBER,
            "redFlags": _arr(STRING),
        },
        ("isAIInfluencer", "botProbability", "humanProbability", "explanation", "redFlags"),
    ),
}


#################
# TEMPLATES
#################

TEXT_TEMPLATE = """Analyze the following {language} text for AI generation vs human authorship.
Perform a comprehensive check including: AI vs human probability, plagiarism detection,
source credibility, suspicious sections, and how a human would write compared to this text.
Return ONLY a valid JSON object with this exact structure:
{{
  "aiProbability": <number 0-100>,
  "humanProbability": <number 0-100>,
  "confidence": "<High|Medium|Low>",
  "explanation": "<detailed analysis>",
  "plagiarism": {{ "isPlagiarized": false, "sources": [], "score": 0 }},
  "credibility": {{ "rating": "<Trusted|Unverified|Risky>", "reason": "<reason>" }},
  "comparison": {{ "humanTraits": "<traits>", "detectedTraits": "<traits>" }},
  "suspiciousSections": [{{ "text": "<excerpt>", "reason": "<reason>", "severity": "<High|Medium|Low>" }}]
}}
Rules: aiProbability + humanProbability = 100. Excerpts must be copied verbatim from the text. ONLY return JSON.

Text: {text}"""

IMAGE_TEMPLATE = """You are a forensic image analyst. Examine this image for AI generation or manipulation.
Check GAN/diffusion fingerprints (fingers, ears, teeth, eye reflections, background text),
edge boundaries, lighting and shadow consistency, JPEG artifacts, noise levels and facial blending.
Return ONLY a valid JSON object with this exact structure:
{
  "aiProbability": <number 0-100>,
  "humanProbability": <number 0-100>,
  "confidence": "<High|Medium|Low>",
  "explanation": "<2-3 sentences of specific forensic evidence>",
  "watermarkDetected": <true|false>,
  "manipulatedRegions": [{"region": "<area>", "issue": "<issue>", "severity": "<High|Medium|Low>"}],
  "reverseSearch": {"found": false, "similarSources": []}
}
Rules:
- aiProbability + humanProbability = 100
- Real photos of real people/places: aiProbability 5-30
- Clearly AI-generated: aiProbability 70-99
- ONLY return the JSON, no other text"""

VIDEO_TEMPLATE = """Analyze this video for deepfake manipulation, AI generation or editing.
Check facial blending artifacts, temporal inconsistencies, lip sync accuracy and background anomalies.
Return ONLY valid JSON:
{
  "aiProbability": <number 0-100>,
  "humanProbability": <number 0-100>,
  "confidence": "<High|Medium|Low>",
  "explanation": "<detailed analysis>",
  "deepfakeSigns": ["<sign1>", "<sign2>"]
}"""

LINK_TEMPLATE = """Analyze this URL for authenticity, misinformation, fake news or AI-generated content.
Check domain credibility and content patterns, and flag suspicious indicators.
Return ONLY valid JSON:
{{
  "aiProbability": <number 0-100>,
  "humanProbability": <number 0-100>,
  "confidence": "<High|Medium|Low>",
  "explanation": "<analysis>",
  "sourceRating": "<Trusted|Unverified|Risky>",
  "isFake": <true|false>,
  "redFlags": ["<flag1>", "<flag2>"]
}}
URL: {url}"""

PROFILE_TEMPLATE = """Analyze this {platform} profile URL to determine if it is a real person, a bot or an AI influencer.
Return ONLY valid JSON:
{{
  "isAIInfluencer": <true|false>,
  "botProbability": <number 0-100>,
  "humanProbability": <number 0-100>,
  "explanation": "<analysis>",
  "redFlags": ["<flag1>", "<flag2>"]
}}
Profile: {url}"""

COMPARE_TEMPLATE = """Compare these two {type} content versions for authenticity differences:

Version 1: {content1}

Version 2: {content2}

Which is more likely AI-generated and why?"""


def build_prompt(content_type: ContentType, **payload: Any) -> Prompt:
    """Build the instruction for one analysis.

    Text needs `text` (and optionally `language`), links `url`, profiles
    `url` (and optionally `platform`). Image and video prompts take no
    payload, the media travels as a separate part.
    """
    schema = RESPONSE_SCHEMAS[content_type]

    if content_type == ContentType.text:
        text = TEXT_TEMPLATE.format(
            language=payload.get("language") or "English", text=payload["text"]
        )
    elif content_type == ContentType.image:
        text = IMAGE_TEMPLATE
    elif content_type == ContentType.video:
        text = VIDEO_TEMPLATE
    elif content_type == ContentType.link:
        text = LINK_TEMPLATE.format(url=payload["url"])
    elif content_type == ContentType.profile:
        text = PROFILE_TEMPLATE.format(
            platform=payload.get("platform") or "social media", url=payload["url"]
        )
    else:
        raise ValueError(f"Unsupported content type {content_type}")

    return Prompt(text, schema)


def build_compare_prompt(content_type: str, content1: str, content2: str) -> Prompt:
    return Prompt(
        COMPARE_TEMPLATE.format(type=content_type, content1=content1, content2=content2)
    )
