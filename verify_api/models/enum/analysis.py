from enum import Enum


class ContentType(str, Enum):
    text = "text"
    image = "image"
    video = "video"
    link = "link"
    profile = "profile"


class Confidence(str, Enum):
    high = "High"
    medium = "Medium"
    low = "Low"


class Verdict(str, Enum):
    likely_ai = "likely_ai"
    suspicious = "suspicious"
    likely_authentic = "likely_authentic"


VERDICT_LABELS = {
    Verdict.likely_ai: "LIKELY AI / FAKE",
    Verdict.suspicious: "SUSPICIOUS",
    Verdict.likely_authentic: "LIKELY AUTHENTIC",
}
