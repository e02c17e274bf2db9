from typing import Any, Dict, List, Optional, Type, Union

from pydantic import Field

from ..enum.analysis import ContentType
from .base import OpenBaseModel, StrictBaseModel

Probability = Optional[Union[int, float]]


################
# REQUESTS
################


class TextAnalysisRequestIn(StrictBaseModel):
    text: Optional[str] = Field(None, description="Text to analyze")
    userEmail: Optional[str] = None
    language: str = Field("English", description="Language of the text")


class LinkAnalysisRequestIn(StrictBaseModel):
    url: Optional[str] = Field(None, description="URL of the article or page")
    userEmail: Optional[str] = None


class ProfileAnalysisRequestIn(StrictBaseModel):
    profileUrl: Optional[str] = Field(None, description="Social media profile URL")
    url: Optional[str] = Field(None, description="Alias of profileUrl")
    platform: Optional[str] = Field(None, examples=["Instagram"])
    userEmail: Optional[str] = None

    @property
    def resolved_url(self) -> Optional[str]:
        return self.profileUrl or self.url


################
# MODEL RESULTS
################


class SuspiciousSection(OpenBaseModel):
    text: str
    reason: Optional[str] = None
    severity: Optional[str] = None


class Plagiarism(OpenBaseModel):
    isPlagiarized: Optional[bool] = None
    sources: Optional[List[str]] = None
    score: Probability = None


class Credibility(OpenBaseModel):
    rating: Optional[str] = None
    reason: Optional[str] = None


class Comparison(OpenBaseModel):
    humanTraits: Optional[str] = None
    detectedTraits: Optional[str] = None


class ManipulatedRegion(OpenBaseModel):
    region: Optional[str] = None
    issue: Optional[str] = None
    severity: Optional[str] = None


class ReverseSearch(OpenBaseModel):
    found: Optional[bool] = None
    similarSources: Optional[List[str]] = None


class AnalysisResultBase(OpenBaseModel):
    aiProbability: Probability = None
    humanProbability: Probability = None
    confidence: Optional[str] = None
    explanation: Optional[str] = None


class TextAnalysisResult(AnalysisResultBase):
    plagiarism: Optional[Plagiarism] = None
    credibility: Optional[Credibility] = None
    comparison: Optional[Comparison] = None
    suspiciousSections: Optional[List[SuspiciousSection]] = None


class ImageAnalysisResult(AnalysisResultBase):
    watermarkDetected: Optional[bool] = None
    manipulatedRegions: Optional[List[ManipulatedRegion]] = None
    reverseSearch: Optional[ReverseSearch] = None
    exif: Optional[Dict[str, Any]] = None


class VideoAnalysisResult(AnalysisResultBase):
    deepfakeSigns: Optional[List[str]] = None


class LinkAnalysisResult(AnalysisResultBase):
    sourceRating: Optional[str] = None
    isFake: Optional[bool] = None
    redFlags: Optional[List[str]] = None


class ProfileAnalysisResult(AnalysisResultBase):
    isAIInfluencer: Optional[bool] = None
    botProbability: Probability = None
    redFlags: Optional[List[str]] = None


# Result schema per content type. The content type is known by the route,
# so it is the tag of the union.
RESULT_MODELS: Dict[ContentType, Type[AnalysisResultBase]] = {
    ContentType.text: TextAnalysisResult,
    ContentType.image: ImageAnalysisResult,
    ContentType.video: VideoAnalysisResult,
    ContentType.link: LinkAnalysisResult,
    ContentType.profile: ProfileAnalysisResult,
}
