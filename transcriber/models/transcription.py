from pydantic import BaseModel, ConfigDict, Field


class ParticipantHint(BaseModel):
    speaker: str = ""
    sample_quote: str | None = Field(default=None, alias="sampleQuote")

    model_config = ConfigDict(populate_by_name=True)


class TranscriptionRequest(BaseModel):
    """Validated request; built by ``services.validator.validate_request``."""

    audio_url: str = Field(alias="audioUrl")
    credential: str = Field(alias="openaiApiKey", repr=False)
    meeting_name: str | None = Field(default=None, alias="meetingName")
    participants: list[ParticipantHint] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class Segment(BaseModel):
    """Time-aligned fragment from the speech service, passed through as-is."""

    start: float
    end: float
    text: str

    model_config = ConfigDict(extra="allow")


class TranscriptionOutput(BaseModel):
    text: str
    segments: list[Segment] = Field(default_factory=list)
    duration: float = 0
    language: str = "en"


class SpeakerSummary(BaseModel):
    name: str
    word_count: int = Field(default=0, alias="wordCount")
    summary: str = ""

    model_config = ConfigDict(populate_by_name=True)


class AttributionAnalysis(BaseModel):
    """JSON object the language model returns for speaker attribution."""

    transcript: str | None = None
    speakers: list[SpeakerSummary] | None = None
    meeting_summary: str | None = Field(default=None, alias="meetingSummary")

    model_config = ConfigDict(populate_by_name=True)


class AttributionOutcome(BaseModel):
    transcript: str
    speakers: list[SpeakerSummary] = Field(default_factory=list)
    meeting_summary: str = ""


class TranscriptionResult(BaseModel):
    success: bool = True
    meeting_name: str = Field(alias="meetingName")
    transcript: str
    raw_transcript: str = Field(alias="rawTranscript")
    segments: list[Segment] = Field(default_factory=list)
    speakers: list[SpeakerSummary] = Field(default_factory=list)
    meeting_summary: str = Field(default="", alias="meetingSummary")
    duration: float = 0
    language: str = "en"

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
    message: str | None = None
