from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

OutputFormat = Literal["default", "enhanced", "markdown", "html"]
SyntaxTheme = Literal["default", "github", "monokai", "dracula", "nord"]


class SegmenterSettings(BaseModel):
    max_input_size: int = Field(default=10_000, gt=0)   # budget, in characters
    preserve_code_blocks: bool = True
    smart_chunking: bool = True
    normalize_short_input: bool = True
    politeness_prefix: bool = True


class OutputSettings(BaseModel):
    format: OutputFormat = "enhanced"
    auto_format: bool = True
    syntax_theme: SyntaxTheme = "github"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_logs: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}


class AppConfig(BaseModel):
    segmenter: SegmenterSettings = Field(default_factory=SegmenterSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class ProcessResult(BaseModel):
    """Outcome of one ``process_input`` call.

    On failure ``text`` is the original input, unmodified, and ``segments``
    holds it as the only entry.
    """

    ok: bool
    text: str
    segments: List[str]
    error: Optional[str] = None

    @classmethod
    def success(cls, text: str, segments: List[str]) -> "ProcessResult":
        return cls(ok=True, text=text, segments=segments)

    @classmethod
    def failure(cls, original: str, exc: BaseException) -> "ProcessResult":
        return cls(
            ok=False,
            text=original,
            segments=[original],
            error=f"{exc.__class__.__name__}: {exc}",
        )
