from pathlib import Path
from typing import Optional
import logging

import yaml

from .format.styling import format_output
from .ingest.clean import normalize_newlines, optimize_input
from .schema import AppConfig, ProcessResult, SegmenterSettings
from .segment.assemble import assemble
from .segment.code_blocks import segment_text

logger = logging.getLogger(__name__)


def load_config(path: Optional[str | Path] = None) -> AppConfig:
    """Read a YAML config file; no path means defaults. Invalid values raise pydantic.ValidationError."""
    if path is None:
        return AppConfig()
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return AppConfig.model_validate(raw)


def segment_input(text: str, settings: SegmenterSettings) -> list[str]:
    """Segments only, no normalization and no assembly. Errors propagate."""
    return segment_text(
        normalize_newlines(text),
        settings.max_input_size,
        preserve_code=settings.preserve_code_blocks,
        smart=settings.smart_chunking,
    )


def process_input(text: str, settings: SegmenterSettings) -> ProcessResult:
    """
    Prepare ``text`` for a consumer that accepts at most ``settings.max_input_size`` chars.

    Short input is only normalized. Longer input is segmented and the segments
    joined with the chunk boundary marker. This is the single recovery point:
    any failure is logged and the original input comes back untouched.
    """
    try:
        if len(text) <= settings.max_input_size:
            out = text
            if settings.normalize_short_input:
                out = optimize_input(text, polite=settings.politeness_prefix)
            logger.debug("Optimized input from %d to %d characters", len(text), len(out))
            return ProcessResult.success(out, [out] if out else [])

        segments = segment_input(text, settings)
        joined = assemble(segments)
        logger.info(
            "Split %d chars into %d segments (budget %d)",
            len(text),
            len(segments),
            settings.max_input_size,
        )
        return ProcessResult.success(joined, segments)
    except Exception as e:
        logger.error("Error processing input of %d chars: %s", len(text), e, exc_info=True)
        return ProcessResult.failure(text, e)


def format_result(result: ProcessResult, cfg: AppConfig) -> str:
    """Apply the output styling stage; styling failures fall back to the unstyled text."""
    if not cfg.output.auto_format:
        return result.text
    try:
        return format_output(result.text, cfg.output)
    except Exception as e:
        logger.error("Error formatting output of %d chars: %s", len(result.text), e, exc_info=True)
        return result.text
