from __future__ import annotations

import datetime
import html
import json
from pathlib import Path
from typing import List, Optional

from ..schema import ProcessResult

FORMATS = {"json", "md", "txt", "html"}


def _timestamp() -> str:
    return datetime.datetime.now().strftime("%Y%m%d_%H%M%S")


def infer_format(out_path: Optional[str], fmt: Optional[str]) -> str:
    if fmt:
        return fmt.lower()
    if out_path:
        ext = Path(out_path).suffix.lower().lstrip(".")
        if ext in {"json", "md", "txt", "html", "htm"}:
            return "html" if ext in {"html", "htm"} else ext
    return "txt"


def ensure_outpath(out_path: Optional[str], fmt: str, save_dir: Optional[str], stem: str) -> Path:
    if out_path:
        p = Path(out_path)
        p.parent.mkdir(parents=True, exist_ok=True)
        return p
    base_dir = Path(save_dir or "outputs")
    base_dir.mkdir(parents=True, exist_ok=True)
    return base_dir / f"{_timestamp()}_{stem}.{fmt}"


def as_json(res: ProcessResult) -> str:
    obj = {
        "ok": res.ok,
        "error": res.error,
        "segment_count": len(res.segments),
        "segments": [{"index": i, "chars": len(s), "text": s} for i, s in enumerate(res.segments, 1)],
    }
    return json.dumps(obj, ensure_ascii=False, indent=2)


def as_markdown(res: ProcessResult) -> str:
    lines: List[str] = [f"# Segments ({len(res.segments)})", ""]
    if not res.ok:
        lines += [f"> Segmentation failed: {res.error}", ""]
    for i, seg in enumerate(res.segments, 1):
        lines.append(f"## Segment {i} ({len(seg)} chars)")
        lines.append("")
        lines.append(seg)
        lines.append("")
    return "\n".join(lines).strip() + "\n"


def as_text(res: ProcessResult) -> str:
    return res.text.rstrip("\n") + "\n"


def as_html(res: ProcessResult) -> str:
    lines: List[str] = []
    lines.append("<!doctype html><html><head><meta charset='utf-8'>")
    lines.append(
        "<style>body{font-family:system-ui,Segoe UI,Arial,sans-serif;max-width:900px;margin:40px auto;padding:0 16px} pre{background:#f6f8fa;padding:8px;border-radius:4px;white-space:pre-wrap}</style>"
    )
    lines.append("</head><body>")
    lines.append(f"<h1>Segments ({len(res.segments)})</h1>")
    if not res.ok:
        lines.append(f"<p class='error'>Segmentation failed: {html.escape(res.error or '')}</p>")
    for i, seg in enumerate(res.segments, 1):
        lines.append(f"<h2>Segment {i} <small>({len(seg)} chars)</small></h2>")
        lines.append(f"<pre>{html.escape(seg)}</pre>")
    lines.append("</body></html>")
    return "\n".join(lines)


def write_output(
    res: ProcessResult,
    out_path: Optional[str] = None,
    fmt: Optional[str] = None,
    save_dir: Optional[str] = None,
    stem: str = "segments",
) -> Path:
    fmt2 = infer_format(out_path, fmt)
    if fmt2 not in FORMATS:
        raise ValueError(f"Unsupported format: {fmt2}")
    target = ensure_outpath(out_path, fmt2, save_dir, stem)
    render = {"json": as_json, "md": as_markdown, "txt": as_text, "html": as_html}[fmt2]
    target.write_text(render(res), encoding="utf-8")
    return target
