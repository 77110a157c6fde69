from __future__ import annotations

import re
from typing import Callable, List, Optional, Tuple

_PY_DEF_RE = re.compile(r"^\s*def \w+\(.*\)\s*(->.*)?:", re.MULTILINE)
_PY_IMPORT_RE = re.compile(r"^\s*(from \w[\w.]* )?import \w", re.MULTILINE)

# First match wins; order matters (e.g. jsx before javascript, c++ before c).
_RULES: List[Tuple[str, Callable[[str], bool]]] = [
    ("php", lambda c: "<?php" in c),
    ("jsx", lambda c: "import React" in c or ("import" in c and 'from "react"' in c)),
    ("typescript", lambda c: bool(re.search(r"\binterface\s+\w+\s*\{", c)) or bool(re.search(r":\s*(string|number|boolean)\b", c))),
    ("javascript", lambda c: "function" in c and ("{" in c or "=>" in c)),
    ("python", lambda c: bool(_PY_DEF_RE.search(c)) or (bool(_PY_IMPORT_RE.search(c)) and ":" in c)),
    ("java", lambda c: "class" in c and "{" in c and "public" in c),
    ("go", lambda c: "package " in c and "func " in c),
    ("cpp", lambda c: "using namespace" in c or "template<" in c or ("#include" in c and "cout" in c)),
    ("c", lambda c: "#include" in c and "<stdio.h>" in c),
    ("rust", lambda c: "fn " in c and ("->" in c or "let mut" in c)),
    ("sql", lambda c: bool(re.search(r"\bSELECT\b[\s\S]*\bFROM\b", c, re.IGNORECASE))),
    ("html", lambda c: "<!DOCTYPE" in c or "<html" in c or bool(re.search(r"<(\w+)[^>]*>[\s\S]*</\1>", c))),
    ("bash", lambda c: c.startswith("#!/bin/") or bool(re.search(r"^\s*\$ \w", c, re.MULTILINE))),
]


def detect_language(code: str) -> Optional[str]:
    """Best-effort guess of a snippet's language; None when nothing matches."""
    if not code or not code.strip():
        return None
    for name, matches in _RULES:
        if matches(code):
            return name
    return None
