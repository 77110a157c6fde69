import sys
from pathlib import Path

import pytest

# Repo root = one level above tests/
REPO_ROOT = Path(__file__).resolve().parents[1]

# Ensure repo root is on sys.path so `import cli` and `prompt_chunker` work uninstalled.
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def prose():
    """Three short paragraphs with sentence punctuation."""
    return (
        "The first paragraph talks about chunking. It has two sentences.\n\n"
        "The second paragraph is about budgets. Budgets are measured in characters.\n\n"
        "The third paragraph closes the text."
    )
