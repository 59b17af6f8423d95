from __future__ import annotations

from pathlib import Path

IF_FUNCTION = "function f(x) {\n  if (x) {\n    return 1;\n  }\n  return 0;\n}\n"


def write_source(root: Path, relpath: str, content: str) -> Path:
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
