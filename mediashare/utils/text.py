import re
from typing import Optional

BULLET_RE = re.compile(r"^[-●>•∙⋅⚫⬤◆◇◈○◎◐◑◒◓◔◕⚪]+\s*")

def format_description(text: Optional[str]) -> str:
    """Normalise the assorted bullet glyphs people paste into descriptions to '• '."""
    if not text or not text.strip():
        return ""
    lines = []
    for line in text.split("\n"):
        if BULLET_RE.match(line):
            line = BULLET_RE.sub("• ", line, count=1).strip()
        lines.append(line)
    return "\n".join(lines)
