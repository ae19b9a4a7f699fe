"""
Response sanitizer: strips Markdown fencing from model output
"""

import re

# An opening fence, optionally tagged with a shell name, or a bare closing fence
FENCE_LINE = re.compile(r"^\s*```(?:zsh|bash|sh)?\s*$")


def is_fence_line(line: str) -> bool:
    return FENCE_LINE.match(line) is not None


def sanitize(text: str) -> str:
    """Return the shell code contained in a model response.

    Fence lines are dropped wherever they appear, so a response that only
    wraps part of its output in a code block is handled too. The result is
    not validated as shell syntax.
    """
    lines = text.strip().split("\n")
    kept = [line for line in lines if not is_fence_line(line)]
    return "\n".join(kept).strip()
