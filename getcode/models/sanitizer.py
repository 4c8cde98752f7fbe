"""
Markdown fence removal for generated code.
"""
import re

# Opening fence with an optional tag (python, c++, c#, objective-c, ...) or a closing fence.
# Word characters glued to a closing fence are taken as a tag too ("```bar" drops "bar").
_FENCE_RE = re.compile(r"```[\w+#.\-]*[ \t]*\n?")


def strip_code_fences(text: str) -> str:
    """
    Removes every markdown code fence delimiter and trims the result.

    Removal repeats until no ``` remains, since deleting one delimiter can
    join stray backticks into a new one. The function is idempotent.
    """
    while '```' in text:
        text = _FENCE_RE.sub('', text)
    return text.strip()
