"""Text normalization shared by DTO validators."""
from typing import Optional


def strip_text(v: Optional[str]) -> Optional[str]:
    """Trim surrounding whitespace; None passes through (means 'not provided' in updates)."""
    return v.strip() if isinstance(v, str) else v
