"""
Role classification.
Maps the free-text role a volunteer typed on the form to a RoleCategory.
"""

import re
from typing import Optional

from .types import RoleCategory


# Checked in order; first category with a matching keyword wins
ROLE_KEYWORDS: tuple[tuple[RoleCategory, tuple[str, ...]], ...] = (
    (RoleCategory.INTERNAL_SERVICES, ("internal services", "internal service", "internal", "coordinator", "admin")),
    (RoleCategory.MENTOR, ("mentor", "reviewer", "quality review")),
    (RoleCategory.FRONTLINE, ("frontline", "front line", "front desk", "greeter", "intake", "screener")),
    (RoleCategory.FILER, ("filer", "preparer", "tax prep")),
)


def normalize_role_text(text: Optional[str]) -> str:
    """Lowercase, turn punctuation into spaces and collapse whitespace."""
    if not text:
        return ""
    lowered = re.sub(r"[^a-z0-9]+", " ", str(text).lower())
    return re.sub(r"\s+", " ", lowered).strip()


def classify_role(text: Optional[str]) -> RoleCategory:
    """
    Classify a free-text role. Unknown or empty text is a filer.

    >>> classify_role("Senior Mentor")
    <RoleCategory.MENTOR: 'MENTOR'>
    """
    normalized = normalize_role_text(text)
    if not normalized:
        return RoleCategory.FILER
    padded = f" {normalized} "
    for category, keywords in ROLE_KEYWORDS:
        for keyword in keywords:
            if f" {keyword}" in padded:
                return category
    return RoleCategory.FILER
