"""Links to the BRSR (Business Responsibility and Sustainability Report) PDFs."""

from __future__ import annotations

import re
from typing import Optional

BRSR_MAP = {
    "ambuja": "/brsr/Ambuja.pdf",
    "ultratech": "/brsr/Ultratech.pdf",
    "shree": "/brsr/ShreeCement.pdf",
    "acc": "/brsr/ACC.pdf",
    "dalmia": "/brsr/Dalmia.pdf",
    "jkcement": "/brsr/JKCement.pdf",
    "jk-cement": "/brsr/JKCement.pdf",
}

_REPEATED_SLASHES = re.compile(r"(?<!:)/{2,}")


def get_brsr_url(company_id: Optional[str], base_url: str = "/") -> Optional[str]:
    """Report path for ``company_id``; unknown ids map to ``/brsr/<id>.pdf``."""
    if not company_id:
        return None
    key = company_id.lower()
    relative = BRSR_MAP.get(key, f"/brsr/{key}.pdf")
    return _REPEATED_SLASHES.sub("/", f"{base_url}{relative}")


__all__ = ["BRSR_MAP", "get_brsr_url"]
