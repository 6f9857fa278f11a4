from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Admin:
    admin_id: str
    name: str
    email: str
    mobile: str = ""
    designation: str = ""
