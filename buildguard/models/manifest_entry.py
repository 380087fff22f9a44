"""
Manifest Entry Model
Pydantic model for one recognised key of a spring.factories manifest and
the class names it lists, in declaration order.
"""
from typing import List
from pydantic import BaseModel


class ManifestEntry(BaseModel):
    key: str
    class_names: List[str] = []
