"""
Bug Report Model
================
Pydantic models for a parsed SpotBugs/FindBugs XML report.
This is the contract between the report parser and the renderer/gate.

Structure (document order preserved at every level):
    BugReport
        source_path     — where the XML was read from (shown in the summary)
        instances       — List[BugInstance]
    BugInstance
        abbrev / type / priority / rank / category
        classes         — List[ClassRef], each with its own SourceLine ranges
        methods         — List[MethodRef], each with its own SourceLine ranges
        source_lines    — the instance's top-level SourceLine ranges

Attributes absent from the XML are None and render as empty text.
"""
from typing import List, Optional
from pydantic import BaseModel


class SourceLine(BaseModel):
    start: Optional[int] = None
    end: Optional[int] = None
    classname: Optional[str] = None
    sourcepath: Optional[str] = None
    sourcefile: Optional[str] = None


class ClassRef(BaseModel):
    classname: Optional[str] = None
    source_lines: List[SourceLine] = []


class MethodRef(BaseModel):
    name: Optional[str] = None
    is_static: Optional[bool] = None
    signature: Optional[str] = None
    source_lines: List[SourceLine] = []


class BugInstance(BaseModel):
    type: str
    abbrev: Optional[str] = None
    priority: Optional[int] = None
    rank: Optional[int] = None
    category: Optional[str] = None
    classes: List[ClassRef] = []
    methods: List[MethodRef] = []
    source_lines: List[SourceLine] = []


class BugReport(BaseModel):
    source_path: str = ""
    instances: List[BugInstance] = []

    @property
    def bug_count(self) -> int:
        return len(self.instances)
