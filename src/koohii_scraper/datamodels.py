from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List


# --- Data models ---
@dataclass
class Story:
    author: str
    content: str
    modified_date: str = ""
    starred_count: int = 0
    reported_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "author": self.author,
            "content": self.content,
            "modifiedDate": self.modified_date,
            "starredCount": self.starred_count,
            "reportedCount": self.reported_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Story":
        return cls(
            author=data.get("author", ""),
            content=data.get("content", ""),
            modified_date=data.get("modifiedDate", ""),
            starred_count=int(data.get("starredCount", 0)),
            reported_count=int(data.get("reportedCount", 0)),
        )


@dataclass
class KanjiEntry:
    character: str
    reading: str = ""
    frame_number: int = 0
    stroke_count: int = 0
    story: str = ""
    stories: List[Story] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "character": self.character,
            "reading": self.reading,
            "frameNumber": self.frame_number,
            "strokeCount": self.stroke_count,
            "story": self.story,
            "stories": [s.to_dict() for s in self.stories],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KanjiEntry":
        return cls(
            character=data.get("character", ""),
            reading=data.get("reading", ""),
            frame_number=int(data.get("frameNumber", 0)),
            stroke_count=int(data.get("strokeCount", 0)),
            story=data.get("story", ""),
            stories=[Story.from_dict(s) for s in data.get("stories") or []],
        )
