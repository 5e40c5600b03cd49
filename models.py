from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

USER_ROLES = ("user", "employee")
MOVIE_STATUSES = ("available", "pending", "offline")
APPLICATION_STATUSES = ("new", "pending", "accepted", "rejected")


def _iso(value):
    return value.isoformat() if isinstance(value, datetime) else value


@dataclass
class User:
    id: str
    username: str
    password_hash: str
    role: str = "user"

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        return cls(
            id=str(doc["_id"]),
            username=doc["username"],
            password_hash=doc["passwordHash"],
            role=doc.get("role", "user"),
        )


@dataclass
class Movie:
    id: str
    title: str
    year: int
    genre: str
    rating: float
    status: str
    poster_path: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Movie":
        return cls(
            id=str(doc["_id"]),
            title=doc.get("title"),
            year=doc.get("year"),
            genre=doc.get("genre"),
            rating=doc.get("rating"),
            status=doc.get("status"),
            poster_path=doc.get("posterPath"),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "_id": self.id,
            "title": self.title,
            "year": self.year,
            "genre": self.genre,
            "rating": self.rating,
            "status": self.status,
        }
        if self.poster_path:
            payload["posterPath"] = self.poster_path
        return payload


@dataclass
class Application:
    id: str
    applicant_name: str
    applicant_email: str
    description: str
    status: str
    user_id: Optional[str]
    created_at: Optional[datetime]
    image_path: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Application":
        return cls(
            id=str(doc["_id"]),
            applicant_name=doc.get("applicantName"),
            applicant_email=doc.get("applicantEmail"),
            description=doc.get("description"),
            status=doc.get("status", "new"),
            user_id=doc.get("userId"),
            created_at=doc.get("createdAt"),
            image_path=doc.get("imagePath"),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "_id": self.id,
            "applicantName": self.applicant_name,
            "applicantEmail": self.applicant_email,
            "description": self.description,
            "status": self.status,
            "userId": self.user_id,
            "createdAt": _iso(self.created_at),
        }
        if self.image_path:
            payload["imagePath"] = self.image_path
        return payload


@dataclass
class ChatMessage:
    sender: str
    message: str
    timestamp: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"sender": self.sender, "message": self.message, "timestamp": _iso(self.timestamp)}


@dataclass
class Chat:
    id: str
    user_id: str
    status: str
    admin_id: Optional[str] = None
    messages: List[ChatMessage] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Chat":
        return cls(
            id=str(doc["_id"]),
            user_id=doc.get("userId"),
            status=doc.get("status", "pending"),
            admin_id=doc.get("adminId"),
            messages=[
                ChatMessage(m.get("sender"), m.get("message"), m.get("timestamp"))
                for m in doc.get("messages", [])
            ],
            created_at=doc.get("createdAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "userId": self.user_id,
            "adminId": self.admin_id,
            "status": self.status,
            "messages": [m.to_dict() for m in self.messages],
            "createdAt": _iso(self.created_at),
        }


@dataclass(frozen=True)
class Identity:
    """Caller identity decoded from a bearer token."""

    user_id: str
    username: str
    role: str
    email: Optional[str] = None

    @property
    def is_employee(self) -> bool:
        return self.role == "employee"
