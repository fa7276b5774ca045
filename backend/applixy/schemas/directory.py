"""Directory Schemas — mentor and resource listings."""

from pydantic import BaseModel

from applixy.core.entities import Mentor, Resource


class MentorOut(BaseModel):
    id: str
    name: str
    specialty: str
    bio: str
    experience: str
    contact_info: str
    rating: float
    sessions_completed: int

    @classmethod
    def from_entity(cls, m: Mentor) -> "MentorOut":
        return cls(
            id=m.id, name=m.name, specialty=m.specialty, bio=m.bio,
            experience=m.experience, contact_info=m.contact_info,
            rating=m.rating, sessions_completed=m.sessions_completed,
        )


class ResourceOut(BaseModel):
    id: str
    title: str
    description: str
    url: str
    category: str
    icon: str
    is_external: bool

    @classmethod
    def from_entity(cls, r: Resource) -> "ResourceOut":
        return cls(
            id=r.id, title=r.title, description=r.description, url=r.url,
            category=r.category, icon=r.icon, is_external=r.is_external,
        )
