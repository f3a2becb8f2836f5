"""Resource descriptors.

Courses, students and teachers are served by one generic handler
family. A `ResourceDescriptor` carries everything that differs between
them: the table, the wire <-> attribute field mapping and the relations
a client may ask to have populated.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Type

from sqlmodel import SQLModel

from . import models


@dataclass(frozen=True)
class Relation:
    """A relation that can be eager-loaded via `?populate=`."""
    attribute: str
    key: str
    many: bool


@dataclass(frozen=True)
class ResourceDescriptor:
    name: str
    tag: str
    noun: str
    model: Type[SQLModel]
    # wire key -> model attribute, writable through create/update
    fields: Dict[str, str]
    relations: Dict[str, Relation] = field(default_factory=dict)

    def relation(self, populate: Optional[str]) -> Optional[Relation]:
        """Return the relation for a resolved populate value, if any."""
        if populate is None:
            return None
        return self.relations.get(populate)

    def writable_values(self, payload: dict) -> dict:
        """Map the known writable wire keys present in `payload` to attributes.

        Unknown and read-only keys are dropped; keys that are absent stay
        absent so a partial update leaves those columns untouched.
        """
        return {attr: payload[key] for key, attr in self.fields.items() if key in payload}


COURSES = ResourceDescriptor(
    name='courses',
    tag='Courses',
    noun='course',
    model=models.Course,
    fields={'title': 'title', 'description': 'description', 'TeacherId': 'teacher_id'},
    relations={
        'teacher': Relation(attribute='teacher', key='Teacher', many=False),
        'students': Relation(attribute='students', key='Students', many=True),
    },
)

STUDENTS = ResourceDescriptor(
    name='students',
    tag='Students',
    noun='student',
    model=models.Student,
    fields={'name': 'name', 'email': 'email'},
    relations={'courses': Relation(attribute='courses', key='Courses', many=True)},
)

TEACHERS = ResourceDescriptor(
    name='teachers',
    tag='Teachers',
    noun='teacher',
    model=models.Teacher,
    fields={'name': 'name', 'department': 'department'},
    relations={'courses': Relation(attribute='courses', key='Courses', many=True)},
)

ALL_RESOURCES = (COURSES, STUDENTS, TEACHERS)
BY_MODEL = {d.model: d for d in ALL_RESOURCES}
