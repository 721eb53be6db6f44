import uuid as uuid_lib
from dataclasses import dataclass, field
from typing import Optional

from config.defaults import GENDER_LABELS, GENDER_UNSET


def generate_uuid() -> str:
    return str(uuid_lib.uuid4())


@dataclass
class Student:
    name: str
    external_id: str = ""
    gender: str = GENDER_UNSET      # "male", "female" or ""
    height: Optional[int] = None    # centimetres
    notes: str = ""
    uuid: str = field(default_factory=generate_uuid)
    seat_id: Optional[str] = None   # cache, recomputed by GridModel.resync()

    @property
    def gender_label(self) -> str:
        return GENDER_LABELS.get(self.gender, "")

    @property
    def is_seated(self) -> bool:
        return self.seat_id is not None

    def to_record(self) -> dict:
        return {
            "uuid": self.uuid,
            "name": self.name,
            "external_id": self.external_id,
            "gender": self.gender,
            "height": self.height,
            "notes": self.notes,
            "seat_id": self.seat_id,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Student":
        return cls(
            name=record.get("name", ""),
            external_id=record.get("external_id", "") or "",
            gender=record.get("gender", GENDER_UNSET) or GENDER_UNSET,
            height=record.get("height"),
            notes=record.get("notes", "") or "",
            uuid=record.get("uuid") or generate_uuid(),
            seat_id=record.get("seat_id"),
        )
